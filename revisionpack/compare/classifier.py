"""Two-pointer classification of section key sequences into display order."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from revisionpack.compare.alignment import find_moved_keys
from revisionpack.compare.models import ClassifiedEntry
from revisionpack.core.exceptions import ComparisonInvariantError, RevisionValidationError


@dataclass(slots=True)
class _WalkState:
    old_index: int = 0
    new_index: int = 0
    processed: set[str] = field(default_factory=set)
    entries: list[ClassifiedEntry] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class _KeySets:
    old: frozenset[str]
    new: frozenset[str]
    moved: frozenset[str]


def classify_sections(
    old_keys: Sequence[str],
    new_keys: Sequence[str],
) -> list[ClassifiedEntry]:
    """Interleave old and new section keys with their change types.

    Every old and new key is covered. Common keys that kept their relative
    order appear once as ``unchanged``; moved keys appear twice, once as a
    departure (``movedUp``/``movedDown``) and once as ``movedHere``.
    """
    old = _validated_keys(old_keys, side="old")
    new = _validated_keys(new_keys, side="new")
    key_sets = _KeySets(
        old=frozenset(old),
        new=frozenset(new),
        moved=frozenset(find_moved_keys(old, new)),
    )

    state = _WalkState()
    while state.old_index < len(old) or state.new_index < len(new):
        _step(state, old, new, key_sets)
    return state.entries


def _step(state: _WalkState, old: list[str], new: list[str], key_sets: _KeySets) -> None:
    old_key = old[state.old_index] if state.old_index < len(old) else None
    new_key = new[state.new_index] if state.new_index < len(new) else None

    if old_key is not None and old_key == new_key:
        _emit(state, old_key, "unchanged")
        state.old_index += 1
        state.new_index += 1
    elif new_key is not None and new_key not in key_sets.old:
        _emit(state, new_key, "added")
        state.new_index += 1
    elif old_key is not None and old_key not in key_sets.new:
        _emit(state, old_key, "removed")
        state.old_index += 1
    elif new_key is not None and new_key in key_sets.moved:
        _emit(state, new_key, "movedHere")
        state.new_index += 1
    elif old_key is not None and old_key in key_sets.moved:
        # Arrival already emitted means the section travelled towards the front.
        _emit(state, old_key, "movedUp" if old_key in state.processed else "movedDown")
        state.old_index += 1
    else:
        raise ComparisonInvariantError(
            "Unexpected case while classifying section changes",
            old_keys=old,
            new_keys=new,
            old_index=state.old_index,
            new_index=state.new_index,
        )


def _emit(state: _WalkState, key: str, change_type: str) -> None:
    state.entries.append(ClassifiedEntry(key, change_type))
    state.processed.add(key)


def _validated_keys(keys: Sequence[str], *, side: str) -> list[str]:
    if keys is None or isinstance(keys, (str, bytes)):
        raise RevisionValidationError(f"{side} section keys must be a sequence of strings.")

    normalized = list(keys)
    seen: set[str] = set()
    duplicates: set[str] = set()
    for key in normalized:
        if not isinstance(key, str):
            raise RevisionValidationError(f"{side} section key must be a string: {key!r}")
        if key in seen:
            duplicates.add(key)
        seen.add(key)
    if duplicates:
        raise RevisionValidationError(
            f"Duplicate {side} section keys: {', '.join(sorted(duplicates))}"
        )
    return normalized
