"""Type definitions for RevisionKit core models."""

from typing import Literal

ChangeType = Literal[
    "unchanged",
    "added",
    "removed",
    "movedHere",
    "movedUp",
    "movedDown",
]

CHANGE_TYPES: tuple[str, ...] = (
    "unchanged",
    "added",
    "removed",
    "movedHere",
    "movedUp",
    "movedDown",
)

# Entries on these sides project back onto the old and new key sequences.
OLD_SIDE_CHANGE_TYPES = frozenset({"unchanged", "removed", "movedUp", "movedDown"})
NEW_SIDE_CHANGE_TYPES = frozenset({"unchanged", "added", "movedHere"})
DEPARTURE_CHANGE_TYPES = frozenset({"movedUp", "movedDown"})

DiffType = Literal["add", "delete", "modify"]

DIFF_TYPES: tuple[str, ...] = ("add", "delete", "modify")

ChangeKind = Literal["normal", "insert", "delete"]

TokenKind = Literal["text", "edit"]
