"""Line-level text diffs with full context and inline edit tokens."""

from __future__ import annotations

from difflib import SequenceMatcher
from typing import Callable
import warnings

from diff_match_patch import diff_match_patch

from revisionpack.compare.models import Change, DiffResult, DiffTokens, Hunk, Token
from revisionpack.core.types import DIFF_TYPES, DiffType

TokenErrorCallback = Callable[[Exception], None]


def split_lines(text: str) -> list[str]:
    """Split text on newlines; the empty string has no lines."""
    if not text:
        return []
    return text.split("\n")


def create_diff(
    old_text: str,
    new_text: str,
    diff_type: DiffType = "modify",
    *,
    inline_tokens: bool = True,
    token_timeout: float = 1.0,
    on_token_error: TokenErrorCallback | None = None,
) -> DiffResult:
    """Diff two texts into a single full-context hunk.

    Identical non-empty texts produce a pseudo-hunk of context lines so the
    content still renders in full; two empty texts produce no hunks.
    Inline token failures never propagate: ``tokens`` becomes ``None``.
    """
    if not isinstance(old_text, str) or not isinstance(new_text, str):
        raise TypeError("create_diff expects two strings")
    if diff_type not in DIFF_TYPES:
        raise ValueError(f"Unsupported diff type: {diff_type}")

    if old_text != new_text:
        hunks = _hunks_from_changed_text(old_text, new_text)
    elif old_text:
        hunks = _pseudo_hunks_from_unchanged_text(old_text)
    else:
        hunks = ()

    tokens: DiffTokens | None = None
    if inline_tokens:
        try:
            tokens = tokenize_hunks(hunks, timeout=token_timeout)
        except Exception as error:
            if on_token_error is None:
                warnings.warn(
                    (
                        "RevisionKit degraded comparison: inline tokens unavailable "
                        f"error={error.__class__.__name__}: {error}"
                    ),
                    RuntimeWarning,
                    stacklevel=2,
                )
            else:
                on_token_error(error)

    return DiffResult(type=diff_type, hunks=hunks, tokens=tokens)


def tokenize_hunks(hunks: tuple[Hunk, ...], *, timeout: float = 1.0) -> DiffTokens:
    """Split hunk lines into text/edit tokens for inline highlighting.

    Within each run of deletions followed by insertions, lines are paired by
    position and diffed character-wise; unpaired lines stay plain text.
    """
    matcher = _character_matcher(timeout)
    old_lines: dict[int, tuple[Token, ...]] = {}
    new_lines: dict[int, tuple[Token, ...]] = {}

    for hunk in hunks:
        changes = hunk.changes
        index = 0
        while index < len(changes):
            change = changes[index]
            if change.is_normal:
                old_lines[change.old_line_number] = _plain_tokens(change.content)
                new_lines[change.new_line_number] = _plain_tokens(change.content)
                index += 1
                continue

            deletions: list[Change] = []
            while index < len(changes) and changes[index].is_delete:
                deletions.append(changes[index])
                index += 1
            insertions: list[Change] = []
            while index < len(changes) and changes[index].is_insert:
                insertions.append(changes[index])
                index += 1

            for deletion, insertion in zip(deletions, insertions):
                old_tokens, new_tokens = _edit_tokens(matcher, deletion.content, insertion.content)
                old_lines[deletion.old_line_number] = old_tokens
                new_lines[insertion.new_line_number] = new_tokens
            for deletion in deletions[len(insertions):]:
                old_lines[deletion.old_line_number] = _plain_tokens(deletion.content)
            for insertion in insertions[len(deletions):]:
                new_lines[insertion.new_line_number] = _plain_tokens(insertion.content)

    return DiffTokens(
        old=tuple(tokens for _, tokens in sorted(old_lines.items())),
        new=tuple(tokens for _, tokens in sorted(new_lines.items())),
    )


def _hunks_from_changed_text(old_text: str, new_text: str) -> tuple[Hunk, ...]:
    old_lines = split_lines(old_text)
    new_lines = split_lines(new_text)
    matcher = SequenceMatcher(None, old_lines, new_lines, autojunk=False)

    changes: list[Change] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            for offset in range(i2 - i1):
                changes.append(
                    Change(
                        kind="normal",
                        content=old_lines[i1 + offset],
                        old_line_number=i1 + offset + 1,
                        new_line_number=j1 + offset + 1,
                    )
                )
            continue
        if tag in ("delete", "replace"):
            for index in range(i1, i2):
                changes.append(Change(kind="delete", content=old_lines[index], old_line_number=index + 1))
        if tag in ("insert", "replace"):
            for index in range(j1, j2):
                changes.append(Change(kind="insert", content=new_lines[index], new_line_number=index + 1))

    return (
        Hunk(
            old_start=1 if old_lines else 0,
            old_lines=len(old_lines),
            new_start=1 if new_lines else 0,
            new_lines=len(new_lines),
            changes=tuple(changes),
        ),
    )


def _pseudo_hunks_from_unchanged_text(text: str) -> tuple[Hunk, ...]:
    changes = tuple(
        Change(kind="normal", content=line, old_line_number=index, new_line_number=index)
        for index, line in enumerate(split_lines(text), start=1)
    )
    return (
        Hunk(
            old_start=1,
            old_lines=len(changes),
            new_start=1,
            new_lines=len(changes),
            changes=changes,
        ),
    )


def _character_matcher(timeout: float) -> diff_match_patch:
    matcher = diff_match_patch()
    matcher.Diff_Timeout = timeout
    matcher.Diff_EditCost = 4
    return matcher


def _edit_tokens(
    matcher: diff_match_patch,
    old_line: str,
    new_line: str,
) -> tuple[tuple[Token, ...], tuple[Token, ...]]:
    diffs = matcher.diff_main(old_line, new_line)
    matcher.diff_cleanupSemantic(diffs)

    old_tokens: list[Token] = []
    new_tokens: list[Token] = []
    for op, text in diffs:
        if op == matcher.DIFF_EQUAL:
            old_tokens.append(Token(kind="text", value=text))
            new_tokens.append(Token(kind="text", value=text))
        elif op == matcher.DIFF_DELETE:
            old_tokens.append(Token(kind="edit", value=text))
        elif op == matcher.DIFF_INSERT:
            new_tokens.append(Token(kind="edit", value=text))
    return tuple(old_tokens), tuple(new_tokens)


def _plain_tokens(content: str) -> tuple[Token, ...]:
    if not content:
        return ()
    return (Token(kind="text", value=content),)
