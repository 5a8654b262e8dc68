"""Data models for section classification and revision comparison results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, NamedTuple

from revisionpack.core.models import Revision, Section
from revisionpack.core.types import CHANGE_TYPES, ChangeKind, ChangeType, DiffType, TokenKind

DiagnosticStage = Literal["resolve", "text_representation", "serialize", "tokenize"]


class ClassifiedEntry(NamedTuple):
    """One row of the interleaved section classification."""

    key: str
    change_type: ChangeType


@dataclass(frozen=True, slots=True)
class Change:
    """A single line inside a hunk."""

    kind: ChangeKind
    content: str
    old_line_number: int | None = None
    new_line_number: int | None = None

    @property
    def is_normal(self) -> bool:
        return self.kind == "normal"

    @property
    def is_insert(self) -> bool:
        return self.kind == "insert"

    @property
    def is_delete(self) -> bool:
        return self.kind == "delete"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "content": self.content,
            "old_line_number": self.old_line_number,
            "new_line_number": self.new_line_number,
        }


@dataclass(frozen=True, slots=True)
class Hunk:
    """Contiguous group of diff lines with old/new line ranges."""

    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    changes: tuple[Change, ...] = ()

    @property
    def content(self) -> str:
        return f"@@ -{self.old_start},{self.old_lines} +{self.new_start},{self.new_lines} @@"

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": self.content,
            "old_start": self.old_start,
            "old_lines": self.old_lines,
            "new_start": self.new_start,
            "new_lines": self.new_lines,
            "changes": [change.to_dict() for change in self.changes],
        }


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "value": self.value}


@dataclass(frozen=True, slots=True)
class DiffTokens:
    """Inline highlight tokens; list index is line number minus one."""

    old: tuple[tuple[Token, ...], ...] = ()
    new: tuple[tuple[Token, ...], ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "old": [[token.to_dict() for token in line] for line in self.old],
            "new": [[token.to_dict() for token in line] for line in self.new],
        }


@dataclass(frozen=True, slots=True)
class DiffResult:
    """Line-level diff of two text representations."""

    type: DiffType
    hunks: tuple[Hunk, ...] = ()
    tokens: DiffTokens | None = None

    @property
    def has_changes(self) -> bool:
        return any(
            not change.is_normal for hunk in self.hunks for change in hunk.changes
        )

    def old_text(self) -> str:
        return "\n".join(
            change.content
            for hunk in self.hunks
            for change in hunk.changes
            if not change.is_insert
        )

    def new_text(self) -> str:
        return "\n".join(
            change.content
            for hunk in self.hunks
            for change in hunk.changes
            if not change.is_delete
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "hunks": [hunk.to_dict() for hunk in self.hunks],
            "tokens": self.tokens.to_dict() if self.tokens is not None else None,
        }


@dataclass(frozen=True, slots=True)
class ComparisonDiagnostic:
    """A recovered failure that degraded one part of a comparison."""

    stage: DiagnosticStage
    error_type: str
    message: str
    section_key: str | None = None
    section_type: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {
            "stage": self.stage,
            "error_type": self.error_type,
            "message": self.message,
            "section_key": self.section_key,
            "section_type": self.section_type,
        }


@dataclass(slots=True)
class SectionComparison:
    """Comparison of one classified section entry."""

    key: str
    section_key: str
    change_type: ChangeType
    diff: DiffResult
    section_type: str
    old_section: Section | None = None
    new_section: Section | None = None
    target_key: str = ""

    @property
    def is_move(self) -> bool:
        return self.change_type in ("movedHere", "movedUp", "movedDown")

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "section_key": self.section_key,
            "target_key": self.target_key,
            "change_type": self.change_type,
            "section_type": self.section_type,
            "old_section": self.old_section.to_dict() if self.old_section is not None else None,
            "new_section": self.new_section.to_dict() if self.new_section is not None else None,
            "diff": self.diff.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class MetadataComparison:
    diff: DiffResult
    key: str = "metadata"

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "diff": self.diff.to_dict()}


@dataclass(slots=True)
class RevisionComparison:
    """Structured comparison of two revisions in display order."""

    old_revision: Revision
    new_revision: Revision
    metadata: MetadataComparison
    sections: list[SectionComparison]
    diagnostics: list[ComparisonDiagnostic] = field(default_factory=list)

    @property
    def identical(self) -> bool:
        return not self.metadata.diff.has_changes and all(
            section.change_type == "unchanged" and not section.diff.has_changes
            for section in self.sections
        )

    def find_section(self, key: str) -> SectionComparison | None:
        for section in self.sections:
            if section.key == key:
                return section
        return None

    def summary(self) -> dict[str, int]:
        counts = {change_type: 0 for change_type in CHANGE_TYPES}
        for section in self.sections:
            counts[section.change_type] += 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        return {
            "old_revision_id": self.old_revision.id,
            "new_revision_id": self.new_revision.id,
            "identical": self.identical,
            "summary": self.summary(),
            "metadata": self.metadata.to_dict(),
            "sections": [section.to_dict() for section in self.sections],
            "diagnostics": [diagnostic.to_dict() for diagnostic in self.diagnostics],
        }
