"""Core data models for RevisionKit revisions and sections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from revisionpack.core.exceptions import RevisionValidationError


@dataclass(frozen=True, slots=True)
class Section:
    """A single keyed content block within a revision.

    ``content`` is ``None`` for a soft-deleted section.
    """

    key: str
    type: str
    content: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not self.key:
            raise RevisionValidationError(f"Section key must be a non-empty string: {self.key!r}")
        if not isinstance(self.type, str):
            raise RevisionValidationError(
                f"Section type must be a string (section {self.key!r}): {self.type!r}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "type": self.type,
            "content": self.content,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Section":
        if not isinstance(raw, dict):
            raise RevisionValidationError(f"Section must be an object: {raw!r}")
        if "key" not in raw or "type" not in raw:
            raise RevisionValidationError(
                f"Section requires 'key' and 'type' fields: {sorted(raw.keys())}"
            )
        return cls(key=raw["key"], type=raw["type"], content=raw.get("content"))


@dataclass(frozen=True, slots=True)
class Revision:
    """One immutable version of a document: ordered sections plus metadata."""

    sections: tuple[Section, ...] = ()
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.sections, tuple):
            object.__setattr__(self, "sections", tuple(self.sections))
        if not isinstance(self.metadata, dict):
            raise RevisionValidationError("Revision metadata must be a mapping.")
        if "sections" in self.metadata:
            raise RevisionValidationError("Revision metadata must not contain 'sections'.")

        seen: set[str] = set()
        duplicates: list[str] = []
        for section in self.sections:
            if not isinstance(section, Section):
                raise RevisionValidationError(f"Revision sections must be Section values: {section!r}")
            if section.key in seen:
                duplicates.append(section.key)
            seen.add(section.key)
        if duplicates:
            raise RevisionValidationError(
                f"Duplicate section keys in revision {self.id!r}: {', '.join(sorted(set(duplicates)))}"
            )

    @property
    def id(self) -> str | None:
        for id_key in ("_id", "id"):
            value = self.metadata.get(id_key)
            if value is not None:
                return str(value)
        return None

    def section_keys(self) -> list[str]:
        return [section.key for section in self.sections]

    def sections_by_key(self) -> dict[str, Section]:
        return {section.key: section for section in self.sections}

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.metadata,
            "sections": [section.to_dict() for section in self.sections],
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Revision":
        """Build a revision from a stored document; non-section fields become metadata."""
        if not isinstance(raw, dict):
            raise RevisionValidationError("Revision document must be an object.")
        sections_payload = raw.get("sections", [])
        if not isinstance(sections_payload, list):
            raise RevisionValidationError("Revision key 'sections' must be an array.")
        metadata = {key: value for key, value in raw.items() if key != "sections"}
        return cls(
            sections=tuple(Section.from_dict(section) for section in sections_payload),
            metadata=metadata,
        )
