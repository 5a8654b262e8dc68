"""Reference section-type plugin implementations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from revisionpack.plugins.base import SectionPlugin


@dataclass(slots=True)
class MarkdownSectionPlugin(SectionPlugin):
    """Diffs markdown sections by their raw text."""

    name: str = "markdown"

    def get_text_representation(self, content: Any) -> str:
        if not isinstance(content, dict):
            return ""
        text = content.get("text")
        return text if isinstance(text, str) else ""


@dataclass(slots=True)
class FieldTextSectionPlugin(SectionPlugin):
    """Diffs sections by selected string fields, one block per field."""

    fields: tuple[str, ...] = ("text",)
    separator: str = "\n\n"
    name: str = "field-text"

    def __post_init__(self) -> None:
        self.fields = tuple(self.fields)
        if not self.fields:
            raise ValueError("FieldTextSectionPlugin requires at least one field")

    def get_text_representation(self, content: Any) -> str:
        if not isinstance(content, dict):
            return ""
        blocks = [
            str(content[field_name])
            for field_name in self.fields
            if content.get(field_name) not in (None, "")
        ]
        return self.separator.join(blocks)
