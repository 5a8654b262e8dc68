"""In-memory section-type plugin registry."""

from __future__ import annotations

from dataclasses import dataclass, field

from revisionpack.plugins.exceptions import PluginConfigError


@dataclass(slots=True)
class SectionPluginRegistry:
    """Resolves section types to registered plugins."""

    plugins: dict[str, object] = field(default_factory=dict)

    def register(self, section_type: str, plugin: object, *, replace: bool = False) -> None:
        if not isinstance(section_type, str) or not section_type.strip():
            raise PluginConfigError("Plugin section type must be a non-empty string.")
        if section_type in self.plugins and not replace:
            raise PluginConfigError(f"Plugin already registered for section type '{section_type}'.")
        self.plugins[section_type] = plugin

    def resolve(self, section_type: str) -> object | None:
        return self.plugins.get(section_type)

    def section_types(self) -> list[str]:
        return sorted(self.plugins.keys())

