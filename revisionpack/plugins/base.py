"""Versioned section-type plugin interfaces."""

from __future__ import annotations

from typing import Any, Protocol

PLUGIN_API_VERSION = "1.0"
PLUGIN_CONFIG_VERSION = 1
PLUGIN_CONFIG_ENV_VAR = "REVISIONKIT_PLUGIN_CONFIG"


class PluginResolver(Protocol):
    """Maps a section type to the plugin that interprets its content."""

    def resolve(self, section_type: str) -> object | None:
        """Return the plugin for ``section_type`` or ``None`` when unregistered."""


class TextRepresentationCapability(Protocol):
    """Optional plugin capability: canonical text of section content for diffing."""

    def get_text_representation(self, content: Any) -> str | None:
        """Render structured section content as text."""


class SectionPlugin:
    """Base section-type plugin (API v1.x).

    Plugins are used by capability: implement ``get_text_representation`` to
    control how content is diffed. Without it, content is serialized
    generically.
    """

    api_version = PLUGIN_API_VERSION
    name = "section-plugin"


def supports_text_representation(plugin: object | None) -> bool:
    return plugin is not None and callable(getattr(plugin, "get_text_representation", None))
