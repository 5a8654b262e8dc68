"""Plugin subsystem for RevisionKit section types."""

from revisionpack.plugins.base import (
    PLUGIN_API_VERSION,
    PLUGIN_CONFIG_ENV_VAR,
    PLUGIN_CONFIG_VERSION,
    PluginResolver,
    SectionPlugin,
    TextRepresentationCapability,
    supports_text_representation,
)
from revisionpack.plugins.exceptions import PluginConfigError, PluginError, PluginLoadError
from revisionpack.plugins.loader import load_plugin_registry, load_plugin_registry_from_file
from revisionpack.plugins.reference import FieldTextSectionPlugin, MarkdownSectionPlugin
from revisionpack.plugins.registry import SectionPluginRegistry
from revisionpack.plugins.runtime import (
    get_active_plugin_registry,
    reset_plugin_runtime_cache,
    use_plugin_registry,
    use_plugins_from_config,
)

__all__ = [
    "PLUGIN_API_VERSION",
    "PLUGIN_CONFIG_VERSION",
    "PLUGIN_CONFIG_ENV_VAR",
    "PluginError",
    "PluginConfigError",
    "PluginLoadError",
    "PluginResolver",
    "TextRepresentationCapability",
    "SectionPlugin",
    "supports_text_representation",
    "SectionPluginRegistry",
    "MarkdownSectionPlugin",
    "FieldTextSectionPlugin",
    "load_plugin_registry",
    "load_plugin_registry_from_file",
    "get_active_plugin_registry",
    "use_plugin_registry",
    "use_plugins_from_config",
    "reset_plugin_runtime_cache",
]
