"""Versioned plugin configuration loader."""

from __future__ import annotations

import importlib
import inspect
import json
from pathlib import Path
from typing import Any

from revisionpack.plugins.base import PLUGIN_API_VERSION, PLUGIN_CONFIG_VERSION
from revisionpack.plugins.exceptions import PluginConfigError, PluginLoadError
from revisionpack.plugins.registry import SectionPluginRegistry


def load_plugin_registry_from_file(path: str | Path) -> SectionPluginRegistry:
    """Load a section plugin registry from JSON config."""
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise
    except json.JSONDecodeError as error:
        raise PluginConfigError(f"Invalid plugin config JSON ({config_path}): {error}") from error

    return load_plugin_registry(raw, source=str(config_path))


def load_plugin_registry(raw: Any, *, source: str = "<config>") -> SectionPluginRegistry:
    """Build a registry from an already parsed config payload."""
    if not isinstance(raw, dict):
        raise PluginConfigError(f"Plugin config must be a JSON object ({source}).")

    version = raw.get("config_version")
    if version != PLUGIN_CONFIG_VERSION:
        raise PluginConfigError(
            "Unsupported plugin config version "
            f"{version!r}; expected {PLUGIN_CONFIG_VERSION}."
        )

    plugins_payload = raw.get("plugins")
    if not isinstance(plugins_payload, list):
        raise PluginConfigError("Plugin config key 'plugins' must be a JSON array.")

    registry = SectionPluginRegistry()
    for index, payload in enumerate(plugins_payload, start=1):
        loaded = _load_plugin_payload(payload, index=index)
        if loaded is None:
            continue
        section_type, plugin = loaded
        if registry.resolve(section_type) is not None:
            raise PluginConfigError(
                f"Plugin entry #{index} duplicates section type '{section_type}'."
            )
        registry.register(section_type, plugin)

    return registry


def _load_plugin_payload(payload: Any, *, index: int) -> tuple[str, object] | None:
    if not isinstance(payload, dict):
        raise PluginConfigError(f"Plugin entry #{index} must be a JSON object.")

    supported_keys = {"section_type", "entrypoint", "options", "enabled"}
    unknown = sorted(set(payload.keys()) - supported_keys)
    if unknown:
        raise PluginConfigError(
            f"Plugin entry #{index} contains unsupported keys: {', '.join(unknown)}"
        )

    enabled = payload.get("enabled", True)
    if not isinstance(enabled, bool):
        raise PluginConfigError(f"Plugin entry #{index} key 'enabled' must be boolean.")
    if not enabled:
        return None

    section_type = payload.get("section_type")
    if not isinstance(section_type, str) or not section_type.strip():
        raise PluginConfigError(
            f"Plugin entry #{index} key 'section_type' must be a non-empty string."
        )

    entrypoint = payload.get("entrypoint")
    if not isinstance(entrypoint, str) or ":" not in entrypoint:
        raise PluginConfigError(
            f"Plugin entry #{index} key 'entrypoint' must be 'module:attribute'."
        )

    options = payload.get("options", {})
    if not isinstance(options, dict):
        raise PluginConfigError(f"Plugin entry #{index} key 'options' must be a JSON object.")

    target = _import_entrypoint(entrypoint, index=index)
    plugin = _instantiate_plugin(target, entrypoint=entrypoint, options=options, index=index)
    _validate_api_version(plugin, entrypoint=entrypoint, index=index)
    return section_type.strip(), plugin


def _import_entrypoint(entrypoint: str, *, index: int) -> object:
    module_name, _, attribute = entrypoint.partition(":")
    try:
        module = importlib.import_module(module_name)
    except Exception as error:
        raise PluginLoadError(
            f"Plugin entry #{index} failed to import module '{module_name}': {error}"
        ) from error

    try:
        return getattr(module, attribute)
    except AttributeError as error:
        raise PluginLoadError(
            f"Plugin entry #{index} could not find attribute '{attribute}' in '{module_name}'."
        ) from error


def _instantiate_plugin(
    target: object,
    *,
    entrypoint: str,
    options: dict[str, Any],
    index: int,
) -> object:
    if inspect.isclass(target):
        try:
            return target(**options)
        except Exception as error:
            raise PluginLoadError(
                f"Plugin entry #{index} failed to instantiate '{entrypoint}' "
                f"with options {sorted(options.keys())}: {error}"
            ) from error

    if options:
        raise PluginLoadError(
            f"Plugin entry #{index} uses non-class '{entrypoint}' and cannot accept options."
        )
    return target


def _validate_api_version(plugin: object, *, entrypoint: str, index: int) -> None:
    version = str(getattr(plugin, "api_version", PLUGIN_API_VERSION))
    if not _is_supported_api_version(version):
        raise PluginLoadError(
            f"Plugin entry #{index} '{entrypoint}' declares unsupported api_version "
            f"{version!r}; supported major version is {PLUGIN_API_VERSION.split('.', 1)[0]}."
        )


def _is_supported_api_version(version: str) -> bool:
    expected_major = PLUGIN_API_VERSION.split(".", 1)[0]
    return version.split(".", 1)[0] == expected_major
