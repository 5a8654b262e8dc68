"""Active section plugin registry: context override, env config, reload on edit."""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
import os
from pathlib import Path
from typing import Iterator

from revisionpack.plugins.base import PLUGIN_CONFIG_ENV_VAR
from revisionpack.plugins.loader import load_plugin_registry_from_file
from revisionpack.plugins.registry import SectionPluginRegistry

_ACTIVE_PLUGIN_REGISTRY: ContextVar[SectionPluginRegistry | None] = ContextVar(
    "revisionpack_active_plugin_registry",
    default=None,
)


@dataclass(slots=True)
class _EnvRegistryCache:
    """Registry loaded from the env config, valid while the file is unchanged."""

    config_path: Path | None = None
    mtime_ns: int | None = None
    registry: SectionPluginRegistry | None = None

    def lookup(self, config_path: Path) -> SectionPluginRegistry | None:
        if self.registry is None or self.config_path != config_path:
            return None
        if config_path.stat().st_mtime_ns != self.mtime_ns:
            return None
        return self.registry

    def load(self, config_path: Path) -> SectionPluginRegistry:
        mtime_ns = config_path.stat().st_mtime_ns
        registry = load_plugin_registry_from_file(config_path)
        self.config_path = config_path
        self.mtime_ns = mtime_ns
        self.registry = registry
        return registry

    def clear(self) -> None:
        self.config_path = None
        self.mtime_ns = None
        self.registry = None


_ENV_CACHE = _EnvRegistryCache()


def get_active_plugin_registry() -> SectionPluginRegistry:
    """Resolve the registry used when a comparison is given no resolver.

    A registry activated with :func:`use_plugin_registry` wins. Otherwise the
    file named by ``REVISIONKIT_PLUGIN_CONFIG`` is loaded and cached until the
    path or the file's modification time changes. Without either, a fresh
    empty registry is returned so registrations never leak between callers.
    """
    registry = _ACTIVE_PLUGIN_REGISTRY.get()
    if registry is not None:
        return registry

    raw_path = os.getenv(PLUGIN_CONFIG_ENV_VAR, "").strip()
    if not raw_path:
        return SectionPluginRegistry()

    config_path = Path(raw_path).expanduser().resolve()
    cached = _ENV_CACHE.lookup(config_path)
    if cached is not None:
        return cached
    return _ENV_CACHE.load(config_path)


@contextmanager
def use_plugin_registry(
    plugins: SectionPluginRegistry | Mapping[str, object],
) -> Iterator[SectionPluginRegistry]:
    """Activate a registry, or a ``section_type -> plugin`` mapping, for this context."""
    if isinstance(plugins, SectionPluginRegistry):
        registry = plugins
    else:
        registry = SectionPluginRegistry()
        for section_type, plugin in plugins.items():
            registry.register(section_type, plugin)

    token = _ACTIVE_PLUGIN_REGISTRY.set(registry)
    try:
        yield registry
    finally:
        _ACTIVE_PLUGIN_REGISTRY.reset(token)


@contextmanager
def use_plugins_from_config(path: str | Path) -> Iterator[SectionPluginRegistry]:
    """Load a plugin config file and activate its registry for this context."""
    with use_plugin_registry(load_plugin_registry_from_file(path)) as registry:
        yield registry


def reset_plugin_runtime_cache() -> None:
    """Forget the registry loaded from ``REVISIONKIT_PLUGIN_CONFIG``."""
    _ENV_CACHE.clear()
