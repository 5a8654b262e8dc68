"""Stable public API surface for RevisionKit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from revisionpack import __version__
from revisionpack.artifact import read_revision
from revisionpack.compare import (
    ClassifiedEntry,
    ComparisonConfig,
    DiffResult,
    RevisionComparison,
    SectionComparison,
    classify_sections as _classify_sections,
    compare_revisions,
    compare_revisions_async,
    create_diff,
)
from revisionpack.core import ChangeType, DiffType, Revision, Section
from revisionpack.plugins import PluginResolver, SectionPluginRegistry, load_plugin_registry_from_file

__all__ = [
    "__version__",
    "ChangeType",
    "DiffType",
    "Section",
    "Revision",
    "RevisionComparison",
    "SectionComparison",
    "DiffResult",
    "ComparisonConfig",
    "SectionPluginRegistry",
    "classify_sections",
    "compare",
    "compare_async",
    "compare_files",
    "text_diff",
]


def classify_sections(old_keys: Sequence[str], new_keys: Sequence[str]) -> list[ClassifiedEntry]:
    """Interleave two section key sequences with their change types."""
    return _classify_sections(old_keys, new_keys)


def compare(
    old: Revision | dict[str, Any],
    new: Revision | dict[str, Any],
    *,
    plugins: PluginResolver | None = None,
    config: ComparisonConfig | None = None,
) -> RevisionComparison:
    """Compare two revisions, given as models or stored revision documents."""
    return compare_revisions(
        _coerce_revision(old),
        _coerce_revision(new),
        resolver=plugins,
        config=config,
    )


async def compare_async(
    old: Revision | dict[str, Any],
    new: Revision | dict[str, Any],
    *,
    plugins: Any,
    config: ComparisonConfig | None = None,
) -> RevisionComparison:
    """Compare two revisions with a resolver that may resolve asynchronously."""
    return await compare_revisions_async(
        _coerce_revision(old),
        _coerce_revision(new),
        resolver=plugins,
        config=config,
    )


def compare_files(
    old: str | Path,
    new: str | Path,
    *,
    plugin_config: str | Path | None = None,
    config: ComparisonConfig | None = None,
) -> RevisionComparison:
    """Compare two revision files (`.json` or `.json.zst`)."""
    plugins = load_plugin_registry_from_file(plugin_config) if plugin_config is not None else None
    return compare_revisions(read_revision(old), read_revision(new), resolver=plugins, config=config)


def text_diff(old_text: str, new_text: str, diff_type: DiffType = "modify") -> DiffResult:
    """Full-context line diff of two texts with inline edit tokens."""
    return create_diff(old_text, new_text, diff_type)


def _coerce_revision(value: Revision | dict[str, Any]) -> Revision:
    if isinstance(value, dict):
        return Revision.from_dict(value)
    return value
