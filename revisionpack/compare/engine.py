"""Revision comparison builder: classification, text resolution, diffs, move links."""

from __future__ import annotations

from dataclasses import dataclass, field
import inspect
from typing import Any
import warnings

from revisionpack.compare.classifier import classify_sections
from revisionpack.compare.models import (
    ComparisonDiagnostic,
    DiagnosticStage,
    DiffResult,
    MetadataComparison,
    RevisionComparison,
    SectionComparison,
)
from revisionpack.compare.text_diff import create_diff
from revisionpack.core.canonical import REFERENCE_FIELD_NAMES, canonical_text, reduce_references
from revisionpack.core.exceptions import ComparisonConfigError, RevisionValidationError
from revisionpack.core.models import Revision, Section
from revisionpack.core.types import DEPARTURE_CHANGE_TYPES, DiffType
from revisionpack.plugins import (
    PluginResolver,
    get_active_plugin_registry,
    supports_text_representation,
)


@dataclass(slots=True)
class ComparisonConfig:
    """Configuration for revision comparison output."""

    inline_tokens: bool = True
    token_timeout: float = 1.0
    ignored_metadata_fields: tuple[str, ...] = ()
    reference_fields: frozenset[str] = REFERENCE_FIELD_NAMES

    def __post_init__(self) -> None:
        if not isinstance(self.inline_tokens, bool):
            raise ComparisonConfigError("inline_tokens must be a boolean")
        if isinstance(self.token_timeout, bool) or not isinstance(self.token_timeout, (int, float)):
            raise ComparisonConfigError("token_timeout must be a number")
        if self.token_timeout < 0:
            raise ComparisonConfigError("token_timeout must be >= 0")
        self.token_timeout = float(self.token_timeout)
        self.ignored_metadata_fields = tuple(self.ignored_metadata_fields)
        self.reference_fields = frozenset(self.reference_fields)


@dataclass(slots=True)
class _BuildContext:
    resolver: PluginResolver
    config: ComparisonConfig
    diagnostics: list[ComparisonDiagnostic] = field(default_factory=list)
    plugins: dict[str, object | None] = field(default_factory=dict)

    def record(
        self,
        stage: DiagnosticStage,
        error: Exception,
        *,
        section_key: str | None = None,
        section_type: str | None = None,
    ) -> None:
        diagnostic = ComparisonDiagnostic(
            stage=stage,
            error_type=error.__class__.__name__,
            message=str(error),
            section_key=section_key,
            section_type=section_type,
        )
        self.diagnostics.append(diagnostic)
        warnings.warn(
            (
                f"RevisionKit degraded comparison: stage={diagnostic.stage} "
                f"section={diagnostic.section_key or '<metadata>'} "
                f"type={diagnostic.section_type or '<none>'} "
                f"error={diagnostic.error_type}: {diagnostic.message}"
            ),
            RuntimeWarning,
            stacklevel=2,
        )


def compare_revisions(
    old_revision: Revision,
    new_revision: Revision,
    *,
    resolver: PluginResolver | None = None,
    config: ComparisonConfig | None = None,
) -> RevisionComparison:
    """Compare two revisions section by section.

    Sections are classified in display order, each entry's old/new content is
    rendered to text through its section-type plugin (or generic
    serialization), diffed, and moved pairs are linked through ``target_key``.
    """
    _validate_revisions(old_revision, new_revision)
    context = _BuildContext(
        resolver=resolver if resolver is not None else get_active_plugin_registry(),
        config=config or ComparisonConfig(),
    )

    classified = classify_sections(old_revision.section_keys(), new_revision.section_keys())

    metadata = MetadataComparison(
        diff=_create_diff(
            _metadata_text(old_revision, context),
            _metadata_text(new_revision, context),
            "modify",
            context,
        )
    )

    old_sections = old_revision.sections_by_key()
    new_sections = new_revision.sections_by_key()
    sections: list[SectionComparison] = []
    for section_key, change_type in classified:
        old_section = None if change_type == "added" else old_sections[section_key]
        new_section = None if change_type == "removed" else new_sections[section_key]
        section_type = old_section.type if old_section is not None else new_section.type
        plugin = _resolve_plugin(section_type, section_key, context)

        diff = _create_diff(
            _section_text(old_section, plugin, context),
            _section_text(new_section, plugin, context),
            _diff_type_for(change_type),
            context,
            section_key=section_key,
            section_type=section_type,
        )
        sections.append(
            SectionComparison(
                key=f"{section_key}|{change_type}",
                section_key=section_key,
                change_type=change_type,
                diff=diff,
                section_type=section_type,
                old_section=old_section,
                new_section=new_section,
            )
        )

    link_moved_sections(sections)

    return RevisionComparison(
        old_revision=old_revision,
        new_revision=new_revision,
        metadata=metadata,
        sections=sections,
        diagnostics=context.diagnostics,
    )


async def compare_revisions_async(
    old_revision: Revision,
    new_revision: Revision,
    *,
    resolver: Any,
    config: ComparisonConfig | None = None,
) -> RevisionComparison:
    """Compare revisions with a resolver whose ``resolve`` may be a coroutine.

    Every distinct section type is resolved once up front, then the
    synchronous builder runs over the pre-resolved plugins.
    """
    _validate_revisions(old_revision, new_revision)

    section_types = sorted(
        {section.type for section in (*old_revision.sections, *new_revision.sections)}
    )
    resolved: dict[str, object | None] = {}
    failures: dict[str, Exception] = {}
    for section_type in section_types:
        try:
            plugin = resolver.resolve(section_type)
            if inspect.isawaitable(plugin):
                plugin = await plugin
        except Exception as error:
            failures[section_type] = error
            plugin = None
        resolved[section_type] = plugin

    return compare_revisions(
        old_revision,
        new_revision,
        resolver=_PreResolvedPlugins(resolved=resolved, failures=failures),
        config=config,
    )


@dataclass(frozen=True, slots=True)
class _PreResolvedPlugins:
    """Plugins resolved ahead of time; recorded failures are raised again on lookup."""

    resolved: dict[str, object | None]
    failures: dict[str, Exception]

    def resolve(self, section_type: str) -> object | None:
        error = self.failures.get(section_type)
        if error is not None:
            raise error
        return self.resolved.get(section_type)


def link_moved_sections(sections: list[SectionComparison]) -> None:
    """Pair each departure entry with the first still-unlinked ``movedHere`` entry.

    With several moved sections in ambiguous order this can pair a departure
    with another section's arrival.
    """
    for section in sections:
        if section.change_type not in DEPARTURE_CHANGE_TYPES:
            continue
        target = next(
            (
                candidate
                for candidate in sections
                if candidate.change_type == "movedHere" and not candidate.target_key
            ),
            None,
        )
        if target is not None:
            section.target_key = target.key
            target.target_key = section.key


def _validate_revisions(old_revision: Revision, new_revision: Revision) -> None:
    for label, revision in (("old", old_revision), ("new", new_revision)):
        if revision is None:
            raise RevisionValidationError(f"{label} revision is required")
        if not isinstance(revision, Revision):
            raise RevisionValidationError(
                f"{label} revision must be a Revision, got {type(revision).__name__}"
            )


def _diff_type_for(change_type: str) -> DiffType:
    if change_type == "added":
        return "add"
    if change_type == "removed":
        return "delete"
    return "modify"


def _create_diff(
    old_text: str,
    new_text: str,
    diff_type: DiffType,
    context: _BuildContext,
    *,
    section_key: str | None = None,
    section_type: str | None = None,
) -> DiffResult:
    def on_token_error(error: Exception) -> None:
        context.record("tokenize", error, section_key=section_key, section_type=section_type)

    return create_diff(
        old_text,
        new_text,
        diff_type,
        inline_tokens=context.config.inline_tokens,
        token_timeout=context.config.token_timeout,
        on_token_error=on_token_error,
    )


def _metadata_text(revision: Revision, context: _BuildContext) -> str:
    metadata = {
        key: value
        for key, value in revision.metadata.items()
        if key not in context.config.ignored_metadata_fields
    }
    reduced = reduce_references(metadata, reference_fields=context.config.reference_fields)
    return _generic_text(reduced, context)


def _resolve_plugin(section_type: str, section_key: str, context: _BuildContext) -> object | None:
    if section_type in context.plugins:
        return context.plugins[section_type]
    try:
        plugin = context.resolver.resolve(section_type)
    except Exception as error:
        context.record("resolve", error, section_key=section_key, section_type=section_type)
        plugin = None
    context.plugins[section_type] = plugin
    return plugin


def _section_text(section: Section | None, plugin: object | None, context: _BuildContext) -> str:
    if section is None or section.content is None:
        return ""

    if not supports_text_representation(plugin):
        return _generic_text(section.content, context, section=section)

    try:
        text = plugin.get_text_representation(section.content)
        if text is None:
            return ""
        if not isinstance(text, str):
            raise TypeError(
                f"get_text_representation returned {type(text).__name__}, expected str"
            )
        return text
    except Exception as error:
        context.record(
            "text_representation",
            error,
            section_key=section.key,
            section_type=section.type,
        )
        return _generic_text(section.content, context, section=section)


def _generic_text(value: Any, context: _BuildContext, *, section: Section | None = None) -> str:
    try:
        return canonical_text(value)
    except (TypeError, ValueError) as error:
        context.record(
            "serialize",
            error,
            section_key=section.key if section is not None else None,
            section_type=section.type if section is not None else None,
        )
        return repr(value)
