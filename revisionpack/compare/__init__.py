"""Comparison subsystem for RevisionKit."""

from revisionpack.compare.alignment import find_moved_keys, longest_common_subsequence
from revisionpack.compare.classifier import classify_sections
from revisionpack.compare.engine import (
    ComparisonConfig,
    compare_revisions,
    compare_revisions_async,
    link_moved_sections,
)
from revisionpack.compare.formatting import (
    render_comparison,
    render_comparison_summary,
    render_diff_lines,
)
from revisionpack.compare.models import (
    Change,
    ClassifiedEntry,
    ComparisonDiagnostic,
    DiffResult,
    DiffTokens,
    Hunk,
    MetadataComparison,
    RevisionComparison,
    SectionComparison,
    Token,
)
from revisionpack.compare.text_diff import create_diff, split_lines, tokenize_hunks
from revisionpack.core.exceptions import (
    ComparisonConfigError,
    ComparisonError,
    ComparisonInvariantError,
    RevisionValidationError,
)

__all__ = [
    "ComparisonError",
    "ComparisonConfigError",
    "ComparisonInvariantError",
    "RevisionValidationError",
    "ClassifiedEntry",
    "Change",
    "Hunk",
    "Token",
    "DiffTokens",
    "DiffResult",
    "ComparisonDiagnostic",
    "SectionComparison",
    "MetadataComparison",
    "RevisionComparison",
    "ComparisonConfig",
    "longest_common_subsequence",
    "find_moved_keys",
    "classify_sections",
    "split_lines",
    "create_diff",
    "tokenize_hunks",
    "compare_revisions",
    "compare_revisions_async",
    "link_moved_sections",
    "render_comparison",
    "render_comparison_summary",
    "render_diff_lines",
]
