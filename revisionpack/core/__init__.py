"""Core models and deterministic primitives for RevisionKit."""

from revisionpack.core.canonical import canonical_text, reduce_references
from revisionpack.core.models import Revision, Section
from revisionpack.core.types import CHANGE_TYPES, DIFF_TYPES, ChangeType, DiffType

__all__ = [
    "Revision",
    "Section",
    "CHANGE_TYPES",
    "ChangeType",
    "DIFF_TYPES",
    "DiffType",
    "canonical_text",
    "reduce_references",
]
