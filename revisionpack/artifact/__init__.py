"""Revision file subsystem for RevisionKit."""

from revisionpack.artifact.exceptions import ArtifactError, ArtifactValidationError
from revisionpack.artifact.io import (
    read_revision,
    read_revision_document,
    write_revision,
)

__all__ = [
    "ArtifactError",
    "ArtifactValidationError",
    "read_revision",
    "read_revision_document",
    "write_revision",
]
