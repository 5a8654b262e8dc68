"""Revision file exceptions."""


class ArtifactError(Exception):
    """Base class for revision file errors."""


class ArtifactValidationError(ArtifactError):
    """Revision file content failed validation."""
