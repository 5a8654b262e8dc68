"""Revision file read/write utilities for `.json` and zstd-compressed `.zst` files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import zstandard as zstd

from revisionpack.artifact.exceptions import ArtifactError, ArtifactValidationError
from revisionpack.core.exceptions import RevisionValidationError
from revisionpack.core.models import Revision

COMPRESSED_SUFFIX = ".zst"


def is_compressed_path(path: str | Path) -> bool:
    return Path(path).suffix.lower() == COMPRESSED_SUFFIX


def read_revision_document(path: str | Path) -> dict[str, Any]:
    """Read the raw revision document stored at ``path``."""
    revision_path = Path(path)
    raw_bytes = revision_path.read_bytes()

    if is_compressed_path(revision_path):
        try:
            raw_bytes = zstd.ZstdDecompressor().decompressobj().decompress(raw_bytes)
        except zstd.ZstdError as error:
            raise ArtifactError(f"Invalid zstd revision file ({revision_path}): {error}") from error

    try:
        document = json.loads(raw_bytes.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as error:
        raise ArtifactValidationError(f"Invalid revision JSON ({revision_path}): {error}") from error

    if not isinstance(document, dict):
        raise ArtifactValidationError(f"Revision file must contain a JSON object ({revision_path}).")
    if not isinstance(document.get("sections"), list):
        raise ArtifactValidationError(
            f"Revision file key 'sections' must be a JSON array ({revision_path})."
        )
    return document


def read_revision(path: str | Path) -> Revision:
    """Load a revision from a `.json` or `.json.zst` file."""
    document = read_revision_document(path)
    try:
        return Revision.from_dict(document)
    except RevisionValidationError as error:
        raise ArtifactValidationError(f"Invalid revision ({Path(path)}): {error}") from error


def write_revision(revision: Revision, path: str | Path) -> Path:
    """Write a revision as stable pretty JSON, compressed when the suffix is `.zst`.

    Content is stored unchanged; only key order and indentation are normalized.
    """
    revision_path = Path(path)
    try:
        rendered = json.dumps(
            revision.to_dict(),
            ensure_ascii=True,
            indent=2,
            sort_keys=True,
        ) + "\n"
    except (TypeError, ValueError) as error:
        raise ArtifactValidationError(
            f"Revision {revision.id!r} is not JSON serializable: {error}"
        ) from error
    payload = rendered.encode("utf-8")
    if is_compressed_path(revision_path):
        payload = zstd.ZstdCompressor().compress(payload)

    revision_path.parent.mkdir(parents=True, exist_ok=True)
    revision_path.write_bytes(payload)
    return revision_path
