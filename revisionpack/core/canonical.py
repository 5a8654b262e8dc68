"""Deterministic text serialization helpers for RevisionKit."""

from __future__ import annotations

import json
from typing import Any

REFERENCE_FIELD_NAMES = frozenset(
    {
        "createdBy",
        "created_by",
        "author",
        "owner",
        "allowedEditors",
        "allowed_editors",
        "accreditedEditors",
        "accredited_editors",
    }
)

REFERENCE_ID_KEYS = ("_id", "id")


def canonical_text(value: Any) -> str:
    """Serialize a value to stable, line-oriented JSON for text diffing.

    Mapping keys are sorted; values are written as-is so every content edit
    stays visible in the diff. NaN and infinity raise ``ValueError``.
    """
    return json.dumps(
        value,
        ensure_ascii=False,
        indent=2,
        sort_keys=True,
        allow_nan=False,
        default=str,
    )


def reduce_references(
    value: Any,
    *,
    reference_fields: frozenset[str] = REFERENCE_FIELD_NAMES,
) -> Any:
    """Replace embedded object references with their identifier.

    A field listed in ``reference_fields`` holding a mapping with an ``_id``
    (or ``id``) is reduced to that identifier; lists under such a field are
    reduced element-wise. Other values are copied unchanged.
    """
    return _reduce(value, field_name=None, reference_fields=reference_fields)


def _reduce(value: Any, *, field_name: str | None, reference_fields: frozenset[str]) -> Any:
    if field_name is not None and field_name in reference_fields:
        if isinstance(value, (list, tuple)):
            return [_reference_id(item) for item in value]
        return _reference_id(value)

    if isinstance(value, dict):
        return {
            key: _reduce(item, field_name=str(key), reference_fields=reference_fields)
            for key, item in value.items()
        }

    if isinstance(value, (list, tuple)):
        return [
            _reduce(item, field_name=None, reference_fields=reference_fields) for item in value
        ]

    return value


def _reference_id(value: Any) -> Any:
    if isinstance(value, dict):
        for id_key in REFERENCE_ID_KEYS:
            if id_key in value:
                return value[id_key]
    return value
