"""Comparison engine exceptions."""

from __future__ import annotations

from typing import Sequence


class ComparisonError(Exception):
    """Base class for revision comparison errors."""


class RevisionValidationError(ComparisonError):
    """Input revisions or key sequences violate comparison preconditions."""


class ComparisonConfigError(ComparisonError):
    """Invalid comparison configuration."""


class ComparisonInvariantError(ComparisonError):
    """Section classification reached a state the alignment rules exclude."""

    def __init__(
        self,
        message: str,
        *,
        old_keys: Sequence[str],
        new_keys: Sequence[str],
        old_index: int,
        new_index: int,
    ) -> None:
        super().__init__(
            f"{message} (old_index={old_index} new_index={new_index} "
            f"old_keys={list(old_keys)!r} new_keys={list(new_keys)!r})"
        )
        self.old_keys = tuple(old_keys)
        self.new_keys = tuple(new_keys)
        self.old_index = old_index
        self.new_index = new_index
