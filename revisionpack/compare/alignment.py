"""Longest-common-subsequence alignment of section key sequences."""

from __future__ import annotations

from typing import Sequence


def longest_common_subsequence(left: Sequence[str], right: Sequence[str]) -> list[str]:
    """Return the LCS of two key sequences.

    Uses the O(n*m) dynamic programming table over suffixes and walks it from
    the front, preferring to advance ``left`` on ties, so the earliest match
    wins and the result is deterministic for the same inputs.
    """
    rows = len(left)
    cols = len(right)
    # lengths[i][j] is the LCS length of left[i:] and right[j:].
    lengths = [[0] * (cols + 1) for _ in range(rows + 1)]
    for i in range(rows - 1, -1, -1):
        row = lengths[i]
        below = lengths[i + 1]
        for j in range(cols - 1, -1, -1):
            if left[i] == right[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = max(below[j], row[j + 1])

    result: list[str] = []
    i = 0
    j = 0
    while i < rows and j < cols:
        if left[i] == right[j]:
            result.append(left[i])
            i += 1
            j += 1
        elif lengths[i + 1][j] >= lengths[i][j + 1]:
            i += 1
        else:
            j += 1
    return result


def find_moved_keys(old_keys: Sequence[str], new_keys: Sequence[str]) -> set[str]:
    """Keys common to both sequences whose relative order changed."""
    old_key_set = set(old_keys)
    new_key_set = set(new_keys)
    common_in_old_order = [key for key in old_keys if key in new_key_set]
    common_in_new_order = [key for key in new_keys if key in old_key_set]

    stationary = set(longest_common_subsequence(common_in_old_order, common_in_new_order))
    return {key for key in common_in_new_order if key not in stationary}
