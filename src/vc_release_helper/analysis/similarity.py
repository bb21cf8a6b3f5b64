"""
String similarity helpers used to spot near-duplicate changelog lines.
"""

from __future__ import annotations

from typing import List


def edit_distance(a: str, b: str) -> int:
    """Return the Levenshtein distance between ``a`` and ``b``.

    Insertions, deletions and substitutions each cost 1. The full
    dynamic-programming table is built row by row.
    """
    rows = len(a) + 1
    cols = len(b) + 1
    table: List[List[int]] = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        table[i][0] = i
    for j in range(cols):
        table[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            if a[i - 1] == b[j - 1]:
                table[i][j] = table[i - 1][j - 1]
            else:
                table[i][j] = 1 + min(
                    table[i - 1][j - 1],  # substitution
                    table[i][j - 1],      # insertion
                    table[i - 1][j],      # deletion
                )

    return table[rows - 1][cols - 1]


def similarity(a: str, b: str) -> float:
    """Return a score in ``[0, 1]`` where 1.0 means identical.

    Two empty strings are considered identical.
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - edit_distance(a, b)) / longest
