# fastfind/intersect.py
"""
Set operations over in-memory posting lists.

This module provides:
  - intersect_sorted: linear two-cursor merge of two ascending lists
  - boolean_and: conjunction of many lists, smallest first

Inputs must be ascending and duplicate-free (fastfind.indexer guarantees
this for every posting list it builds). Outputs keep the same property.
"""

from typing import List, Sequence

from profkit import tick


def intersect_sorted(a: Sequence[int], b: Sequence[int]) -> List[int]:
    """
    Intersect two ascending, duplicate-free sequences.
    O(|a| + |b|) time, output size <= min(|a|, |b|).
    """
    res = []
    i = 0
    j = 0
    len1 = len(a)
    len2 = len(b)

    while i < len1 and j < len2:
        val1 = a[i]
        val2 = b[j]

        if val1 == val2:
            res.append(val1)
            i += 1
            j += 1
        elif val1 < val2:
            i += 1
        else:
            j += 1
    return res


def boolean_and(lists: Sequence[Sequence[int]]) -> List[int]:
    """
    AND over multiple posting lists.
    Strategy:
      - Order lists by length (shortest first); each pairwise merge is then
        bounded by the running result, which can only shrink.
      - Stop as soon as the running result is empty.
    """
    if not lists:
        return []

    ordered = sorted(lists, key=len)
    result = list(ordered[0])
    for other in ordered[1:]:
        if not result:
            break
        tick("intersections")
        result = intersect_sorted(result, other)
    return result
