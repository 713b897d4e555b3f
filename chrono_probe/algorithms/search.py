"""Searching a sorted vector."""

from __future__ import annotations

from typing import List, Optional

from chrono_probe.inputs.vectors import SearchInput


def linear_search(v: List[int], target: int) -> Optional[int]:
    for i, value in enumerate(v):
        if value == target:
            return i
    return None


def binary_search(v: List[int], target: int) -> Optional[int]:
    """Index of ``target`` in the sorted ``v`` or None."""
    low, high = 0, len(v) - 1
    while low <= high:
        mid = (low + high) // 2
        if v[mid] == target:
            return mid
        if v[mid] < target:
            low = mid + 1
        else:
            high = mid - 1
    return None


def linear_search_input(value: SearchInput) -> Optional[int]:
    return linear_search(value.vector, value.target)


def binary_search_input(value: SearchInput) -> Optional[int]:
    return binary_search(value.vector, value.target)
