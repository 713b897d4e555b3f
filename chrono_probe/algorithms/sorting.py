"""In-place sorting algorithms (mutating: measured with measure_mut)."""

from __future__ import annotations

from typing import List

from chrono_probe.inputs.vectors import VectorInput


def merge_sort(v: List[int]) -> None:
    """Top-down merge sort, writes the result back into ``v``."""
    n = len(v)
    if n <= 1:
        return
    mid = n // 2
    left = v[:mid]
    right = v[mid:]
    merge_sort(left)
    merge_sort(right)
    i = j = k = 0
    while i < len(left) and j < len(right):
        if left[i] <= right[j]:
            v[k] = left[i]
            i += 1
        else:
            v[k] = right[j]
            j += 1
        k += 1
    while i < len(left):
        v[k] = left[i]
        i += 1
        k += 1
    while j < len(right):
        v[k] = right[j]
        j += 1
        k += 1


def quick_sort(v: List[int]) -> None:
    """Quick sort with Lomuto partitioning (last element as pivot).

    Recurses into the smaller part and loops over the larger one so the
    recursion depth stays logarithmic.
    """
    low, high = 0, len(v) - 1
    _quick_sort(v, low, high)


def _quick_sort(v: List[int], low: int, high: int) -> None:
    while low < high:
        p = _partition(v, low, high)
        if p - low < high - p:
            _quick_sort(v, low, p - 1)
            low = p + 1
        else:
            _quick_sort(v, p + 1, high)
            high = p - 1


def _partition(v: List[int], low: int, high: int) -> int:
    pivot = v[high]
    i = low
    for j in range(low, high):
        if v[j] < pivot:
            v[i], v[j] = v[j], v[i]
            i += 1
    v[i], v[high] = v[high], v[i]
    return i


def merge_sort_input(value: VectorInput) -> None:
    merge_sort(value.values)


def quick_sort_input(value: VectorInput) -> None:
    quick_sort(value.values)
