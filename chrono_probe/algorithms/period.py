"""Fractional period of a string.

The fractional period of ``s`` is the smallest ``p > 0`` such that
``s[i] == s[i + p]`` for every valid ``i`` (``len(s)`` when no shorter
period exists). Three implementations with different complexities:

- period_naive1 -- character by character check of every candidate, O(n^2).
- period_naive2 -- slice comparison of every candidate, O(n^2) with a
                   much smaller constant.
- period_smart  -- border (failure function) computation, O(n).
"""

from __future__ import annotations

from chrono_probe.inputs.strings import StringInput


def period_naive1(s: str) -> int:
    n = len(s)
    for p in range(1, n):
        for j in range(n - p):
            if s[j] != s[j + p]:
                break
        else:
            return p
    return n


def period_naive2(s: str) -> int:
    n = len(s)
    for p in range(1, n):
        if s[: n - p] == s[p:]:
            return p
    return n


def period_smart(s: str) -> int:
    """Period as ``len(s) - longest proper border of s``."""
    n = len(s)
    if n == 0:
        return 0
    # border[i]: length of the longest proper border of s[: i + 1]
    border = [0] * n
    for i in range(1, n):
        x = border[i - 1]
        while x > 0 and s[x] != s[i]:
            x = border[x - 1]
        if s[x] == s[i]:
            x += 1
        border[i] = x
    return n - border[n - 1]


def period_naive1_input(value: StringInput) -> int:
    return period_naive1(value.text)


def period_naive2_input(value: StringInput) -> int:
    return period_naive2(value.text)


def period_smart_input(value: StringInput) -> int:
    return period_smart(value.text)
