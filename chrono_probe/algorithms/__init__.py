"""Example algorithms and the registry used by configuration files.

Contains:
- period finding on strings (period.py)
- in-place sorting of integer vectors (sorting.py)
- searching sorted vectors (search.py)
"""

from chrono_probe.algorithms.period import (
    period_naive1_input,
    period_naive2_input,
    period_smart_input,
)
from chrono_probe.algorithms.search import binary_search_input, linear_search_input
from chrono_probe.algorithms.sorting import merge_sort_input, quick_sort_input
from chrono_probe.timing import Algorithm

PERIOD_NAIVE1 = Algorithm("period naive1", period_naive1_input)
PERIOD_NAIVE2 = Algorithm("period naive2", period_naive2_input)
PERIOD_SMART = Algorithm("period smart", period_smart_input)
MERGE_SORT = Algorithm("merge sort", merge_sort_input, mutating=True)
QUICK_SORT = Algorithm("quick sort", quick_sort_input, mutating=True)
LINEAR_SEARCH = Algorithm("linear search", linear_search_input)
BINARY_SEARCH = Algorithm("binary search", binary_search_input)

# configuration name -> (algorithm, input kind it expects)
REGISTRY: dict[str, tuple[Algorithm, str]] = {
    "period_naive1": (PERIOD_NAIVE1, "string"),
    "period_naive2": (PERIOD_NAIVE2, "string"),
    "period_smart": (PERIOD_SMART, "string"),
    "merge_sort": (MERGE_SORT, "vector"),
    "quick_sort": (QUICK_SORT, "vector"),
    "linear_search": (LINEAR_SEARCH, "search"),
    "binary_search": (BINARY_SEARCH, "search"),
}

__all__ = [
    "BINARY_SEARCH",
    "LINEAR_SEARCH",
    "MERGE_SORT",
    "PERIOD_NAIVE1",
    "PERIOD_NAIVE2",
    "PERIOD_SMART",
    "QUICK_SORT",
    "REGISTRY",
]
