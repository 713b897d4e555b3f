"""Ready made input types.

- strings.py: StringInput (fractional period algorithms)
- vectors.py: VectorInput (sorting), SearchInput (searching)
"""

from chrono_probe.inputs.strings import StringConfig, StringGen, StringInput
from chrono_probe.inputs.vectors import SearchGenerator, SearchInput, VectorInput

INPUT_TYPES = {
    "string": StringInput,
    "vector": VectorInput,
    "search": SearchInput,
}

__all__ = [
    "INPUT_TYPES",
    "SearchGenerator",
    "SearchInput",
    "StringConfig",
    "StringGen",
    "StringInput",
    "VectorInput",
]
