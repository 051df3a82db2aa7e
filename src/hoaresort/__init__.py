"""
hoaresort: in-place Hoare-partition quicksort over any indexable sequence.

Public API:
    sort(sequence, ordering, *, bounded_depth=False)
    sort_in_place(data, less=operator.lt, *, bounded_depth=False)

    Sequence, Ordering                  # capability protocols
    ListView, ArrayView, view_of        # sequence adapters
    LessThan, ascending, descending, by_key, ordering_of
    CountingSequence, CountingOrdering
    SortError, IndexOutOfRange
"""

from .adapters import (
    ArrayView,
    CountingOrdering,
    CountingSequence,
    LessThan,
    ListView,
    ascending,
    by_key,
    descending,
    ordering_of,
    view_of,
)
from .api import sort_in_place
from .contracts import Ordering, Sequence
from .engine import sort
from .errors import IndexOutOfRange, SortError

__version__ = "0.1.0"

__all__ = [
    "sort",
    "sort_in_place",
    "Sequence",
    "Ordering",
    "ListView",
    "ArrayView",
    "view_of",
    "LessThan",
    "ascending",
    "descending",
    "by_key",
    "ordering_of",
    "CountingSequence",
    "CountingOrdering",
    "SortError",
    "IndexOutOfRange",
]
