"""
Exceptions raised by hoaresort.

The engine itself raises nothing: faults from a Sequence or Ordering
collaborator propagate unchanged to the caller of `sort`. The adapters in
`hoaresort.adapters` raise `IndexOutOfRange` when asked for an index outside
`[0, size - 1]`.
"""

from __future__ import annotations

__all__ = ["SortError", "IndexOutOfRange"]


class SortError(Exception):
    """Base class for hoaresort errors."""


class IndexOutOfRange(SortError, IndexError):
    """An index outside `[0, size - 1]` reached a Sequence adapter."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"index {index} out of range for sequence of size {size}")
