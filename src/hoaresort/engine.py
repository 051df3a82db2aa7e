"""
Quicksort engine.

In-place, non-stable quicksort using the Hoare partition scheme with a
midpoint pivot. The engine works exclusively through the `Sequence` and
`Ordering` capabilities from `hoaresort.contracts`:

    sort(sequence, ordering)                      # literal two-sided recursion
    sort(sequence, ordering, bounded_depth=True)  # O(log n) stack depth

Both modes produce the same final order; `bounded_depth` only changes which
sub-range is recursed into and which one is looped over.

Complexity: O(n log n) comparisons on average, O(n^2) worst case. The literal
mode can recurse O(n) deep on adversarial input.

Errors raised by the collaborators (`size`, `at`, `swap`, `less`) propagate
unchanged; the engine never catches.
"""

from __future__ import annotations

from typing import TypeVar

from .contracts import Ordering, Sequence

T = TypeVar("T")

__all__ = ["sort"]


def sort(sequence: Sequence[T], ordering: Ordering[T], *, bounded_depth: bool = False) -> None:
    """
    Sort `sequence` in place under `ordering`.

    Parameters
    ----------
    sequence : Sequence
        Caller-owned storage; reordered only through `swap`.
    ordering : Ordering
        Strict weak ordering over the elements.
    bounded_depth : bool
        If True, recurse into the smaller partition only and iterate over the
        larger one. Same result, bounded stack usage.
    """
    n = sequence.size()
    if n <= 1:
        return
    if bounded_depth:
        _quick_sort_bounded(sequence, ordering, 0, n - 1)
    else:
        _quick_sort(sequence, ordering, 0, n - 1)


def _quick_sort(sequence: Sequence[T], ordering: Ordering[T], lo: int, hi: int) -> None:
    if lo >= hi:
        return
    p = _partition(sequence, ordering, lo, hi)
    # Left range keeps p: Hoare's split index belongs to the left half.
    _quick_sort(sequence, ordering, lo, p)
    _quick_sort(sequence, ordering, p + 1, hi)


def _quick_sort_bounded(sequence: Sequence[T], ordering: Ordering[T], lo: int, hi: int) -> None:
    while lo < hi:
        p = _partition(sequence, ordering, lo, hi)
        if p - lo < hi - p:
            _quick_sort_bounded(sequence, ordering, lo, p)
            lo = p + 1
        else:
            _quick_sort_bounded(sequence, ordering, p + 1, hi)
            hi = p


def _partition(sequence: Sequence[T], ordering: Ordering[T], lo: int, hi: int) -> int:
    """Hoare partition of [lo, hi]; returns j with lo <= j < hi."""
    # Captured once; later swaps rebind slots, they do not touch this value.
    pivot = sequence.at((lo + hi) // 2)
    less = ordering.less
    at = sequence.at
    i, j = lo, hi
    while True:
        while less(at(i), pivot):
            i += 1
        while less(pivot, at(j)):
            j -= 1
        if i >= j:
            return j
        sequence.swap(i, j)
        i += 1
        j -= 1
