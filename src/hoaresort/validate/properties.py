"""
Property helpers for validating sorting results.

Checks are expressed against a strict `less(l, r)` predicate, the same
relation handed to the engine, so they work for descending and key-based
orderings too.

Public API (stable):
    is_ordered(xs, less=operator.lt) -> bool
    first_order_violation_index(xs, less=operator.lt) -> int | None
    is_permutation(a, b) -> bool
    permutation_counter_diff(a, b) -> dict
    assert_no_mutation(before, after) -> None

Notes
-----
- "Ordered" means no adjacent pair is inverted: `not less(xs[i+1], xs[i])`.
  Equal neighbours are fine.
- Stability is *not* checked. The engine is non-stable, and equal keys are
  allowed to land in any relative order.
- Permutation checks use `collections.Counter`, so elements must be hashable.
"""

from __future__ import annotations

import operator
from collections import Counter
from typing import Any, Callable, Dict, Hashable, Optional, Sequence

__all__ = [
    "is_ordered",
    "first_order_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "assert_no_mutation",
]


def is_ordered(xs: Sequence[Any], less: Callable[[Any, Any], Any] = operator.lt) -> bool:
    """Return True iff no adjacent pair of `xs` is inverted under `less`."""
    return first_order_violation_index(xs, less) is None


def first_order_violation_index(
    xs: Sequence[Any], less: Callable[[Any, Any], Any] = operator.lt
) -> Optional[int]:
    """
    Return the first i where less(xs[i+1], xs[i]), or None if ordered.

    Handy for error messages:
        i = first_order_violation_index(out)
        assert i is None, f"out of order at i={i}: {out[i]} then {out[i+1]}"
    """
    for i in range(len(xs) - 1):
        if less(xs[i + 1], xs[i]):
            return i
    return None


def is_permutation(a: Sequence[Hashable], b: Sequence[Hashable]) -> bool:
    """True iff `a` and `b` hold the same multiset of values."""
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def permutation_counter_diff(a: Sequence[Hashable], b: Sequence[Hashable]) -> Dict[Hashable, int]:
    """
    Return value -> (count in a - count in b), omitting zero entries.

    Empty dict means identical multiplicities.
    """
    diff = Counter(a)
    diff.subtract(Counter(b))
    return {k: d for k, d in diff.items() if d != 0}


def assert_no_mutation(before: Sequence[Any], after: Sequence[Any]) -> None:
    """
    Raise AssertionError if `after` differs from `before` element-wise.

    Used to check the non-mutating contract of `hoaresort.algorithms.*.sort`.
    """
    if len(before) != len(after):
        raise AssertionError(f"Input mutated: length changed from {len(before)} to {len(after)}")
    for i, (x, y) in enumerate(zip(before, after)):
        if x != y:
            raise AssertionError(f"Input mutated at index {i}: before={x!r}, after={y!r}")
