"""
Oracle for sorting correctness.

Python's built-in `sorted()` is the ground truth. A strict `less(l, r)`
predicate is turned into a key with `functools.cmp_to_key`, so the oracle
orders by exactly the relation the engine is given.

Public API (stable):
    oracle_sort(a, less=operator.lt) -> list
    equals_oracle(a, out, less=operator.lt) -> bool

Conventions:
- The oracle never mutates its input and always returns a **new** list.
- The engine is NOT stable. Exact equality with the (stable) oracle is only
  meaningful when equal keys are indistinguishable, as with plain ints.
  For records with ties, check `is_ordered` + `is_permutation` instead.
"""

from __future__ import annotations

import functools
import operator
from typing import Any, Callable, List

ORACLE_NAME: str = "python_sorted_timsort"

__all__ = ["ORACLE_NAME", "oracle_sort", "equals_oracle"]


def _cmp_from_less(less: Callable[[Any, Any], Any]) -> Callable[[Any, Any], int]:
    def cmp(left: Any, right: Any) -> int:
        if less(left, right):
            return -1
        if less(right, left):
            return 1
        return 0

    return cmp


def oracle_sort(a: List[Any], less: Callable[[Any, Any], Any] = operator.lt) -> List[Any]:
    """
    Return the ground-truth sorted output for `a` under `less`.

    Parameters
    ----------
    a : list
        Input sequence. Not mutated.
    less : callable
        Strict weak ordering, `less(l, r)` true iff l precedes r.

    Returns
    -------
    list
        A new list with the elements of `a` ordered by `less`.
    """
    if less is operator.lt:
        return sorted(a)
    return sorted(a, key=functools.cmp_to_key(_cmp_from_less(less)))


def equals_oracle(a: List[Any], out: List[Any], less: Callable[[Any, Any], Any] = operator.lt) -> bool:
    """True iff `out` is exactly `oracle_sort(a, less)`."""
    return list(out) == oracle_sort(a, less)
