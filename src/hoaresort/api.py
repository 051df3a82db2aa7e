"""
Function-style entry point.

`sort_in_place` is the everyday spelling of the engine: pass the storage and
an optional `less(l, r)` function, get the storage reordered in place.

    >>> xs = [4, 5, 6, 7, 8, 9, 1, 2, 3]
    >>> sort_in_place(xs)
    >>> xs
    [1, 2, 3, 4, 5, 6, 7, 8, 9]
    >>> sort_in_place(xs, lambda l, r: l > r)
    >>> xs[:3]
    [9, 8, 7]
"""

from __future__ import annotations

import operator
from typing import Any, Callable, Union

from .adapters import ordering_of, view_of
from .contracts import Ordering
from .engine import sort

__all__ = ["sort_in_place"]


def sort_in_place(
    data: Any,
    less: Union[str, Callable[[Any, Any], Any], Ordering] = operator.lt,
    *,
    bounded_depth: bool = False,
) -> None:
    """
    Sort `data` in place.

    `data` may be a list, bytearray, array.array, NumPy array, or anything
    already implementing the Sequence protocol. `less` may be a callable, an
    Ordering, or one of the names "ascending" / "descending".
    """
    sort(view_of(data), ordering_of(less), bounded_depth=bounded_depth)
