"""
Concrete Sequence / Ordering implementations.

Sequences (bind to caller-owned storage, never copy it):
    ListView(data)      # list, bytearray, array.array, any MutableSequence
    ArrayView(array)    # numpy.ndarray, sorted along axis 0
    view_of(data)       # pick one of the above

Orderings:
    LessThan(fn)        # wrap a plain less(l, r) callable
    ascending(), descending(), by_key(key, reverse=False)
    ordering_of("ascending" | "descending" | callable | Ordering)

Instrumentation:
    CountingSequence(seq), CountingOrdering(ordering)

Index policy: every Sequence here accepts only `0 <= i < size()`. Python's
negative-index wrap-around is rejected with `IndexOutOfRange`.
"""

from __future__ import annotations

import operator
from typing import Any, Callable, Union

import numpy as np

from .contracts import Ordering, Sequence
from .errors import IndexOutOfRange

__all__ = [
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
]

ORDERING_NAMES = ("ascending", "descending")


# ------------------------- sequences ------------------------- #


class ListView:
    """Sequence over a mutable indexable container."""

    def __init__(self, data: Any) -> None:
        self._data = data

    @property
    def data(self) -> Any:
        return self._data

    def size(self) -> int:
        return len(self._data)

    def at(self, index: int) -> Any:
        self._check(index)
        return self._data[index]

    def swap(self, i: int, j: int) -> None:
        self._check(i)
        self._check(j)
        d = self._data
        d[i], d[j] = d[j], d[i]

    def _check(self, index: int) -> None:
        n = len(self._data)
        if not 0 <= index < n:
            raise IndexOutOfRange(index, n)

    def __repr__(self) -> str:
        return f"ListView({self._data!r})"


class ArrayView:
    """
    Sequence over a NumPy array along axis 0.

    For plain 1-D arrays elements are scalars. For N-D arrays each element is
    a row (a sub-array), and for structured dtypes each element is an
    `np.void` record. In both of those cases `arr[i]` is a view whose
    contents change under a later swap, so `at` returns a detached copy.
    Swaps always go through fancy indexing, which copies the right-hand side
    before writing.
    """

    def __init__(self, array: np.ndarray) -> None:
        if not isinstance(array, np.ndarray):
            raise ValueError(f"ArrayView needs a numpy.ndarray; got {type(array).__name__}")
        if array.ndim == 0:
            raise ValueError("ArrayView cannot sort a 0-d array")
        self._a = array
        self._views = array.ndim > 1 or array.dtype.fields is not None

    @property
    def data(self) -> np.ndarray:
        return self._a

    def size(self) -> int:
        return int(self._a.shape[0])

    def at(self, index: int) -> Any:
        self._check(index)
        if self._views:
            # Element 0 of a one-element copy owns no storage of the caller's.
            return self._a[index : index + 1].copy()[0]
        return self._a[index]

    def swap(self, i: int, j: int) -> None:
        self._check(i)
        self._check(j)
        a = self._a
        a[[i, j]] = a[[j, i]]

    def _check(self, index: int) -> None:
        n = int(self._a.shape[0])
        if not 0 <= index < n:
            raise IndexOutOfRange(index, n)

    def __repr__(self) -> str:
        return f"ArrayView(shape={self._a.shape}, dtype={self._a.dtype})"


def view_of(data: Any) -> Sequence:
    """Return a Sequence bound to `data` (no copy)."""
    if isinstance(data, np.ndarray):
        return ArrayView(data)
    if isinstance(data, Sequence):
        return data
    return ListView(data)


# ------------------------- orderings ------------------------- #


class LessThan:
    """Ordering backed by a plain `less(left, right) -> bool` callable."""

    def __init__(self, fn: Callable[[Any, Any], Any], name: str | None = None) -> None:
        if not callable(fn):
            raise ValueError(f"less must be callable; got {fn!r}")
        self._fn = fn
        self.name = name or getattr(fn, "__name__", "less")

    def less(self, left: Any, right: Any) -> bool:
        return bool(self._fn(left, right))

    def __repr__(self) -> str:
        return f"LessThan({self.name})"


def ascending() -> LessThan:
    return LessThan(operator.lt, name="ascending")


def descending() -> LessThan:
    return LessThan(operator.gt, name="descending")


def by_key(key: Callable[[Any], Any], reverse: bool = False) -> LessThan:
    """Order elements by `key(element)`; `reverse` flips to descending."""
    if reverse:
        return LessThan(lambda l, r: key(l) > key(r), name="by_key_desc")
    return LessThan(lambda l, r: key(l) < key(r), name="by_key")


def ordering_of(spec: Union[str, Callable[[Any, Any], Any], Ordering, None]) -> Ordering:
    """
    Resolve an ordering from a name, a `less` callable or an Ordering.

    None means "ascending".
    """
    if spec is None or spec == "ascending":
        return ascending()
    if spec == "descending":
        return descending()
    if isinstance(spec, str):
        raise ValueError(f"Unknown ordering: {spec!r}. Supported: {list(ORDERING_NAMES)}")
    if isinstance(spec, Ordering):
        return spec
    return LessThan(spec)


# ------------------------- instrumentation ------------------------- #


class CountingSequence:
    """Sequence wrapper that counts `at` reads and swaps."""

    def __init__(self, inner: Sequence) -> None:
        self.inner = inner
        self.reads = 0
        self.swaps = 0

    def size(self) -> int:
        return self.inner.size()

    def at(self, index: int) -> Any:
        self.reads += 1
        return self.inner.at(index)

    def swap(self, i: int, j: int) -> None:
        self.swaps += 1
        self.inner.swap(i, j)


class CountingOrdering:
    """Ordering wrapper that counts `less` calls."""

    def __init__(self, inner: Ordering) -> None:
        self.inner = inner
        self.comparisons = 0

    def less(self, left: Any, right: Any) -> bool:
        self.comparisons += 1
        return self.inner.less(left, right)
