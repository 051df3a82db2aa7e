"""
Capability contracts consumed by the sort engine.

The engine never touches storage directly. It reads, swaps and compares only
through these two protocols, so any object with the right methods can be
sorted (structural typing; no registration or base class needed).

    Sequence: size() -> int, at(i) -> T, swap(i, j) -> None
    Ordering: less(left, right) -> bool

Contract notes
--------------
- `size()` must not change while a sort is in flight.
- `at` and `swap` must reject indices outside `[0, size() - 1]`.
- `less` must be a strict weak ordering (irreflexive, asymmetric,
  transitive). This is not checked.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")

__all__ = ["Sequence", "Ordering"]


@runtime_checkable
class Sequence(Protocol[T]):
    """Mutable, finite, randomly-indexable collection."""

    def size(self) -> int:
        ...

    def at(self, index: int) -> T:
        ...

    def swap(self, i: int, j: int) -> None:
        ...


@runtime_checkable
class Ordering(Protocol[T]):
    """Strict less-than relation over a Sequence's elements."""

    def less(self, left: T, right: T) -> bool:
        ...
