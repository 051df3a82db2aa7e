"""
Algorithm modules with the uniform benchmark API:

    sort(a: list, *, config: dict | None = None) -> list

Every module returns a NEW list and never mutates `a`. The runner resolves
them by name: `hoaresort.algorithms.<name>`.
"""

ALGORITHM_NAMES = ("hoare_quicksort", "builtin_timsort")

__all__ = ["ALGORITHM_NAMES"]
