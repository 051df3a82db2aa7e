"""Reference sorter: Python's built-in `sorted()` (stable Timsort)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from hoaresort.algorithms._config import check_config

NAME = "builtin_timsort"

__all__ = ["NAME", "sort"]


def sort(a: List[Any], *, config: Optional[Dict[str, Any]] = None) -> List[Any]:
    cfg = check_config(NAME, config, ("ordering",))
    ordering = cfg.get("ordering", "ascending")
    if ordering not in ("ascending", "descending"):
        raise ValueError(f"{NAME}: ordering must be 'ascending' or 'descending'; got {ordering!r}")
    return sorted(a, reverse=(ordering == "descending"))
