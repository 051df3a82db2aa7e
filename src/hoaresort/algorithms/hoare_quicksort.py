"""
Hoare-partition quicksort through the engine.

Config keys:
    ordering      : "ascending" (default) | "descending"
    bounded_depth : bool, default False (recurse into the smaller side only)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from hoaresort.adapters import ListView, ordering_of
from hoaresort.algorithms._config import check_config
from hoaresort.engine import sort as engine_sort

NAME = "hoare_quicksort"
CONFIG_KEYS = ("ordering", "bounded_depth")

__all__ = ["NAME", "sort"]


def sort(a: List[Any], *, config: Optional[Dict[str, Any]] = None) -> List[Any]:
    cfg = check_config(NAME, config, CONFIG_KEYS)
    out = list(a)
    engine_sort(
        ListView(out),
        ordering_of(cfg.get("ordering", "ascending")),
        bounded_depth=bool(cfg.get("bounded_depth", False)),
    )
    return out
