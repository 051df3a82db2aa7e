"""
Dataset generators for exercising and benchmarking the quicksort engine.

Distributions (spec["dist"]):
- "random":        uniform ints from params["range"] == [lo, hi] (inclusive, required)
- "nearly_sorted": [0..n-1] then ceil(swap_frac * n) random pair swaps
- "few_uniques":   up to k distinct values from an optional inclusive range
- "small_range":   uniform ints from [min_val, max_val] (default [0, 255])
- "reversed":      [n-1, ..., 0]
- "sorted":        [0, ..., n-1]
- "all_equal":     n copies of params["value"] (default 0)
- "organ_pipe":    [0, 1, ..., peak, ..., 1, 0]

The last three stress the midpoint pivot: already-ordered and all-equal input
are best cases for Hoare partitioning, organ-pipe input is a classic
unbalanced case.

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]

Conventions:
- Returns a plain Python `list[int]`; algorithms stay NumPy-agnostic.
- The caller owns and seeds the RNG. Deterministic distributions ignore it.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple

import numpy as np

__all__ = ["SUPPORTED_DISTS", "make_dataset"]

_UINT32_RANGE = (0, 4294967295)


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate an integer dataset of length `n` according to `spec`.

    Parameters
    ----------
    n : int
        Number of elements, >= 0.
    spec : dict
        {"dist": <name>, "params": {...}}; see module docstring.
    rng : numpy.random.Generator
        Caller-owned RNG.

    Raises
    ------
    ValueError
        On invalid `n`, unknown dist, or bad params.
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")
    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist", None)
    gen = _GENERATORS.get(dist)
    if gen is None:
        raise ValueError(f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}")

    params = spec.get("params") or {}
    if not isinstance(params, dict):
        raise ValueError(f"{dist}.params must be a dict")
    return gen(n, params, rng)


# ------------------------- distributions ------------------------- #


def _random(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    if "range" not in params:
        raise ValueError("random.params.range must be provided as [min, max] (inclusive)")
    lo, hi = _parse_range(params["range"], "random")
    return _uniform(n, lo, hi, rng)


def _nearly_sorted(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    swap_frac = _parse_swap_frac(params.get("swap_frac", 0.05))
    arr = list(range(n))
    num_swaps = int(np.ceil(swap_frac * n))
    if n == 0 or num_swaps <= 0:
        return arr
    idxs = rng.integers(0, n, size=2 * num_swaps)
    for k in range(num_swaps):
        i, j = int(idxs[2 * k]), int(idxs[2 * k + 1])
        # i == j is a no-op; effective swaps may be fewer than requested
        arr[i], arr[j] = arr[j], arr[i]
    return arr


def _few_uniques(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    k = params.get("k")
    if not isinstance(k, int) or isinstance(k, bool) or k < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    lo, hi = _parse_range(params["range"], "few_uniques") if "range" in params else _UINT32_RANGE
    if n == 0:
        return []

    actual_k = int(min(k, n, hi - lo + 1))
    # Draw from `rng` (not `random.sample`) so output depends on one seed only.
    chosen: List[int] = []
    seen = set()
    while len(chosen) < actual_k:
        for v in map(int, rng.integers(lo, hi + 1, size=2 * (actual_k - len(chosen)))):
            if v not in seen:
                seen.add(v)
                chosen.append(v)
                if len(chosen) == actual_k:
                    break
    return [chosen[int(t)] for t in rng.integers(0, actual_k, size=n)]


def _small_range(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    if "range" in params:
        lo, hi = _parse_range(params["range"], "small_range")
    else:
        lo_raw, hi_raw = params.get("min_val", 0), params.get("max_val", 255)
        if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
            raise ValueError("small_range params.min_val/max_val must be integers")
        lo, hi = int(lo_raw), int(hi_raw)
        if lo > hi:
            raise ValueError(f"small_range invalid: min > max ({lo} > {hi})")
    return _uniform(n, lo, hi, rng)


def _reversed(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    return list(range(n - 1, -1, -1))


def _sorted(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    return list(range(n))


def _all_equal(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    value = params.get("value", 0)
    if not _is_int_like(value):
        raise ValueError(f"all_equal.params.value must be an integer; got {value!r}")
    return [int(value)] * n


def _organ_pipe(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    half = (n + 1) // 2
    up = list(range(half))
    return up + up[: n - half][::-1]


_GENERATORS: Dict[str, Callable[[int, Dict[str, Any], np.random.Generator], List[int]]] = {
    "random": _random,
    "nearly_sorted": _nearly_sorted,
    "few_uniques": _few_uniques,
    "small_range": _small_range,
    "reversed": _reversed,
    "sorted": _sorted,
    "all_equal": _all_equal,
    "organ_pipe": _organ_pipe,
}

SUPPORTED_DISTS = frozenset(_GENERATORS)


# ------------------------- helpers ------------------------- #


def _uniform(n: int, lo: int, hi: int, rng: np.random.Generator) -> List[int]:
    if n == 0:
        return []
    # Generator.integers is half-open; +1 makes `hi` inclusive.
    return rng.integers(lo, hi + 1, size=n, dtype=np.int64).tolist()


def _parse_range(raw: Any, dist: str) -> Tuple[int, int]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ValueError(f"{dist}.params.range must be a 2-element list/tuple [min, max]")
    lo_raw, hi_raw = raw
    if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
        raise ValueError(f"{dist}.params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    if lo > hi:
        raise ValueError(f"{dist}.params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _parse_swap_frac(val: Any) -> float:
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {val!r}") from e
    if not 0.0 <= x <= 1.0:
        raise ValueError(f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}")
    return x


def _is_int_like(x: Any) -> bool:
    # Python ints and NumPy integer scalars; bool is not a value here
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)
