"""
Measurement harness for sorting algorithms.

Two kinds of measurement:

- time_sort_call: wall-clock samples of `algo_fn(a, config=...)` with a
  monotonic high-resolution clock. Copying, GC and warmup stay outside the
  timed block.
- count_operations: one engine run over counting adapters, reporting how
  many reads, swaps and comparisons the Hoare quicksort performed. Counts
  are deterministic for a given input and ordering.

time_sort_call result schema:
    {
        "algo": str,
        "repeats": int,
        "samples_ns": list[int],
        "status": "ok" | "timeout" | "error",
        "error": str | None,
        "timed_out_on_repeat": int | None,
    }
"""

from __future__ import annotations

import gc
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional

from hoaresort.adapters import CountingOrdering, CountingSequence, ListView, ordering_of
from hoaresort.engine import sort as engine_sort

__all__ = ["time_sort_call", "count_operations"]


@contextmanager
def _gc_paused(enabled: bool) -> Iterator[None]:
    """Collect then disable GC while the block runs; restore the caller's GC state."""
    if not enabled:
        yield
        return
    was_enabled = gc.isenabled()
    gc.collect()
    gc.disable()
    try:
        yield
    finally:
        if was_enabled:
            gc.enable()


def _timed_ns(algo_fn: Callable[..., List[Any]], arg: List[Any], config: Optional[Dict[str, Any]]) -> int:
    t0 = time.perf_counter_ns()
    algo_fn(arg, config=config)
    return time.perf_counter_ns() - t0


def time_sort_call(
    *,
    algo_name: str,
    algo_fn: Callable[..., List[Any]],
    a: List[Any],
    config: Optional[Dict[str, Any]],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
    defensive_copy: bool,
) -> Dict[str, Any]:
    """
    Sample `algo_fn(a, config=config)` up to `repeats` times.

    Sampling stops early on the first sample slower than `timeout_seconds`
    (status "timeout") or the first exception (status "error"; recorded, not
    raised). A failing warmup call is reported the same way and no samples
    are taken. With `defensive_copy`, every call gets a fresh `list(a)` built
    outside the timed region.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    def fresh() -> List[Any]:
        return list(a) if defensive_copy else a

    samples: List[int] = []
    status, error, timed_out_on = "ok", None, None
    limit_ns = int(timeout_seconds * 1e9)

    if warmup and repeats > 0:
        try:
            algo_fn(fresh(), config=config)
        except Exception as e:
            status, error = "error", f"warmup failed: {e!r}"

    if status == "ok":
        with _gc_paused(disable_gc):
            for r in range(repeats):
                arg = fresh()
                try:
                    elapsed = _timed_ns(algo_fn, arg, config)
                except Exception as e:
                    status, error = "error", f"run failed at repeat {r}: {e!r}"
                    break
                samples.append(elapsed)
                if elapsed > limit_ns:
                    status, timed_out_on = "timeout", r
                    break

    return {
        "algo": algo_name,
        "repeats": repeats,
        "samples_ns": samples,
        "status": status,
        "error": error,
        "timed_out_on_repeat": timed_out_on,
    }


def count_operations(
    a: List[Any],
    ordering: Any = "ascending",
    *,
    bounded_depth: bool = False,
) -> Dict[str, int]:
    """
    Sort a copy of `a` through counting adapters and report operation counts.

    Returns {"reads": int, "swaps": int, "comparisons": int}.
    """
    seq = CountingSequence(ListView(list(a)))
    cmp = CountingOrdering(ordering_of(ordering))
    engine_sort(seq, cmp, bounded_depth=bounded_depth)
    return {"reads": seq.reads, "swaps": seq.swaps, "comparisons": cmp.comparisons}
