"""Tests for the timing/counting harness and the YAML-driven runner."""

from __future__ import annotations

import gc
import json
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
import pytest
import yaml

from hoaresort.algorithms import hoare_quicksort
from hoaresort.bench import count_operations, time_sort_call
from hoaresort.bench.runner import main, run_experiment


# ------------------------- measure ------------------------- #


def _timing_kwargs(**overrides: Any) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = dict(
        algo_name="hoare_quicksort",
        algo_fn=hoare_quicksort.sort,
        a=[5, 3, 1, 4, 2],
        config=None,
        repeats=3,
        warmup=True,
        disable_gc=True,
        timeout_seconds=5.0,
        defensive_copy=True,
    )
    kwargs.update(overrides)
    return kwargs


def test_time_sort_call_ok() -> None:
    res = time_sort_call(**_timing_kwargs())
    assert res["status"] == "ok"
    assert res["algo"] == "hoare_quicksort"
    assert len(res["samples_ns"]) == 3
    assert all(t >= 0 for t in res["samples_ns"])


def test_time_sort_call_records_errors() -> None:
    def broken(a: List[int], *, config=None) -> List[int]:
        raise RuntimeError("nope")

    res = time_sort_call(**_timing_kwargs(algo_fn=broken, warmup=False))
    assert res["status"] == "error"
    assert "nope" in res["error"]
    assert res["samples_ns"] == []


def test_time_sort_call_warmup_failure_takes_no_samples() -> None:
    calls = []

    def broken(a: List[int], *, config=None) -> List[int]:
        calls.append(1)
        raise RuntimeError("cold")

    res = time_sort_call(**_timing_kwargs(algo_fn=broken, warmup=True))
    assert res["status"] == "error"
    assert res["error"].startswith("warmup failed")
    assert res["samples_ns"] == []
    assert len(calls) == 1


def test_time_sort_call_stops_on_timeout() -> None:
    res = time_sort_call(**_timing_kwargs(timeout_seconds=1e-9, warmup=False))
    assert res["status"] == "timeout"
    assert res["timed_out_on_repeat"] == 0
    assert len(res["samples_ns"]) == 1


@pytest.mark.parametrize("gc_on_entry", [True, False])
def test_time_sort_call_restores_gc_state(gc_on_entry: bool) -> None:
    was = gc.isenabled()
    try:
        if gc_on_entry:
            gc.enable()
        else:
            gc.disable()
        time_sort_call(**_timing_kwargs(disable_gc=True))
        assert gc.isenabled() is gc_on_entry
    finally:
        if was:
            gc.enable()
        else:
            gc.disable()


def test_time_sort_call_validates_args() -> None:
    with pytest.raises(ValueError):
        time_sort_call(**_timing_kwargs(repeats=-1))
    with pytest.raises(ValueError):
        time_sort_call(**_timing_kwargs(timeout_seconds=0))


def test_count_operations() -> None:
    assert count_operations([1, 2, 3]) == {"reads": 9, "swaps": 0, "comparisons": 7}
    assert count_operations([2, 1])["swaps"] == 1
    assert count_operations([]) == {"reads": 0, "swaps": 0, "comparisons": 0}


def test_count_operations_does_not_mutate_input() -> None:
    a = [3, 1, 2]
    count_operations(a, "descending", bounded_depth=True)
    assert a == [3, 1, 2]


def test_bounded_depth_does_not_change_counts_total() -> None:
    a = [9, 4, 7, 1, 8, 2, 6, 3, 5, 0]
    assert count_operations(a) == count_operations(a, bounded_depth=True)


# ------------------------- runner ------------------------- #


def _write_config(tmp_path: Path, **overrides: Any) -> Path:
    cfg: Dict[str, Any] = {
        "experiment_name": "smoke",
        "output_dir": str(tmp_path / "runs"),
        "seed": 3,
        "repeats": 2,
        "warmup": False,
        "disable_gc": False,
        "timeout_seconds": 30.0,
        "count_operations": True,
        "dataset": {"dist": "random", "params": {"range": [0, 1000]}},
        "sizes": [20, 60],
        "algorithms": [
            {"name": "hoare_quicksort", "config": {"bounded_depth": True}},
            {"name": "builtin_timsort"},
        ],
    }
    cfg.update(overrides)
    path = tmp_path / "experiment.yaml"
    path.write_text(yaml.safe_dump(cfg, sort_keys=False), encoding="utf-8")
    return path


def test_run_experiment_writes_outputs(tmp_path: Path) -> None:
    run_dir = run_experiment(_write_config(tmp_path))

    for name in ("config_resolved.yaml", "meta.json", "results.jsonl", "summary.csv"):
        assert (run_dir / name).exists(), name

    meta = json.loads((run_dir / "meta.json").read_text(encoding="utf-8"))
    assert "numpy" in meta and "machine" in meta

    lines = [json.loads(s) for s in (run_dir / "results.jsonl").read_text(encoding="utf-8").splitlines()]
    timed = [ln for ln in lines if "time_ns" in ln]
    ops = [ln for ln in lines if "comparisons" in ln]
    assert len(timed) == 2 * 2 * 2  # algos * sizes * repeats
    assert {ln["algo"] for ln in ops} == {"hoare_quicksort"}
    assert sorted(ln["n"] for ln in ops) == [20, 60]

    summary = pd.read_csv(run_dir / "summary.csv")
    assert set(summary["algo"]) == {"hoare_quicksort", "builtin_timsort"}
    assert (summary["samples_ok"] == 2).all()
    assert "comparisons" in summary.columns
    hoare = summary[summary["algo"] == "hoare_quicksort"]
    assert (hoare["comparisons"] > 0).all()


def test_run_experiment_without_counts(tmp_path: Path) -> None:
    run_dir = run_experiment(_write_config(tmp_path, count_operations=False, sizes=[10]))
    summary = pd.read_csv(run_dir / "summary.csv")
    assert "comparisons" not in summary.columns
    assert len(summary) == 2


def test_run_experiment_missing_keys(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.safe_dump({"experiment_name": "x"}), encoding="utf-8")
    with pytest.raises(ValueError, match="Missing required config keys"):
        run_experiment(path)


@pytest.mark.parametrize(
    ("algorithms", "exc"),
    [
        ([{"name": "hoare_quicksort"}, {"name": "hoare_quicksort"}], ValueError),
        ([{"name": "no_such_algo"}], ImportError),
        ([{"config": {}}], ValueError),
        ([{"name": "builtin_timsort", "config": [1]}], ValueError),
    ],
)
def test_run_experiment_bad_algorithms(tmp_path: Path, algorithms, exc) -> None:
    with pytest.raises(exc):
        run_experiment(_write_config(tmp_path, algorithms=algorithms))
    assert not (tmp_path / "runs").exists()


def test_run_experiment_bad_sizes(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="sizes"):
        run_experiment(_write_config(tmp_path, sizes=[]))


def test_error_skips_larger_sizes(tmp_path: Path) -> None:
    cfg = _write_config(
        tmp_path,
        sizes=[5, 10],
        algorithms=[{"name": "hoare_quicksort", "config": {"pivot": "median"}}],
    )
    run_dir = run_experiment(cfg)
    lines = [json.loads(s) for s in (run_dir / "results.jsonl").read_text(encoding="utf-8").splitlines()]
    assert [ln["status"] for ln in lines] == ["error"]
    assert lines[0]["n"] == 5


def test_main_missing_config(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main([str(tmp_path / "absent.yaml")])
