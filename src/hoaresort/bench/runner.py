"""
Experiment runner: a full benchmarking sweep driven by a YAML config.

Usage (from repo root):
    python -m hoaresort.bench.runner experiments/configs/01_random_scaling.yaml
    hoaresort-bench experiments/configs/01_random_scaling.yaml

Config keys (all required unless noted):
    experiment_name, output_dir, seed, repeats, warmup, disable_gc,
    timeout_seconds, dataset, sizes, algorithms
    count_operations   (optional, default false)

Each entry in `algorithms` is {"name": <module under hoaresort.algorithms>,
"config": {...}}.

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per timing sample / status / op count
    - summary.csv             # median + IQR per (algo, n), plus op counts if recorded

Behaviour:
- For each size n, ONE dataset is generated and every algorithm gets the same input.
- On timeout/error for an algorithm at size n, larger sizes are skipped for it.
- With count_operations, every hoare_quicksort entry also records the engine's
  read/swap/comparison counts for that input.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import importlib
import json
import os
import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from hoaresort.bench.measure import count_operations, time_sort_call
from hoaresort.datasets import make_dataset

__all__ = ["AlgoSpec", "REQUIRED_KEYS", "run_experiment", "main"]

_console = Console()

REQUIRED_KEYS = (
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "dataset",
    "sizes",
    "algorithms",
)

SUMMARY_COLUMNS = ["algo", "n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns"]


# ------------------------- data structures ------------------------- #


@dataclass(frozen=True)
class AlgoSpec:
    name: str
    sort_fn: Any
    config: Dict[str, Any]

    @property
    def counts_operations(self) -> bool:
        return self.name == "hoare_quicksort"


# ------------------------- helpers: IO & meta ------------------------- #


def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config must be a YAML mapping: {path}")
    return cfg


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y%m%d_%H%M%S")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    run_dir = base_dir / f"{_timestamp()}_{experiment_name}"
    suffix = 1
    while run_dir.exists():
        run_dir = base_dir / f"{_timestamp()}_{experiment_name}_{suffix}"
        suffix += 1
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


def _resolve_algorithms(cfg_algos: List[Dict[str, Any]]) -> List[AlgoSpec]:
    specs: List[AlgoSpec] = []
    seen = set()
    for entry in cfg_algos:
        name = entry.get("name", None) if isinstance(entry, dict) else None
        if not name or not isinstance(name, str):
            raise ValueError("Each algorithm must have a string 'name' field")
        if name in seen:
            raise ValueError(f"Duplicate algorithm name in config: {name}")
        seen.add(name)

        try:
            mod = importlib.import_module(f"hoaresort.algorithms.{name}")
        except ImportError as e:
            raise ImportError(f"Could not import algorithm module 'hoaresort.algorithms.{name}': {e!r}") from e

        if not callable(getattr(mod, "sort", None)):
            raise AttributeError(f"Algorithm module '{name}' must define a callable `sort(a, *, config=None)`")

        config = entry.get("config", {})
        if config is None:
            config = {}
        elif not isinstance(config, dict):
            raise ValueError(f"Algorithm '{name}': 'config' must be a dict if provided")

        specs.append(AlgoSpec(name=name, sort_fn=mod.sort, config=config))
    return specs


def _parse_sizes(raw: Any) -> List[int]:
    if not isinstance(raw, list) or not raw:
        raise ValueError("Config 'sizes' must be a non-empty list of positive integers")
    sizes = []
    for n in raw:
        if not isinstance(n, int) or isinstance(n, bool) or n <= 0:
            raise ValueError(f"Config 'sizes' entries must be positive integers; got {n!r}")
        sizes.append(n)
    return sizes


# ------------------------- aggregation & display ------------------------- #


def _aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    if not jsonl_path.exists():
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    if "time_ns" not in df.columns:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    timed = df[df["time_ns"].notna()]
    if timed.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    grouped = timed.groupby(["algo", "n"])["time_ns"]
    out = grouped.agg(samples_ok="count", median_ns="median", min_ns="min", max_ns="max")
    out["iqr_ns"] = grouped.quantile(0.75) - grouped.quantile(0.25)
    out = out.reset_index()
    out[["median_ns", "iqr_ns", "min_ns", "max_ns"]] = out[["median_ns", "iqr_ns", "min_ns", "max_ns"]].astype("int64")
    out = out[SUMMARY_COLUMNS]

    if "comparisons" in df.columns:
        ops = df[df["comparisons"].notna()][["algo", "n", "reads", "swaps", "comparisons"]]
        if not ops.empty:
            ops = ops.astype({"reads": "int64", "swaps": "int64", "comparisons": "int64"})
            out = out.merge(ops, on=["algo", "n"], how="left")

    return out.sort_values(["algo", "n"], ignore_index=True)


def _format_cell(median_ns: Optional[int], iqr_ns: Optional[int]) -> str:
    if median_ns is None:
        return "—"
    return f"{median_ns / 1e6:.2f} ± {(iqr_ns or 0) / 1e6:.2f}"


def _print_summary(summary: pd.DataFrame, sizes: List[int]) -> None:
    table = Table(title="Benchmark Summary (median ± IQR in ms)")
    table.add_column("Algorithm", style="bold")

    picks: List[Tuple[str, int]] = []
    for n in (sizes[0], sizes[len(sizes) // 2], sizes[-1]):
        if all(n != p for _, p in picks):
            picks.append((f"n={n}", n))
    for hdr, _ in picks:
        table.add_column(hdr, justify="right")

    for algo in summary["algo"].unique() if not summary.empty else []:
        row = [f"[bold]{algo}[/]"]
        for _, npick in picks:
            s = summary[(summary["algo"] == algo) & (summary["n"] == npick)]
            if s.empty:
                row.append("—")
            else:
                row.append(_format_cell(int(s["median_ns"].values[0]), int(s["iqr_ns"].values[0])))
        table.add_row(*row)

    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #


def run_experiment(config_path: Path) -> Path:
    """Run the sweep described by `config_path`; return the run directory."""
    cfg = _load_yaml(Path(config_path))

    missing = [k for k in REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    experiment_name = str(cfg["experiment_name"])
    output_dir = Path(cfg["output_dir"])
    sizes = _parse_sizes(cfg["sizes"])
    repeats = int(cfg["repeats"])
    warmup = bool(cfg["warmup"])
    disable_gc = bool(cfg["disable_gc"])
    timeout_seconds = float(cfg["timeout_seconds"])
    dataset_spec = dict(cfg["dataset"])
    want_counts = bool(cfg.get("count_operations", False))

    # Resolve before creating any output so a bad config leaves no run dir.
    algos = _resolve_algorithms(list(cfg["algorithms"]))

    run_dir = _ensure_run_dir(output_dir, experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(cfg, cfg_resolved_path)
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    rng = np.random.default_rng(int(cfg["seed"]))
    skipped = {a.name: False for a in algos}

    _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    _console.print(f"[bold]Experiment:[/bold] {experiment_name}")
    _console.print(f"[bold]Algorithms:[/bold] {', '.join(a.name for a in algos)}")
    _console.print()

    for n in tqdm(sizes, desc="Sizes", unit="n"):
        base_a = make_dataset(int(n), dataset_spec, rng)

        for a_spec in algos:
            if skipped[a_spec.name]:
                continue

            res = time_sort_call(
                algo_name=a_spec.name,
                algo_fn=a_spec.sort_fn,
                a=base_a,
                config=a_spec.config,
                repeats=repeats,
                warmup=warmup,
                disable_gc=disable_gc,
                timeout_seconds=timeout_seconds,
                defensive_copy=True,
            )

            for trial_idx, t_ns in enumerate(res["samples_ns"]):
                _append_jsonl(
                    {
                        "algo": a_spec.name,
                        "n": int(n),
                        "dataset": dataset_spec,
                        "trial": int(trial_idx),
                        "time_ns": int(t_ns),
                        "config": a_spec.config,
                    },
                    results_path,
                )

            status = res["status"]
            if status != "ok":
                skipped[a_spec.name] = True
                line = {"algo": a_spec.name, "n": int(n), "status": status, "config": a_spec.config}
                if status == "timeout":
                    line["timed_out_on_repeat"] = res["timed_out_on_repeat"]
                else:
                    line["error"] = res["error"]
                _append_jsonl(line, results_path)
                _console.print(f"[yellow]{a_spec.name}[/yellow] {status} at n={n}; skipping larger sizes")
                continue

            if want_counts and a_spec.counts_operations:
                counts = count_operations(
                    base_a,
                    a_spec.config.get("ordering", "ascending"),
                    bounded_depth=bool(a_spec.config.get("bounded_depth", False)),
                )
                _append_jsonl({"algo": a_spec.name, "n": int(n), **counts}, results_path)

    summary_df = _aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)

    _print_summary(summary_df, sizes)
    _console.print("[bold green]Done.[/bold green] Wrote:")
    for p in (results_path, summary_path, meta_path, cfg_resolved_path):
        _console.print(f" - {p}")

    return run_dir


# ------------------------- CLI ------------------------- #


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run a hoaresort benchmark experiment from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
