"""
Correctness tests for the algorithm modules against the oracle (Python's built-in sorted).

Targets every module under `hoaresort.algorithms` with the uniform API
    sort(a: list, *, config: dict | None) -> list

What we check:
- Output exactly matches the oracle (ints: equal keys are indistinguishable)
- Ordered output (diagnostic)
- Permutation preservation (no lost/duplicated elements)
- No input mutation (API contract)
- Determinism for a given config (same input -> same output)
"""

from __future__ import annotations

import importlib
import operator
from typing import Any, Callable, Dict, List

import pytest
from hypothesis import given, settings, strategies as st

from hoaresort.algorithms import ALGORITHM_NAMES
from hoaresort.validate import (
    assert_no_mutation,
    first_order_violation_index,
    is_permutation,
    oracle_sort,
)

CONFIGS: List[Dict[str, Any]] = [
    {},
    {"ordering": "descending"},
]
HOARE_ONLY_CONFIGS: List[Dict[str, Any]] = [
    {"bounded_depth": True},
    {"ordering": "descending", "bounded_depth": True},
]


def _algo(name: str) -> Callable[..., List[int]]:
    return importlib.import_module(f"hoaresort.algorithms.{name}").sort


def _all_cases():
    for name in ALGORITHM_NAMES:
        for cfg in CONFIGS:
            yield name, cfg
    for cfg in HOARE_ONLY_CONFIGS:
        yield "hoare_quicksort", cfg


ALL_CASES = list(_all_cases())
CASE_IDS = [f"{n}-{'-'.join(f'{k}={v}' for k, v in c.items()) or 'default'}" for n, c in ALL_CASES]


def _check_one(name: str, a: List[int], config: Dict[str, Any]) -> None:
    """Common assertion bundle for one input."""
    sort = _algo(name)
    less = operator.gt if config.get("ordering") == "descending" else operator.lt

    a_before = list(a)
    out = sort(a, config=config)

    assert_no_mutation(a_before, a)

    assert out == oracle_sort(a, less), "Output must exactly match the oracle"

    i = first_order_violation_index(out, less)
    assert i is None, f"out of order at i={i}: {out[i]} then {out[i + 1]}"
    assert is_permutation(a, out), "Output is not a permutation of input"

    assert sort(a, config=config) == out, "Algorithm must be deterministic for a given config"


# ------------------------- unit tests (deterministic) ------------------------- #


@pytest.mark.parametrize(("name", "config"), ALL_CASES, ids=CASE_IDS)
@pytest.mark.parametrize(
    "a",
    [
        [],
        [5],
        [2, 1],
        [1, 2, 3, 4],
        [4, 3, 2, 1],
        [7, 7, 7, 7],
        [1, 3, 2, 3, 1, 2],
        [4, 5, 6, 7, 8, 9, 1, 2, 3],
        [3, 3, 2, 2, 1, 1],
        list(range(20)),
        list(range(20))[::-1],
        [0, -1, 5, -10, 3, 3, 2],
    ],
)
def test_unit_cases(name: str, config: Dict[str, Any], a: List[int]) -> None:
    _check_one(name, a, config)


def test_hoare_rejects_unknown_config_key() -> None:
    with pytest.raises(ValueError, match="unknown config keys"):
        _algo("hoare_quicksort")([2, 1], config={"pivot": "median"})


def test_hoare_rejects_unknown_ordering() -> None:
    with pytest.raises(ValueError):
        _algo("hoare_quicksort")([2, 1], config={"ordering": "sideways"})


def test_timsort_rejects_bounded_depth() -> None:
    with pytest.raises(ValueError):
        _algo("builtin_timsort")([2, 1], config={"bounded_depth": True})


# ------------------------- property-based tests (randomized) ------------------------- #

small_ints = st.integers(min_value=-10_000, max_value=10_000)


@pytest.mark.parametrize(("name", "config"), ALL_CASES, ids=CASE_IDS)
@settings(deadline=None, max_examples=50)
@given(a=st.lists(small_ints, min_size=0, max_size=400))
def test_property_random_small_range(name: str, config: Dict[str, Any], a: List[int]) -> None:
    _check_one(name, a, config)


@pytest.mark.parametrize(("name", "config"), ALL_CASES, ids=CASE_IDS)
@settings(deadline=None, max_examples=30)
@given(a=st.lists(st.integers(min_value=0, max_value=255), min_size=0, max_size=600))
def test_property_many_duplicates(name: str, config: Dict[str, Any], a: List[int]) -> None:
    _check_one(name, a, config)
