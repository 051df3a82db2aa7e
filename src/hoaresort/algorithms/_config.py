"""Shared parsing of per-algorithm `config` dicts."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional


def check_config(name: str, config: Optional[Dict[str, Any]], allowed: Iterable[str]) -> Dict[str, Any]:
    """Return `config` as a dict, rejecting keys outside `allowed`."""
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"{name}: config must be a dict or None; got {type(config).__name__}")
    unknown = sorted(set(config) - set(allowed))
    if unknown:
        raise ValueError(f"{name}: unknown config keys {unknown}. Allowed: {sorted(allowed)}")
    return config
