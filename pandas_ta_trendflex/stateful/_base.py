# -*- coding: utf-8 -*-
"""pandas-ta trendflex stateful – shared base: transforms, helpers, registries.

Category modules (``_cycle``) import from here and populate the
registries at load time.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from numbers import Integral
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import warnings


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _param(params: Dict[str, Any], key: str, default: Any) -> Any:
    """Pull *key* from *params*; treat None as missing → default."""
    value = params.get(key, default)
    return default if value is None else value


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


def _check_length(length: Any) -> int:
    """Window lengths must be positive integers (bool excluded)."""
    if isinstance(length, bool) or not isinstance(length, Integral):
        raise ValueError(f"[X] length must be an int, got {type(length).__name__}")
    if length <= 0:
        raise ValueError(f"[X] length must be > 0, got {length}")
    return int(length)


# ---------------------------------------------------------------------------
# Transform chain
# ---------------------------------------------------------------------------

class Transform(ABC):
    """One-sample-at-a-time streaming computation.

    A transform consumes a sample with ``update`` and reports its most
    recent output with ``last``.  Chained indicators own their upstream
    transform and feed it first.
    """

    @abstractmethod
    def update(self, value: float) -> None:
        """Consume one sample.  Not idempotent."""

    @abstractmethod
    def last(self) -> float:
        """Most recent output (0.0 before the first update)."""


class Identity(Transform):
    """Republishes its input unchanged."""

    __slots__ = ("_value",)

    def __init__(self) -> None:
        self._value = 0.0

    def update(self, value: float) -> None:
        self._value = float(value)

    def last(self) -> float:
        return self._value

    def __repr__(self) -> str:
        return f"Identity(last={self._value!r})"


# ---------------------------------------------------------------------------
# Indicator descriptor & registries  (populated by category modules)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StatefulIndicator:
    """Immutable descriptor for a single stateful indicator."""
    kind:         str
    inputs:       Tuple[str, ...]
    init:         Callable[[Dict[str, Any]], Any]
    update:       Callable[[Any, Dict[str, Any], Dict[str, Any]],
                           Tuple[List[Optional[float]], Any]]
    output_names: Callable[[Dict[str, Any]], List[str]]


# Populated by category modules at import time.
STATEFUL_REGISTRY: Dict[str, StatefulIndicator] = {}
SEED_REGISTRY:     Dict[str, Callable] = {}     # kind -> seed_fn(inputs, params) -> State


# ---------------------------------------------------------------------------
# Generic seed helper
# ---------------------------------------------------------------------------

def replay_seed(kind: str, inputs: Dict[str, Any], params: Dict[str, Any]) -> Any:
    """Generic seed: replay the stateful update over historical Series.

    *inputs* values must be ``pd.Series`` (or any indexable with ``.iloc``).
    Returns the final *State* after processing all rows.  Rows with a
    missing value in any input are skipped.
    """
    import pandas as pd          # lazy – pandas not required at module load
    indicator = STATEFUL_REGISTRY.get(kind)
    if indicator is None:
        raise ValueError(f"Indicator '{kind}' not found in STATEFUL_REGISTRY")
    state = indicator.init(params)
    keys = list(inputs.keys())
    if not keys:
        return state
    n = len(inputs[keys[0]])
    skipped = 0
    for i in range(n):
        bar: Dict[str, float] = {}
        valid = True
        for k in keys:
            v = inputs[k].iloc[i]
            if pd.isna(v):
                valid = False
                break
            bar[k] = float(v)
        if not valid:
            skipped += 1
            continue
        _, state = indicator.update(state, bar, params)
    if skipped:
        warnings.warn(
            f"replay_seed('{kind}') skipped {skipped} of {n} rows with missing inputs.",
            UserWarning,
            stacklevel=2
        )
    return state


# ---------------------------------------------------------------------------
# Output-name helpers
# ---------------------------------------------------------------------------

STATEFUL_SPEC_EXCLUDES = frozenset({
    "kind", "append", "prefix", "suffix", "delimiter",
    "col_names", "state_key", "returns", "returns_state",
    "name", "description",
})


def build_state_key(kind: str, spec: Dict[str, Any]) -> str:
    """Deterministic cache-key from *kind* + non-meta params."""
    parts = sorted(
        ((k, v) for k, v in spec.items() if k not in STATEFUL_SPEC_EXCLUDES),
        key=lambda x: x[0],
    )
    payload = "|".join(f"{k}={repr(v)}" for k, v in parts)
    return f"{kind}|{payload}" if payload else kind


def resolve_output_names(
        base_names: List[str], spec: Dict[str, Any]
) -> Tuple[Optional[List[str]], Optional[str]]:
    """Apply prefix / suffix / col_names overrides from *spec*."""
    names = list(base_names)
    delimiter = spec.get("delimiter", "_")
    prefix = spec.get("prefix") or ""
    suffix = spec.get("suffix") or ""
    if prefix:
        prefix = f"{prefix}{delimiter}"
    if suffix:
        suffix = f"{delimiter}{suffix}"
    if prefix or suffix:
        names = [f"{prefix}{n}{suffix}" for n in names]
    col_names = spec.get("col_names")
    if col_names is not None:
        if not isinstance(col_names, tuple):
            col_names = (col_names,)
        if len(col_names) < len(names):
            return None, f"[!] col_names too short: {len(col_names)} < {len(names)}"
        names = list(col_names[: len(names)])
    return names, None


def stateful_supported_kinds() -> List[str]:
    """Return sorted list of supported indicator kinds."""
    return sorted(STATEFUL_REGISTRY.keys())
