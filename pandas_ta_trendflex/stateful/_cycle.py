# -*- coding: utf-8 -*-
"""pandas-ta trendflex stateful -- cycle indicators.

Each section follows the pattern:
  1. State dataclass
  2. make / update_raw helpers and the chainable Transform
  3. init / update / output_names helpers
  4. STATEFUL_REGISTRY["<kind>"] = StatefulIndicator(...)
  5. SEED_REGISTRY["<kind>"]     = seed_fn

Seed-method legend:
  internal_series -- seed_fn needs intermediate series (the SuperSmoother
                     history) so the recursive chain stays numerically
                     identical; it replays every bar through update().
"""
from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Optional, Tuple

from ._base import (
    _param,
    _as_int,
    _check_length,
    Identity,
    Transform,
    StatefulIndicator,
    STATEFUL_REGISTRY,
    SEED_REGISTRY,
    replay_seed,
)


# ===========================================================================
# TRENDFLEX  (internal_series) -- Ehlers TrendFlex
# ===========================================================================
# SuperSmoother of the close midpoint, then the average distance of the
# current filter value from its window history, normalised by an EMA of
# its own square (alpha = 0.04).
# State: last_val, last_m, filt_hist (<= length + 1 entries), out
# Default: length=20

@dataclass
class TRENDFLEXState:
    length: int
    last_val: float = 0.0
    last_m: float = 0.0
    out: float = 0.0
    filt_hist: Deque[float] = field(default_factory=deque)
    # Pre-computed SuperSmoother constants
    a1: float = 0.0
    b1: float = 0.0
    c1: float = 0.0
    c3: float = 0.0


def trendflex_make(length: int) -> TRENDFLEXState:
    """Fresh TrendFlex state for a window of *length* samples."""
    length = _check_length(length)
    state = TRENDFLEXState(length=length)
    state.a1 = math.exp(-8.88442402435 / length)
    state.b1 = 2.0 * state.a1 * math.cos(4.44221201218 / length)
    state.c3 = -state.a1 * state.a1
    state.c1 = 1.0 - state.b1 - state.c3
    return state


def trendflex_update_raw(state: TRENDFLEXState, x: float) -> Tuple[float, TRENDFLEXState]:
    """Single-step TrendFlex update.  Returns (value, state).

    The value is 0.0 while fewer than *length* filter values are held
    and whenever the mean-square estimate is not positive.
    """
    hist = state.filt_hist
    if not hist:
        state.last_val = x
    # Trim before appending: the history briefly holds length + 1 values.
    if len(hist) > state.length:
        hist.popleft()

    l = len(hist)
    filt = state.c1 * (x + state.last_val) / 2.0
    if l == 1:
        filt += state.b1 * hist[-1]
    elif l > 1:
        filt += state.b1 * hist[-1]
        filt += state.c3 * hist[-2]
    state.last_val = x
    hist.append(filt)

    # sum the differences, newest first
    d_sum = 0.0
    for prev in reversed(hist):
        d_sum += filt - prev
    d_sum /= state.length

    # normalise by the running root mean square
    ms0 = 0.04 * (d_sum * d_sum) + 0.96 * state.last_m
    state.last_m = ms0
    if len(hist) < state.length:
        state.out = 0.0
    elif ms0 > 0.0:
        state.out = d_sum / math.sqrt(ms0)
    else:
        state.out = 0.0
    return state.out, state


class TrendFlex(Transform):
    """Chainable TrendFlex oscillator.

    Every sample is fed through *upstream* first; TrendFlex runs on the
    upstream's output.  Without an upstream the raw samples are used.
    Any Transform can be an upstream, including another TrendFlex.
    """

    def __init__(self, window_len: int = 20, upstream: Optional[Transform] = None) -> None:
        self.state = trendflex_make(window_len)
        self.upstream = upstream if upstream is not None else Identity()

    @classmethod
    def new(cls, upstream: Transform, window_len: int) -> "TrendFlex":
        """TrendFlex chained after *upstream*."""
        return cls(window_len, upstream)

    @classmethod
    def new_final(cls, window_len: int) -> "TrendFlex":
        """TrendFlex driven directly by raw samples."""
        return cls(window_len, Identity())

    @property
    def window_len(self) -> int:
        return self.state.length

    def update(self, value: float) -> None:
        self.upstream.update(value)
        trendflex_update_raw(self.state, self.upstream.last())

    def last(self) -> float:
        return self.state.out

    def __repr__(self) -> str:
        return f"TrendFlex(window_len={self.state.length}, upstream={self.upstream!r})"


def _trendflex_init(params: Dict[str, Any]) -> TRENDFLEXState:
    length = _as_int(_param(params, "length", 20), 20)
    return trendflex_make(length)


def _trendflex_update(
    state: TRENDFLEXState, bar: Dict[str, Any], params: Dict[str, Any]
) -> Tuple[List[Optional[float]], TRENDFLEXState]:
    close = bar["close"]
    value, state = trendflex_update_raw(state, close)
    # Warmup
    if len(state.filt_hist) < state.length:
        return [None], state
    return [value], state


def _trendflex_output_names(params: Dict[str, Any]) -> List[str]:
    length = _as_int(_param(params, "length", 20), 20)
    return [f"TRENDFLEX_{length}"]


def _trendflex_seed(series: Dict[str, Any], params: Dict[str, Any]) -> TRENDFLEXState:
    """internal_series: the full SuperSmoother history is needed, so replay."""
    return replay_seed("trendflex", series, params)


STATEFUL_REGISTRY["trendflex"] = StatefulIndicator(
    kind="trendflex",
    inputs=("close",),
    init=_trendflex_init,
    update=_trendflex_update,
    output_names=_trendflex_output_names,
)
SEED_REGISTRY["trendflex"] = _trendflex_seed
