# -*- coding: utf-8 -*-
"""pandas-ta trendflex.stateful – streaming / stateful indicator package.

Category modules populate STATEFUL_REGISTRY and SEED_REGISTRY at import
time.  This package re-exports them plus the shared base API.
"""
from __future__ import annotations

# Base API (always available)
from ._base import (
    Transform,
    Identity,
    StatefulIndicator,
    STATEFUL_REGISTRY,
    SEED_REGISTRY,
    replay_seed,
    build_state_key,
    resolve_output_names,
    stateful_supported_kinds,
    STATEFUL_SPEC_EXCLUDES,
    _param,
    _as_int,
)

# ---------------------------------------------------------------------------
# Category modules – each populates the shared registries on import
# ---------------------------------------------------------------------------
from ._cycle import (       # trendflex
    TRENDFLEXState,
    TrendFlex,
    trendflex_make,
    trendflex_update_raw,
)

__all__ = [
    # base
    "Transform",
    "Identity",
    "StatefulIndicator",
    "STATEFUL_REGISTRY",
    "SEED_REGISTRY",
    "replay_seed",
    "build_state_key",
    "resolve_output_names",
    "stateful_supported_kinds",
    # cycle
    "TRENDFLEXState",
    "TrendFlex",
    "trendflex_make",
    "trendflex_update_raw",
]
