"""Shared fixtures for the stateful TrendFlex tests."""

import numpy as np
import pandas as pd
import pytest


def random_walk(rows: int, seed: int) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return 100 + rng.standard_normal(rows).cumsum()


@pytest.fixture
def closes():
    """A reproducible close-price random walk."""
    return [float(v) for v in random_walk(400, 7)]


@pytest.fixture
def close_series(closes):
    idx = pd.date_range("2025-01-01", periods=len(closes), freq="1min")
    return pd.Series(closes, index=idx, name="close")
