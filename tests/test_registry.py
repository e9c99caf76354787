"""
Tests for the registered "trendflex" indicator, seeding and naming helpers.
"""

import math

import pandas as pd
import pytest

from pandas_ta_trendflex import (
    SEED_REGISTRY,
    STATEFUL_REGISTRY,
    TrendFlex,
    build_state_key,
    replay_seed,
    resolve_output_names,
    stateful_supported_kinds,
)


@pytest.fixture
def indicator():
    return STATEFUL_REGISTRY["trendflex"]


class TestRegistry:
    """Test cases for the registry entry."""

    def test_registered(self, indicator):
        assert indicator.kind == "trendflex"
        assert indicator.inputs == ("close",)
        assert "trendflex" in SEED_REGISTRY
        assert stateful_supported_kinds() == ["trendflex"]

    def test_init_defaults(self, indicator):
        assert indicator.init({}).length == 20
        assert indicator.init({"length": None}).length == 20
        assert indicator.init({"length": "abc"}).length == 20
        assert indicator.init({"length": "12"}).length == 12

    @pytest.mark.parametrize("length", [0, -5])
    def test_init_rejects_non_positive(self, indicator, length):
        with pytest.raises(ValueError):
            indicator.init({"length": length})

    def test_output_names(self, indicator):
        assert indicator.output_names({}) == ["TRENDFLEX_20"]
        assert indicator.output_names({"length": 10}) == ["TRENDFLEX_10"]

    def test_update_matches_transform(self, indicator, closes):
        params = {"length": 10}
        state = indicator.init(params)
        tf = TrendFlex(10)
        for i, close in enumerate(closes):
            values, state = indicator.update(state, {"close": close}, params)
            tf.update(close)
            assert len(values) == 1
            if i < 9:
                assert values[0] is None
                assert tf.last() == 0.0
            else:
                assert values[0] == tf.last()


class TestSeed:
    """Test cases for seeding by replaying history."""

    def test_seed_matches_streaming(self, close_series, closes):
        params = {"length": 12}
        state = SEED_REGISTRY["trendflex"]({"close": close_series}, params)

        tf = TrendFlex(12)
        for close in closes:
            tf.update(close)

        assert state.out == tf.last()
        assert state.last_m == tf.state.last_m
        assert state.last_val == tf.state.last_val
        assert list(state.filt_hist) == list(tf.state.filt_hist)

    def test_seed_then_continue(self, close_series, closes):
        params = {"length": 12}
        split = 300
        state = replay_seed("trendflex", {"close": close_series.iloc[:split]}, params)
        indicator = STATEFUL_REGISTRY["trendflex"]

        tf = TrendFlex(12)
        for close in closes[:split]:
            tf.update(close)
        for close in closes[split:]:
            values, state = indicator.update(state, {"close": close}, params)
            tf.update(close)
            assert values[0] == tf.last()

    def test_seed_skips_missing(self, closes):
        series = pd.Series(closes[:50])
        series.iloc[[3, 17]] = float("nan")
        with pytest.warns(UserWarning, match="skipped 2 of 50"):
            state = replay_seed("trendflex", {"close": series}, {"length": 8})

        tf = TrendFlex(8)
        for close in series.dropna():
            tf.update(close)
        assert state.out == tf.last()
        assert not math.isnan(state.out)

    def test_seed_empty_inputs(self):
        state = replay_seed("trendflex", {}, {"length": 5})
        assert state.length == 5
        assert len(state.filt_hist) == 0

    def test_seed_unknown_kind(self, close_series):
        with pytest.raises(ValueError, match="not found"):
            replay_seed("nope", {"close": close_series}, {})


class TestNaming:
    """Test cases for state keys and output-name overrides."""

    def test_build_state_key(self):
        spec = {"kind": "trendflex", "length": 10, "prefix": "x"}
        assert build_state_key("trendflex", spec) == "trendflex|length=10"
        assert build_state_key("trendflex", {"kind": "trendflex"}) == "trendflex"

    def test_build_state_key_is_order_independent(self):
        a = build_state_key("trendflex", {"length": 10, "scalar": 2})
        b = build_state_key("trendflex", {"scalar": 2, "length": 10})
        assert a == b

    def test_prefix_suffix(self):
        names, err = resolve_output_names(["TRENDFLEX_10"], {"prefix": "btc", "suffix": "1m"})
        assert err is None
        assert names == ["btc_TRENDFLEX_10_1m"]

    def test_col_names(self):
        names, err = resolve_output_names(["TRENDFLEX_10"], {"col_names": "tf"})
        assert err is None
        assert names == ["tf"]

    def test_col_names_too_short(self):
        names, err = resolve_output_names(["TRENDFLEX_10"], {"col_names": ()})
        assert names is None
        assert "too short" in err
