#!/usr/bin/env python3
"""Benchmark TrendFlex incremental update speed.

Two measurements:
  - update: per-sample cost of TrendFlex.update for several window lengths
            (the difference sum makes this ~O(length))
  - seed:   cost of seeding state by replaying history of growing size
"""
from __future__ import annotations

import argparse
import copy
import os
import sys
from time import perf_counter
from typing import List

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import numpy as np
import pandas as pd
import pandas_ta_trendflex as ta


def make_close(rows: int, seed: int) -> pd.Series:
    rng = np.random.default_rng(seed)
    idx = pd.date_range("2025-01-01", periods=rows, freq="1min")
    base = 100 + rng.standard_normal(rows).cumsum()
    close = base + rng.normal(0, 0.2, rows)
    return pd.Series(close, index=idx, name="close")


def parse_list(value: str) -> List[int]:
    return [int(v.strip()) for v in value.split(",") if v.strip()]


def time_call(fn, runs: int) -> float:
    times = []
    for _ in range(max(runs, 1)):
        start = perf_counter()
        fn()
        times.append(perf_counter() - start)
    return sum(times) / len(times)


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--lengths",
        type=str,
        default="8,16,32,64,128",
        help="comma-separated window lengths",
    )
    ap.add_argument(
        "--sizes",
        type=str,
        default="1000,10000,50000",
        help="comma-separated history row counts for seeding",
    )
    ap.add_argument("--tail", type=int, default=1000, help="samples per timed update run")
    ap.add_argument("--seed", type=int, default=7)
    ap.add_argument("--warmup", type=int, default=1, help="warmup runs (not timed)")
    ap.add_argument("--runs", type=int, default=3, help="timed runs")
    ap.add_argument(
        "--mode",
        type=str,
        default="both",
        choices=("update", "seed", "both"),
        help="benchmark mode",
    )
    args = ap.parse_args()

    lengths = parse_list(args.lengths)
    sizes = parse_list(args.sizes)

    print(f"[i] lengths: {lengths}")
    print(f"[i] sizes: {sizes}")
    print(f"[i] tail: {args.tail}")
    print(f"[i] runs: {args.runs} (warmup: {args.warmup})")
    print(f"[i] mode: {args.mode}")

    if args.mode in ("update", "both"):
        close = make_close(args.tail * 2, args.seed)
        hist = [float(v) for v in close.iloc[: args.tail]]
        tail = [float(v) for v in close.iloc[args.tail:]]
        for length in lengths:
            base = ta.TrendFlex(length)
            for v in hist:
                base.update(v)

            def run_update():
                tf = copy.deepcopy(base)
                for v in tail:
                    tf.update(v)

            for _ in range(max(args.warmup, 0)):
                run_update()
            avg = time_call(run_update, args.runs)
            print(
                f"[update] length={length} tail={len(tail)} avg_s={avg:.6f} "
                f"us_per_sample={avg * 1e6 / max(len(tail), 1):.3f}"
            )

    if args.mode in ("seed", "both"):
        seed_fn = ta.SEED_REGISTRY["trendflex"]
        for rows in sizes:
            close = make_close(rows, args.seed)
            for length in lengths:
                params = {"length": length}

                def run_seed():
                    seed_fn({"close": close}, params)

                for _ in range(max(args.warmup, 0)):
                    run_seed()
                avg = time_call(run_seed, args.runs)
                print(f"[seed] rows={rows} length={length} avg_s={avg:.6f}")


if __name__ == "__main__":
    main()
