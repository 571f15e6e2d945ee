#!/usr/bin/env python3
"""Fit the CTRUE efficiency versus mu from per-run observed/total counts.

The input table has one row per run with columns run, observed, total
(for example the output of AccumulatorState.buckets_frame()).

Usage:
  python -m ctrue_tools.estimate_efficiency output/buckets.csv --period pbpb2018
  python -m ctrue_tools.estimate_efficiency output/buckets.csv --run-table runs.csv --degree 2
"""

import argparse
import os
import sys

import pandas as pd

from ctrue_tools.trigger_classifier.config import PERIODS

REQUIRED_COLUMNS = ("run", "observed", "total")


def load_buckets(path):
    """Read a bucket table (CSV or Parquet) into {run: RunBucket}."""
    from ctrue_tools.trigger_classifier.types import RunBucket

    if path.endswith(".parquet"):
        df = pd.read_parquet(path)
    else:
        df = pd.read_csv(path)

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        print(f"ERROR: {path} is missing column(s): {', '.join(missing)}")
        sys.exit(1)

    bad = df[(df["observed"] < 0) | (df["total"] < 0) | (df["observed"] > df["total"])]
    if len(bad) > 0:
        print(f"ERROR: {path} has {len(bad)} row(s) with negative counts or observed > total "
              f"(runs: {', '.join(str(r) for r in bad['run'].tolist())})")
        sys.exit(1)

    grouped = df.groupby("run")[["observed", "total"]].sum()
    return {
        int(run): RunBucket(int(row.observed), int(row.total))
        for run, row in grouped.iterrows()
    }


def main():
    parser = argparse.ArgumentParser(
        description="Fit the CTRUE efficiency versus mu from per-run observed/total counts.",
    )
    parser.add_argument("input", help="CSV/Parquet file with columns run, observed, total")
    parser.add_argument("--period", choices=PERIODS, default="pbpb2018",
                        help="Good-run table preset (default: pbpb2018)")
    parser.add_argument("--run-table", default=None, metavar="CSV",
                        help="Use this run,weight,mu table instead of the preset")
    parser.add_argument("--degree", type=int, default=1,
                        help="Polynomial degree of the efficiency fit (default: 1)")
    parser.add_argument("-o", "--output", default=None, metavar="PATH",
                        help="Write the per-run efficiency table to PATH (.csv)")
    args = parser.parse_args()

    from ctrue_tools.trigger_classifier.efficiency import estimate_from_buckets
    from ctrue_tools.trigger_classifier.exceptions import ConfigurationError, InsufficientDataError
    from ctrue_tools.trigger_classifier.report import print_report
    from ctrue_tools.trigger_classifier.runs import GoodRunTable

    if not os.path.isfile(args.input):
        print(f"ERROR: Input not found: {args.input}")
        sys.exit(1)

    try:
        if args.run_table:
            table = GoodRunTable.from_csv(args.run_table, period=args.period)
        else:
            table = GoodRunTable.from_preset(args.period)
    except ConfigurationError as e:
        print(f"ERROR: {e}")
        sys.exit(1)
    print(f"Run table: {len(table)} good runs ({table.period})")

    buckets = load_buckets(args.input)
    unknown = [r for r in buckets if r not in table]
    print(f"Loaded {len(buckets)} run buckets")
    if unknown:
        print(f"WARNING: {len(unknown)} run(s) not in the good-run table, skipped: "
              f"{', '.join(str(r) for r in sorted(unknown))}")

    try:
        results = estimate_from_buckets(buckets, table, degree=args.degree)
    except InsufficientDataError as e:
        print(f"ERROR: efficiency not computable for this configuration ({e})")
        sys.exit(2)

    print_report(results)

    if args.output:
        pd.DataFrame(
            [(r.mu, r.weight, r.efficiency, r.error) for r in results],
            columns=["mu", "weight", "efficiency", "error"],
        ).to_csv(args.output, index=False)
        print(f"Saved efficiency table to {args.output}")


if __name__ == "__main__":
    main()
