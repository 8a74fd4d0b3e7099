#!/usr/bin/env python3
"""Print descriptive statistics for a column of numbers.

Usage:
    python scripts/describe_values.py --file prices.csv --column close
    python scripts/describe_values.py --file prices.csv --column close --window 50
    cat values.txt | python scripts/describe_values.py
"""
import sys
import argparse
from pathlib import Path
from typing import List, Optional

import pandas as pd

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from momentstats.analysis.descriptive import INFINITE_WINDOW, DescriptiveStatistics
from momentstats.analysis.summary import SummaryStatistics
from momentstats.core.errors import StatisticsError
from momentstats.core.logging import setup_logging


def load_values(file: Optional[str], column: Optional[str]) -> List[float]:
    """Read values from a CSV column, or whitespace separated numbers on stdin."""
    if file is None:
        return [float(token) for token in sys.stdin.read().split()]

    df = pd.read_csv(file)
    if column is None:
        numeric = df.select_dtypes(include="number")
        if numeric.empty:
            raise ValueError(f"No numeric column in {file}")
        column = numeric.columns[0]
    if column not in df.columns:
        raise ValueError(f"Column '{column}' not found in {file}")
    return df[column].dropna().astype(float).tolist()


def print_report(stored: DescriptiveStatistics, running: SummaryStatistics):
    """Print both the windowed and the running summary."""
    window = "all values" if stored.window_size == INFINITE_WINDOW else f"last {stored.window_size}"
    print("\n" + "=" * 60)
    print(f"DESCRIPTIVE STATISTICS ({window})")
    print("=" * 60)
    print(stored.to_series().to_string())
    for p in (25, 50, 75):
        if stored.n:
            print(f"p{p:<3} {stored.get_percentile(p):.6g}")

    print("\n" + "=" * 60)
    print("RUNNING SUMMARY (all values)")
    print("=" * 60)
    print(running.get_summary().to_series().to_string())


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Descriptive statistics for a column of numbers")
    parser.add_argument("--file", help="CSV file to read (stdin when omitted)")
    parser.add_argument("--column", help="Column to describe (first numeric column by default)")
    parser.add_argument("--window", type=int, default=INFINITE_WINDOW, help="Rolling window size")
    parser.add_argument("--log-level", default=None, help="Logging level")
    args = parser.parse_args(argv)

    logger = setup_logging(level=args.log_level)

    try:
        values = load_values(args.file, args.column)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load values: {e}")
        return 1
    logger.info(f"Loaded {len(values)} values")

    try:
        stored = DescriptiveStatistics(window_size=args.window)
    except StatisticsError as e:
        logger.error(f"Invalid window: {e}")
        return 1
    running = SummaryStatistics()
    for value in values:
        stored.add_value(value)
        running.add_value(value)

    print_report(stored, running)
    return 0


if __name__ == "__main__":
    sys.exit(main())
