#!/usr/bin/env python3
"""
Signal evaluation CLI.

Loads a price file, selects a time range and prints the SSL Channel,
Trend Fusion and combined signal for it.
"""
import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import pandas as pd

from sslfusion.data.loader import DataLoader, DataLoadError, DataValidationError
from sslfusion.data.windows import TimeRange, select_custom_window
from sslfusion.signals.config import DEFAULT_SETTINGS
from sslfusion.signals.config_loader import load_settings_from_yaml
from sslfusion.signals.evaluator import SignalEvaluator, RangeEvaluation


def setup_logging(log_path: Optional[Path] = None, verbose: bool = False):
    """
    Setup logging to stdout and optionally to file.

    Args:
        log_path: Path to log file (None = stdout only)
        verbose: If True, use DEBUG level, otherwise INFO
    """
    level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Evaluate the SSL Channel + Trend Fusion signal on a price file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Last day of data with default settings
    python -m cli.evaluate data/trading-data.json

    # Year to date, custom indicator settings
    python -m cli.evaluate data/trading-data.json --range YTD --config configs/default.yaml

    # Explicit interval
    python -m cli.evaluate data/gold.csv --from 2024-01-01 --to 2024-06-30
        """
    )
    parser.add_argument("data_file", help="Price file (.json records or .csv with OHLC columns)")
    parser.add_argument(
        "--range", "-r",
        dest="time_range",
        default="1D",
        help="Time range token: 1H, 1D, 5D, 1M, 3M, 6M, YTD, 1Y, 5Y, 10Y, All (default: 1D)",
    )
    parser.add_argument("--from", dest="from_date", help="Custom range start (inclusive)")
    parser.add_argument("--to", dest="to_date", help="Custom range end (inclusive)")
    parser.add_argument("--config", "-c", help="Indicator settings YAML file")
    parser.add_argument(
        "--wicks",
        action="store_true",
        help="SSL Channel compares bar high/low instead of close",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads for indicator computation (1 = sequential)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging (DEBUG level)")
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file")
    return parser


def format_evaluation(evaluation: RangeEvaluation) -> str:
    """Human-readable summary of one evaluation."""
    ssl = evaluation.ssl_channel
    trend = evaluation.trend_fusion
    signal = evaluation.signal
    lines = [
        "=" * 60,
        f"Range:         {evaluation.time_range.value} ({len(evaluation.window)} bars)",
        f"SSL Channel:   {ssl.signal.value} (hlv={ssl.hlv}, up={ssl.ssl_up:.2f}, down={ssl.ssl_down:.2f})",
    ]
    if ssl.buy_signal:
        lines.append("               buy crossover on last bar")
    if ssl.sell_signal:
        lines.append("               sell crossover on last bar")
    lines += [
        f"Trend Fusion:  {trend.trend_direction.value} (short={trend.short_ema:.2f}, long={trend.long_ema:.2f})",
        f"RSI:           {trend.rsi_value:.1f} (momentum {trend.momentum:+.1f}, bias {trend.rsi_bias.value})",
        f"Signal:        {signal.signal_type.value} @ {signal.price:.2f} ({signal.timestamp})",
        "=" * 60,
    ]
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings_from_yaml(args.config) if args.config else DEFAULT_SETTINGS
        if args.wicks:
            settings = replace(settings, use_wicks=True)
        from_date = pd.Timestamp(args.from_date) if args.from_date else None
        to_date = pd.Timestamp(args.to_date) if args.to_date else None
        series = DataLoader(args.data_file).load()
    except (FileNotFoundError, ValueError, DataLoadError, DataValidationError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    evaluator = SignalEvaluator(settings, max_workers=args.workers)
    time_range = TimeRange.from_token(args.time_range)
    if from_date is not None or to_date is not None or time_range is TimeRange.CUSTOM:
        window = select_custom_window(series, from_date, to_date)
        evaluation = evaluator.evaluate_window(window, time_range=TimeRange.CUSTOM)
    else:
        evaluation = evaluator.evaluate(series, time_range)

    print(format_evaluation(evaluation))
    return 0


if __name__ == "__main__":
    sys.exit(main())
