"""
Range evaluation: window selection + both indicators + confluence.

The SSL Channel and Trend Fusion are independent pure computations over the
same window, so they can run in parallel via ThreadPoolExecutor.
"""
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

import pandas as pd

from .combinator import combine
from .config import IndicatorSettings, DEFAULT_SETTINGS
from ..data.windows import TimeRange, select_window
from ..indicators.ssl_channel import SSLChannelResult, calculate_ssl_channel
from ..indicators.trend_fusion import TrendFusionResult, calculate_trend_fusion
from ..shared.defaults import DEFAULT_TIME_RANGE
from ..shared.types import TradingSignal

logger = logging.getLogger(__name__)


@dataclass
class RangeEvaluation:
    """Everything computed for one window."""
    window: pd.DataFrame
    ssl_channel: SSLChannelResult
    trend_fusion: TrendFusionResult
    signal: TradingSignal
    time_range: TimeRange = TimeRange.CUSTOM


class SignalEvaluator:
    """Evaluates the combined signal for a price series and time range."""

    def __init__(
        self,
        settings: Optional[IndicatorSettings] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Args:
            settings: IndicatorSettings (default: DEFAULT_SETTINGS)
            max_workers: Thread pool size (default: min(2, cpu_count)); 1 = sequential.
        """
        self.settings = settings or DEFAULT_SETTINGS
        self.max_workers = max_workers

    def _compute_ssl_block(self, window: pd.DataFrame) -> Tuple[str, Any, float]:
        """Compute SSL Channel; returns (timing_key, result, elapsed)."""
        t0 = time.perf_counter()
        result = calculate_ssl_channel(window, self.settings.use_wicks, self.settings.ssl_channel)
        return "indicator_ssl_channel", result, time.perf_counter() - t0

    def _compute_trend_block(self, window: pd.DataFrame) -> Tuple[str, Any, float]:
        """Compute Trend Fusion; returns (timing_key, result, elapsed)."""
        t0 = time.perf_counter()
        result = calculate_trend_fusion(window, self.settings.trend_fusion)
        return "indicator_trend_fusion", result, time.perf_counter() - t0

    def evaluate_window(
        self,
        window: pd.DataFrame,
        timings: Optional[Dict[str, float]] = None,
        time_range: TimeRange = TimeRange.CUSTOM,
    ) -> RangeEvaluation:
        """
        Evaluate both indicators and the combined signal on a selected window.

        Args:
            window: OHLC bars, already restricted to the range of interest
            timings: If provided, accumulate per-indicator elapsed seconds
            time_range: Range the window was selected with (for reporting)

        Returns:
            RangeEvaluation
        """
        def _acc(key: str, elapsed: float) -> None:
            if timings is not None:
                timings[key] = timings.get(key, 0.0) + elapsed

        workers = (
            max(1, self.max_workers)
            if self.max_workers is not None
            else min(2, os.cpu_count() or 1)
        )

        results: Dict[str, Any] = {}
        if workers <= 1:
            for key, result, elapsed in [
                self._compute_ssl_block(window),
                self._compute_trend_block(window),
            ]:
                _acc(key, elapsed)
                results[key] = result
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [
                    executor.submit(self._compute_ssl_block, window),
                    executor.submit(self._compute_trend_block, window),
                ]
                for future in as_completed(futures):
                    key, result, elapsed = future.result()
                    _acc(key, elapsed)
                    results[key] = result

        ssl = results["indicator_ssl_channel"]
        trend = results["indicator_trend_fusion"]
        signal = combine(ssl, trend, window)
        logger.info(
            f"{time_range.value} window ({len(window)} bars): SSL {ssl.signal.value}, "
            f"Trend {trend.trend_direction.value} -> {signal.signal_type.value}"
        )
        return RangeEvaluation(
            window=window,
            ssl_channel=ssl,
            trend_fusion=trend,
            signal=signal,
            time_range=time_range,
        )

    def evaluate(
        self,
        series: pd.DataFrame,
        time_range: Union[TimeRange, str] = DEFAULT_TIME_RANGE,
        timings: Optional[Dict[str, float]] = None,
    ) -> RangeEvaluation:
        """
        Select the window for ``time_range`` and evaluate it.

        Args:
            series: Full OHLC series, sorted by timestamp
            time_range: TimeRange or token ("1D", "YTD", "All", ...)
            timings: If provided, accumulate per-indicator elapsed seconds

        Returns:
            RangeEvaluation (NEUTRAL signal with price 0.0 for an empty series)
        """
        time_range = TimeRange.from_token(time_range)
        window = select_window(series, time_range)
        return self.evaluate_window(window, timings=timings, time_range=time_range)
