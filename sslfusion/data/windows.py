"""
Time-range window selection.

Turns a full, chronologically sorted price series into the slice the
indicators are evaluated on. Start positions are found with a lower-bound
binary search on the DatetimeIndex (``searchsorted``), so selection is
O(log n) plus the cost of the slice.
"""
import logging
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple, Union

import pandas as pd

from ..shared.defaults import DEFAULT_TIME_RANGE

logger = logging.getLogger(__name__)

TimestampLike = Union[str, datetime, pd.Timestamp]


class TimeRange(Enum):
    """Named range tokens."""
    ONE_HOUR = "1H"
    ONE_DAY = "1D"
    FIVE_DAYS = "5D"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    YEAR_TO_DATE = "YTD"
    ONE_YEAR = "1Y"
    FIVE_YEARS = "5Y"
    TEN_YEARS = "10Y"
    ALL = "All"
    CUSTOM = "Custom"

    @classmethod
    def from_token(cls, token: Union["TimeRange", str]) -> "TimeRange":
        """
        Parse a range token case-insensitively ("1d", "ytd", "all").

        Unknown tokens fall back to the default range (1D) with a warning.
        """
        if isinstance(token, cls):
            return token
        wanted = str(token).strip().upper()
        for member in cls:
            if member.value.upper() == wanted:
                return member
        logger.warning(f"Unknown time range '{token}', falling back to {DEFAULT_TIME_RANGE}")
        return cls(DEFAULT_TIME_RANGE)


# Lookback per token; YTD, ALL and CUSTOM are handled separately
RANGE_DURATIONS = {
    TimeRange.ONE_HOUR: pd.Timedelta(hours=1),
    TimeRange.ONE_DAY: pd.Timedelta(days=1),
    TimeRange.FIVE_DAYS: pd.Timedelta(days=5),
    TimeRange.ONE_MONTH: pd.Timedelta(days=30),
    TimeRange.THREE_MONTHS: pd.Timedelta(days=90),
    TimeRange.SIX_MONTHS: pd.Timedelta(days=180),
    TimeRange.ONE_YEAR: pd.Timedelta(days=365),
    TimeRange.FIVE_YEARS: pd.Timedelta(days=5 * 365),
    TimeRange.TEN_YEARS: pd.Timedelta(days=10 * 365),
}


def _align_to_index(ts: TimestampLike, index: pd.DatetimeIndex) -> pd.Timestamp:
    """Make ``ts`` comparable with ``index`` (naive values are read as UTC)."""
    ts = pd.Timestamp(ts)
    if index.tz is not None:
        return ts.tz_localize("UTC").tz_convert(index.tz) if ts.tzinfo is None else ts.tz_convert(index.tz)
    if ts.tzinfo is not None:
        return ts.tz_convert("UTC").tz_localize(None)
    return ts


def _year_start(latest: pd.Timestamp) -> pd.Timestamp:
    """Jan 1, 00:00 UTC of the latest bar's (UTC) year, in the latest bar's timezone."""
    if latest.tzinfo is None:
        return pd.Timestamp(year=latest.year, month=1, day=1)
    year = latest.tz_convert("UTC").year
    return pd.Timestamp(year=year, month=1, day=1, tz="UTC").tz_convert(latest.tzinfo)


def range_cutoff(latest: pd.Timestamp, time_range: Union[TimeRange, str]) -> Optional[pd.Timestamp]:
    """
    Earliest timestamp included by ``time_range`` given the latest bar.

    Returns:
        Cutoff timestamp, or None for ALL (no cutoff)

    Raises:
        ValueError: For CUSTOM (use select_custom_window)
    """
    time_range = TimeRange.from_token(time_range)
    if time_range is TimeRange.ALL:
        return None
    if time_range is TimeRange.CUSTOM:
        raise ValueError("Custom ranges need explicit bounds; use select_custom_window()")
    if time_range is TimeRange.YEAR_TO_DATE:
        return _year_start(latest)
    return latest - RANGE_DURATIONS[time_range]


def select_window(series: pd.DataFrame, time_range: Union[TimeRange, str] = DEFAULT_TIME_RANGE) -> pd.DataFrame:
    """
    Select the trailing window of ``series`` for a named range.

    Args:
        series: OHLC DataFrame with a sorted DatetimeIndex
        time_range: TimeRange or token ("1H", "1D", ..., "YTD", "All")

    Returns:
        Contiguous suffix of ``series`` with timestamp >= cutoff
        (the full series, unchanged, for "All")
    """
    time_range = TimeRange.from_token(time_range)
    if len(series) == 0:
        return series

    cutoff = range_cutoff(series.index[-1], time_range)
    if cutoff is None:
        return series

    start = series.index.searchsorted(cutoff, side="left")
    window = series.iloc[start:]
    logger.debug(f"Selected {time_range.value} window: {len(window)} of {len(series)} bars")
    return window


def select_custom_window(
    series: pd.DataFrame,
    start: Optional[TimestampLike] = None,
    end: Optional[TimestampLike] = None,
) -> pd.DataFrame:
    """
    Select bars with start <= timestamp <= end.

    Args:
        series: OHLC DataFrame with a sorted DatetimeIndex
        start: Inclusive lower bound (None = from the first bar)
        end: Inclusive upper bound (None = to the last bar)

    Returns:
        Contiguous slice of ``series`` (empty if start > end)
    """
    if len(series) == 0:
        return series
    lo = 0 if start is None else series.index.searchsorted(_align_to_index(start, series.index), side="left")
    hi = len(series) if end is None else series.index.searchsorted(_align_to_index(end, series.index), side="right")
    if hi <= lo:
        return series.iloc[0:0]
    return series.iloc[lo:hi]


def full_data_range(series: pd.DataFrame) -> Optional[Tuple[pd.Timestamp, pd.Timestamp]]:
    """Return (first, last) timestamps of ``series``, or None if it is empty."""
    if len(series) == 0:
        return None
    return series.index[0], series.index[-1]
