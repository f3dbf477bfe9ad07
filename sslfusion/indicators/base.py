"""
Base indicator interface.

All indicators follow this pattern:
1. Evaluate a single result from a window of OHLC bars (the last bar is "now")
2. Optionally replay that evaluation bar by bar to build a history
"""
from abc import ABC, abstractmethod
from dataclasses import asdict
from enum import Enum
from typing import Any, Dict, Optional, Union
from datetime import datetime

import pandas as pd


def result_to_row(result: Any) -> Dict[str, Any]:
    """Flatten an indicator result dataclass into a plain dict (enums become their values)."""
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in asdict(result).items()
    }


class Indicator(ABC):
    """
    Base class for all indicators.

    Indicators calculate values from an OHLC window (DataFrame with a
    DatetimeIndex and Open/High/Low/Close columns). They do not combine
    signals themselves.
    """

    @abstractmethod
    def evaluate(self, window: pd.DataFrame) -> Any:
        """
        Evaluate the indicator at the last bar of ``window``.

        Args:
            window: OHLC bars, oldest first

        Returns:
            Indicator result for the last bar
        """
        pass

    def calculate(self, data: pd.DataFrame) -> pd.DataFrame:
        """
        Evaluate the indicator at every bar of ``data``.

        Each row is the result of ``evaluate`` on all bars up to and including
        that row, so the output matches what a live evaluation would have
        produced at that point in time.

        Returns:
            DataFrame with one row per bar (same index as data)
        """
        rows = [result_to_row(self.evaluate(data.iloc[: i + 1])) for i in range(len(data))]
        return pd.DataFrame(rows, index=data.index)

    def get_value_at(
        self,
        data: pd.DataFrame,
        timestamp: Union[str, datetime, pd.Timestamp],
    ) -> Optional[Any]:
        """
        Get the indicator result at a specific timestamp.

        If the timestamp falls between bars, the latest bar at or before it
        is used.

        Returns:
            Indicator result, or None if the timestamp precedes all data
        """
        if len(data) == 0:
            return None
        ts = pd.Timestamp(timestamp)
        tz = getattr(data.index, "tz", None)
        if tz is not None and ts.tzinfo is None:
            ts = ts.tz_localize(tz)
        elif tz is None and ts.tzinfo is not None:
            ts = ts.tz_convert("UTC").tz_localize(None)
        # last bar at or before ts; repeated timestamps resolve to the last of them
        idx = data.index.searchsorted(ts, side="right") - 1
        if idx < 0:
            return None
        return self.evaluate(data.iloc[: idx + 1])
