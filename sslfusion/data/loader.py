"""
Price data loader.

Loads OHLC price series from:
- JSON exports (a list of {timestamp, open, high, low, close} records,
  numbers possibly encoded as strings)
- CSV files with a date index column and Open/High/Low/Close columns

Loaded series are sorted, UTC-indexed DataFrames with Open/High/Low/Close
columns, validated at load time. The indicator modules never validate their
input; this is the boundary where malformed data is rejected.
"""
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Union

import numpy as np
import pandas as pd

from ..shared.types import PriceBar

logger = logging.getLogger(__name__)

OHLC_COLUMNS = ["Open", "High", "Low", "Close"]


class DataLoadError(Exception):
    """Raised when a price file cannot be parsed into an OHLC series."""
    pass


class DataValidationError(Exception):
    """Raised when a price series breaks the OHLC input contract."""
    pass


def _normalize_columns(df: pd.DataFrame, source: str) -> pd.DataFrame:
    """Map open/high/low/close columns (any case) to Open/High/Low/Close."""
    mapping = {}
    for col in df.columns:
        name = str(col).strip().lower()
        if name in ("open", "high", "low", "close"):
            mapping[col] = name.capitalize()
    df = df.rename(columns=mapping)
    missing = [c for c in OHLC_COLUMNS if c not in df.columns]
    if missing:
        raise DataLoadError(f"Missing columns {missing} in {source}. Available: {list(df.columns)}")
    try:
        return df[OHLC_COLUMNS].apply(pd.to_numeric).astype(float)
    except (TypeError, ValueError) as e:
        raise DataLoadError(f"Non-numeric price values in {source}: {e}") from e


def bars_to_frame(bars: Iterable[PriceBar]) -> pd.DataFrame:
    """Convert PriceBar records to an OHLC DataFrame indexed by timestamp (order kept)."""
    bars = list(bars)
    index = pd.DatetimeIndex([pd.Timestamp(b.timestamp) for b in bars], name="timestamp")
    return pd.DataFrame(
        {
            "Open": [float(b.open) for b in bars],
            "High": [float(b.high) for b in bars],
            "Low": [float(b.low) for b in bars],
            "Close": [float(b.close) for b in bars],
        },
        index=index,
    )


def frame_to_bars(df: pd.DataFrame) -> List[PriceBar]:
    """Convert an OHLC DataFrame back to PriceBar records."""
    return [
        PriceBar(
            timestamp=ts,
            open=float(row.Open),
            high=float(row.High),
            low=float(row.Low),
            close=float(row.Close),
        )
        for ts, row in zip(df.index, df.itertuples(index=False))
    ]


def validate_price_frame(df: pd.DataFrame) -> None:
    """
    Check the OHLC input contract.

    - timestamps non-decreasing
    - no missing prices, no negative prices
    - low <= high and open/close inside [low, high]

    Raises:
        DataValidationError: Describing the first violation found
    """
    if not df.index.is_monotonic_increasing:
        raise DataValidationError("Timestamps are not in chronological order")
    prices = df[OHLC_COLUMNS]
    if prices.isna().any().any():
        raise DataValidationError(f"Missing prices in {int(prices.isna().any(axis=1).sum())} bars")
    if (prices < 0).any().any():
        raise DataValidationError("Negative prices found")

    low, high = df["Low"], df["High"]
    checks = {
        "low > high": low > high,
        "open outside [low, high]": (df["Open"] < low) | (df["Open"] > high),
        "close outside [low, high]": (df["Close"] < low) | (df["Close"] > high),
    }
    for label, mask in checks.items():
        if mask.any():
            first = df.index[np.argmax(mask.to_numpy())]
            raise DataValidationError(f"{int(mask.sum())} bars with {label} (first at {first})")


class DataLoader:
    """
    Loads OHLC price data from a JSON or CSV file.

    Supports date range filtering.
    """

    def __init__(self, data_path: Union[str, Path]):
        """
        Initialize the data loader.

        Args:
            data_path: Path to a .json or .csv price file
        """
        self.data_path = Path(data_path)
        if not self.data_path.exists():
            raise FileNotFoundError(f"Data file not found: {self.data_path}")

    def _read_json(self) -> pd.DataFrame:
        try:
            with open(self.data_path, 'r') as f:
                records = json.load(f)
        except json.JSONDecodeError as e:
            raise DataLoadError(f"Invalid JSON data in {self.data_path}: {e}") from e
        if not isinstance(records, list):
            raise DataLoadError(f"Expected a list of price records in {self.data_path}")
        if not records:
            return pd.DataFrame(columns=OHLC_COLUMNS, index=pd.DatetimeIndex([], tz="UTC", name="timestamp"))

        df = pd.DataFrame.from_records(records)
        if "timestamp" not in df.columns:
            raise DataLoadError(f"Missing 'timestamp' field in {self.data_path}")
        try:
            df.index = pd.DatetimeIndex(pd.to_datetime(df.pop("timestamp"), utc=True), name="timestamp")
        except (TypeError, ValueError) as e:
            raise DataLoadError(f"Invalid timestamps in {self.data_path}: {e}") from e
        return df

    def _read_csv(self) -> pd.DataFrame:
        df = pd.read_csv(self.data_path, index_col=0)
        try:
            df.index = pd.DatetimeIndex(pd.to_datetime(df.index, utc=True), name="timestamp")
        except (TypeError, ValueError) as e:
            raise DataLoadError(f"Invalid dates in {self.data_path}: {e}") from e
        return df

    def load(
        self,
        start_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
        end_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
        validate: bool = True,
    ) -> pd.DataFrame:
        """
        Load the price series with optional filtering.

        Args:
            start_date: Start date for filtering (inclusive). If None, no start filter.
            end_date: End date for filtering (inclusive). If None, no end filter.
            validate: Run validate_price_frame on the loaded data

        Returns:
            DataFrame with UTC DatetimeIndex and Open/High/Low/Close columns

        Raises:
            DataLoadError: If the file cannot be parsed
            DataValidationError: If validate is True and the data is malformed
        """
        suffix = self.data_path.suffix.lower()
        if suffix == ".json":
            raw = self._read_json()
        elif suffix == ".csv":
            raw = self._read_csv()
        else:
            raise DataLoadError(f"Unsupported data file type '{suffix}': {self.data_path}")

        df = _normalize_columns(raw, str(self.data_path))
        df = df.sort_index(kind="mergesort")

        if start_date is not None:
            start_date = pd.Timestamp(start_date)
            start_date = start_date.tz_localize("UTC") if start_date.tzinfo is None else start_date
            df = df[df.index >= start_date]

        if end_date is not None:
            end_date = pd.Timestamp(end_date)
            end_date = end_date.tz_localize("UTC") if end_date.tzinfo is None else end_date
            df = df[df.index <= end_date]

        if validate:
            validate_price_frame(df)

        logger.info(f"Loaded {len(df)} bars from {self.data_path}")
        return df
