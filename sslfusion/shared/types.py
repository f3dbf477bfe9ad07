"""
Shared types for the indicator and signal modules.

This module consolidates the enums and value objects that are passed
between the indicators, the signal combinator and the data layer.
"""
import pandas as pd
from dataclasses import dataclass
from enum import Enum


class SignalType(Enum):
    """Type of trading signal."""
    BUY = "BUY"
    SELL = "SELL"
    NEUTRAL = "NEUTRAL"


class TrendDirection(Enum):
    """Trend Fusion EMA crossover direction."""
    GREEN = "GREEN"
    RED = "RED"
    NEUTRAL = "NEUTRAL"


class RsiBias(Enum):
    """Trend Fusion RSI crossover bias."""
    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NEUTRAL = "NEUTRAL"


class MAType(Enum):
    """Supported moving average kinds."""
    SMA = "SMA"
    EMA = "EMA"

    @classmethod
    def parse(cls, value) -> "MAType":
        """Accept an MAType or a case-insensitive name ("sma", "EMA")."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValueError(
                f"Unknown moving average type '{value}'. Expected one of: "
                f"{[m.value for m in cls]}"
            ) from None


@dataclass(frozen=True)
class PriceBar:
    """
    A single OHLC observation.

    Expected (not enforced): low <= open, close <= high.
    """
    timestamp: pd.Timestamp
    open: float
    high: float
    low: float
    close: float


@dataclass(frozen=True)
class TradingSignal:
    """Final combined signal handed to the presentation layer."""
    signal_type: SignalType
    timestamp: pd.Timestamp
    price: float
