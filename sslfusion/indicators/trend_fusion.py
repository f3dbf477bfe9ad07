"""
Trend Fusion indicator.

Combines a short/long EMA crossover (trend direction) with RSI-derived
momentum and an RSI level-crossover bias.
"""
import logging
import numbers
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from .base import Indicator
from .technical import moving_average, rsi
from ..shared.defaults import (
    TREND_SHORT_PERIOD, TREND_LONG_PERIOD, TREND_RSI_LENGTH,
    TREND_TOP_LEVEL, TREND_BOTTOM_LEVEL,
    RSI_NEUTRAL, RSI_BIAS_NEUTRAL_LEVEL,
)
from ..shared.types import MAType, RsiBias, TrendDirection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrendFusionConfig:
    """Trend Fusion parameters."""
    short_period: int = TREND_SHORT_PERIOD
    long_period: int = TREND_LONG_PERIOD
    rsi_length: int = TREND_RSI_LENGTH
    top_level: float = TREND_TOP_LEVEL
    bottom_level: float = TREND_BOTTOM_LEVEL

    def __post_init__(self):
        for name in ("short_period", "long_period", "rsi_length"):
            value = getattr(self, name)
            if not isinstance(value, numbers.Integral) or isinstance(value, bool) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        for name in ("top_level", "bottom_level"):
            value = getattr(self, name)
            if not isinstance(value, numbers.Real) or isinstance(value, bool):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if not (0 <= value <= 100):
                raise ValueError(f"{name} must be in [0, 100], got {value}")
        if self.bottom_level >= self.top_level:
            raise ValueError(
                f"bottom_level ({self.bottom_level}) must be less than top_level ({self.top_level})"
            )

    @property
    def min_bars(self) -> int:
        """Bars needed before the indicator leaves its neutral sentinel."""
        return max(self.short_period, self.long_period, self.rsi_length)


@dataclass(frozen=True)
class TrendFusionResult:
    """Trend Fusion values at the last bar of a window."""
    trend_direction: TrendDirection
    short_ema: float
    long_ema: float
    momentum: float  # rsi_value - 50
    rsi_value: float
    rsi_bias: RsiBias
    rsi_bias_line: float  # Reference level drawn for the current bias

    @classmethod
    def neutral(cls) -> "TrendFusionResult":
        """Insufficient-data result."""
        return cls(
            trend_direction=TrendDirection.NEUTRAL,
            short_ema=0.0,
            long_ema=0.0,
            momentum=0.0,
            rsi_value=RSI_NEUTRAL,
            rsi_bias=RsiBias.NEUTRAL,
            rsi_bias_line=RSI_BIAS_NEUTRAL_LEVEL,
        )


def calculate_trend_fusion(
    window: pd.DataFrame,
    config: Optional[TrendFusionConfig] = None,
) -> TrendFusionResult:
    """
    Calculate Trend Fusion at the last bar of ``window``.

    Both EMAs always run over every close in the window (see
    ``moving_average``), regardless of the SSL Channel MA type.

    RSI bias:
    - previous RSI <= top and current RSI > top: BULLISH, line at bottom level
    - previous RSI >= bottom and current RSI < bottom: BEARISH, line at top level
    - otherwise NEUTRAL, line at 50

    Args:
        window: OHLC bars (Close column), oldest first
        config: TrendFusionConfig (default: 14/50 EMA, RSI 14, levels 60/40)

    Returns:
        TrendFusionResult; the neutral result if the window is shorter than
        the longest configured period
    """
    config = config or TrendFusionConfig()
    if len(window) < config.min_bars:
        return TrendFusionResult.neutral()

    closes = window["Close"].to_numpy(dtype=float)
    short_ema = moving_average(closes, config.short_period, MAType.EMA)
    long_ema = moving_average(closes, config.long_period, MAType.EMA)

    rsi_value = rsi(closes, config.rsi_length)
    momentum = rsi_value - 50

    rsi_bias = RsiBias.NEUTRAL
    rsi_bias_line = RSI_BIAS_NEUTRAL_LEVEL
    if len(closes) > 1:
        prev_rsi = rsi(closes[:-1], config.rsi_length)
        if prev_rsi <= config.top_level and rsi_value > config.top_level:
            rsi_bias = RsiBias.BULLISH
            rsi_bias_line = float(config.bottom_level)
        elif prev_rsi >= config.bottom_level and rsi_value < config.bottom_level:
            rsi_bias = RsiBias.BEARISH
            rsi_bias_line = float(config.top_level)

    if short_ema > long_ema:
        trend_direction = TrendDirection.GREEN
    elif short_ema < long_ema:
        trend_direction = TrendDirection.RED
    else:
        trend_direction = TrendDirection.NEUTRAL

    logger.debug(
        f"Trend fusion: bars={len(window)} short_ema={short_ema:.4f} long_ema={long_ema:.4f} "
        f"rsi={rsi_value:.2f} bias={rsi_bias.value} trend={trend_direction.value}"
    )
    return TrendFusionResult(
        trend_direction=trend_direction,
        short_ema=short_ema,
        long_ema=long_ema,
        momentum=momentum,
        rsi_value=rsi_value,
        rsi_bias=rsi_bias,
        rsi_bias_line=rsi_bias_line,
    )


class TrendFusionIndicator(Indicator):
    """Trend Fusion following the Indicator interface."""

    def __init__(self, config: Optional[TrendFusionConfig] = None):
        self.config = config or TrendFusionConfig()

    def evaluate(self, window: pd.DataFrame) -> TrendFusionResult:
        """Calculate Trend Fusion at the last bar."""
        return calculate_trend_fusion(window, self.config)
