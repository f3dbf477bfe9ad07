"""
Signal confluence: SSL Channel + Trend Fusion -> one trading signal.

BUY needs SSL BUY with a GREEN trend, SELL needs SSL SELL with a RED trend.
Anything else, or a window shorter than MIN_SIGNAL_BARS, is NEUTRAL.
"""
import logging
from typing import Optional

import pandas as pd

from .config import IndicatorSettings, DEFAULT_SETTINGS
from ..indicators.ssl_channel import SSLChannelResult, calculate_ssl_channel
from ..indicators.trend_fusion import TrendFusionResult, calculate_trend_fusion
from ..shared.defaults import MIN_SIGNAL_BARS
from ..shared.types import SignalType, TradingSignal, TrendDirection

logger = logging.getLogger(__name__)


def combine(
    ssl: SSLChannelResult,
    trend: TrendFusionResult,
    window: pd.DataFrame,
) -> TradingSignal:
    """
    Combine indicator results into the final trading signal.

    The MIN_SIGNAL_BARS gate is fixed and independent of the SSL Channel
    MA period: a shorter SSL period still yields NEUTRAL below 200 bars, and
    a longer one can pass the gate while SSL itself is still neutral.

    Args:
        ssl: SSL Channel result for the window
        trend: Trend Fusion result for the window
        window: The OHLC bars both results were computed on

    Returns:
        TradingSignal stamped with the last bar's timestamp and close
        (current UTC time and last close, or 0.0, below the gate)
    """
    if len(window) < MIN_SIGNAL_BARS:
        price = float(window["Close"].iloc[-1]) if len(window) > 0 else 0.0
        return TradingSignal(
            signal_type=SignalType.NEUTRAL,
            timestamp=pd.Timestamp.now(tz="UTC"),
            price=price,
        )

    if ssl.signal is SignalType.BUY and trend.trend_direction is TrendDirection.GREEN:
        signal_type = SignalType.BUY
    elif ssl.signal is SignalType.SELL and trend.trend_direction is TrendDirection.RED:
        signal_type = SignalType.SELL
    else:
        signal_type = SignalType.NEUTRAL

    return TradingSignal(
        signal_type=signal_type,
        timestamp=window.index[-1],
        price=float(window["Close"].iloc[-1]),
    )


def calculate_trading_signal(
    window: pd.DataFrame,
    settings: Optional[IndicatorSettings] = None,
) -> TradingSignal:
    """
    Compute both indicators on ``window`` and combine them.

    Args:
        window: OHLC bars, oldest first
        settings: IndicatorSettings (default: DEFAULT_SETTINGS)

    Returns:
        TradingSignal
    """
    settings = settings or DEFAULT_SETTINGS
    ssl = calculate_ssl_channel(window, settings.use_wicks, settings.ssl_channel)
    trend = calculate_trend_fusion(window, settings.trend_fusion)
    signal = combine(ssl, trend, window)
    logger.debug(
        f"Signal {signal.signal_type.value} (ssl={ssl.signal.value}, "
        f"trend={trend.trend_direction.value}, bars={len(window)})"
    )
    return signal
