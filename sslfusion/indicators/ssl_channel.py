"""
SSL Channel indicator.

Builds a channel from a moving average of highs and a moving average of lows
and tracks a three-state direction flag (Hlv):

- +1 (bullish): price closed above the MA of highs
- -1 (bearish): price closed below the MA of lows
-  0 (neutral): inside the channel on this bar and the previous one

Hlv is re-derived from the window on every call; nothing is carried between
calls. A buy/sell crossover is a flip of Hlv between the previous bar's window
and the current one.
"""
import logging
import numbers
from dataclasses import dataclass
from typing import Optional, Union

import pandas as pd

from .base import Indicator
from .technical import moving_average
from ..shared.defaults import SSL_MA_PERIOD, SSL_MA_TYPE, SSL_USE_WICKS
from ..shared.types import MAType, SignalType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SSLChannelConfig:
    """SSL Channel parameters."""
    ma_period: int = SSL_MA_PERIOD
    ma_type: Union[MAType, str] = SSL_MA_TYPE

    def __post_init__(self):
        if not isinstance(self.ma_period, numbers.Integral) or isinstance(self.ma_period, bool) or self.ma_period < 1:
            raise ValueError(f"ma_period must be a positive integer, got {self.ma_period!r}")
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "ma_type", MAType.parse(self.ma_type))


@dataclass(frozen=True)
class SSLChannelResult:
    """SSL Channel values at the last bar of a window."""
    ssl_up: float
    ssl_down: float
    hlv: int
    signal: SignalType
    buy_signal: bool = False  # Hlv flipped -1 -> +1 on this bar
    sell_signal: bool = False  # Hlv flipped +1 -> -1 on this bar

    @classmethod
    def neutral(cls) -> "SSLChannelResult":
        """Insufficient-data result."""
        return cls(ssl_up=0.0, ssl_down=0.0, hlv=0, signal=SignalType.NEUTRAL)


def _channel_bounds(recent: pd.DataFrame, config: SSLChannelConfig):
    """Return (ma_high, ma_low) over the given bars."""
    ma_high = moving_average(recent["High"], config.ma_period, config.ma_type)
    ma_low = moving_average(recent["Low"], config.ma_period, config.ma_type)
    return ma_high, ma_low


def _bar_state(bar: pd.Series, ma_high: float, ma_low: float, use_wicks: bool) -> int:
    upper_price = bar["High"] if use_wicks else bar["Close"]
    lower_price = bar["Low"] if use_wicks else bar["Close"]
    if upper_price > ma_high:
        return 1
    if lower_price < ma_low:
        return -1
    return 0


def _resolve_hlv(recent: pd.DataFrame, ma_high: float, ma_low: float, use_wicks: bool) -> int:
    """
    Hlv of the last bar in ``recent``.

    An inside bar falls back to the previous bar, compared against the same
    channel bounds. Only one bar is walked back.
    """
    hlv = _bar_state(recent.iloc[-1], ma_high, ma_low, use_wicks)
    if hlv == 0 and len(recent) > 1:
        hlv = _bar_state(recent.iloc[-2], ma_high, ma_low, use_wicks)
    return hlv


def _window_hlv(window: pd.DataFrame, use_wicks: bool, config: SSLChannelConfig) -> int:
    """Hlv for a full window, 0 when the window is shorter than the MA period."""
    if len(window) < config.ma_period:
        return 0
    recent = window.iloc[-config.ma_period:]
    ma_high, ma_low = _channel_bounds(recent, config)
    return _resolve_hlv(recent, ma_high, ma_low, use_wicks)


def calculate_ssl_channel(
    window: pd.DataFrame,
    use_wicks: bool = SSL_USE_WICKS,
    config: Optional[SSLChannelConfig] = None,
) -> SSLChannelResult:
    """
    Calculate the SSL Channel at the last bar of ``window``.

    Args:
        window: OHLC bars (High/Low/Close columns), oldest first
        use_wicks: Compare the bar's high/low instead of its close
        config: SSLChannelConfig (default: period 200, SMA)

    Returns:
        SSLChannelResult; the neutral result if the window is shorter
        than the MA period
    """
    config = config or SSLChannelConfig()
    if len(window) < config.ma_period:
        return SSLChannelResult.neutral()

    recent = window.iloc[-config.ma_period:]
    ma_high, ma_low = _channel_bounds(recent, config)
    hlv = _resolve_hlv(recent, ma_high, ma_low, use_wicks)

    if hlv < 0:
        ssl_up, ssl_down = ma_low, ma_high
    else:
        ssl_up, ssl_down = ma_high, ma_low

    if hlv == 1:
        signal = SignalType.BUY
    elif hlv == -1:
        signal = SignalType.SELL
    else:
        signal = SignalType.NEUTRAL

    buy_signal = False
    sell_signal = False
    if len(recent) > 1:
        # Same as re-running the whole indicator one bar earlier; only its Hlv is needed
        prev_hlv = _window_hlv(window.iloc[:-1], use_wicks, config)
        buy_signal = hlv == 1 and prev_hlv == -1
        sell_signal = hlv == -1 and prev_hlv == 1

    logger.debug(
        f"SSL channel: bars={len(window)} ma_high={ma_high:.4f} ma_low={ma_low:.4f} "
        f"hlv={hlv} buy={buy_signal} sell={sell_signal}"
    )
    return SSLChannelResult(
        ssl_up=ssl_up,
        ssl_down=ssl_down,
        hlv=hlv,
        signal=signal,
        buy_signal=buy_signal,
        sell_signal=sell_signal,
    )


class SSLChannelIndicator(Indicator):
    """SSL Channel following the Indicator interface."""

    def __init__(self, config: Optional[SSLChannelConfig] = None, use_wicks: bool = SSL_USE_WICKS):
        self.config = config or SSLChannelConfig()
        self.use_wicks = use_wicks

    def evaluate(self, window: pd.DataFrame) -> SSLChannelResult:
        """Calculate SSL Channel at the last bar."""
        return calculate_ssl_channel(window, self.use_wicks, self.config)
