"""
Moving average and RSI primitives.

Both functions reduce a full price sequence to the single value at its last
element. They never raise on short input; they return sentinels instead
(0.0 for moving averages, 50.0 for RSI).
"""
from typing import Sequence, Union

import numpy as np
import pandas as pd

from ..shared.defaults import MA_INSUFFICIENT_DATA, RSI_NEUTRAL, TREND_RSI_LENGTH
from ..shared.types import MAType

Values = Union[Sequence[float], np.ndarray, pd.Series]


def _as_array(values: Values) -> np.ndarray:
    if isinstance(values, pd.Series):
        return values.to_numpy(dtype=float)
    return np.asarray(values, dtype=float)


def moving_average(values: Values, period: int, ma_type: Union[MAType, str] = MAType.SMA) -> float:
    """
    Calculate the moving average value at the end of ``values``.

    SMA is the mean of the last ``period`` values.

    EMA is seeded with ``values[0]`` (the first element of the whole
    sequence, not of the last ``period`` values) and then runs
    ``ema = v * k + ema * (1 - k)`` with ``k = 2 / (period + 1)`` over every
    remaining element. The result therefore depends on how much history the
    caller supplies, not only on the last ``period`` points.

    Args:
        values: Ordered numeric sequence (oldest first)
        period: Moving average period (>= 1)
        ma_type: MAType.SMA or MAType.EMA (or their names)

    Returns:
        Moving average value, or 0.0 if fewer than ``period`` values
    """
    data = _as_array(values)
    if len(data) < period:
        return MA_INSUFFICIENT_DATA

    if MAType.parse(ma_type) is MAType.EMA:
        alpha = 2.0 / (period + 1)
        ema = pd.Series(data).ewm(alpha=alpha, adjust=False).mean()
        return float(ema.iloc[-1])

    return float(data[-period:].mean())


def _wilder_average(seed: float, values: np.ndarray, length: int) -> float:
    """Apply avg = (avg * (length - 1) + value) / length over ``values``, starting at ``seed``."""
    if len(values) == 0:
        return float(seed)
    smoothed = pd.Series(np.concatenate(([seed], values))).ewm(alpha=1.0 / length, adjust=False).mean()
    return float(smoothed.iloc[-1])


def rsi(close_prices: Values, length: int = TREND_RSI_LENGTH) -> float:
    """
    Calculate the Relative Strength Index at the end of ``close_prices``.

    RSI = 100 - (100 / (1 + RS))
    RS = Average Gain / Average Loss

    Averages are seeded with the plain mean of the first ``length`` price
    changes and then Wilder-smoothed over the remaining changes. A change of
    exactly zero counts as a zero loss.

    Returns:
        RSI in [0, 100]; 50.0 with fewer than ``length + 1`` prices;
        100.0 when the average loss is zero
    """
    prices = _as_array(close_prices)
    if len(prices) < length + 1:
        return RSI_NEUTRAL

    deltas = np.diff(prices)
    seed = deltas[:length]
    avg_gain = seed[seed > 0].sum() / length
    avg_loss = -seed[seed <= 0].sum() / length

    rest = deltas[length:]
    gains = np.where(rest > 0, rest, 0.0)
    losses = np.where(rest > 0, 0.0, -rest)
    avg_gain = _wilder_average(avg_gain, gains, length)
    avg_loss = _wilder_average(avg_loss, losses, length)

    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return float(100 - (100 / (1 + rs)))
