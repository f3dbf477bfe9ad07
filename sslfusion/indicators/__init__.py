"""
Indicator calculation module.

Provides:
- Moving average (SMA/EMA) and RSI primitives
- SSL Channel (channel bounds, Hlv direction state, crossover flags)
- Trend Fusion (EMA trend, RSI momentum and bias)

All indicators follow a unified interface for evaluation and history replay.
"""
from .base import Indicator, result_to_row
from .technical import moving_average, rsi
from .ssl_channel import (
    SSLChannelConfig,
    SSLChannelResult,
    SSLChannelIndicator,
    calculate_ssl_channel,
)
from .trend_fusion import (
    TrendFusionConfig,
    TrendFusionResult,
    TrendFusionIndicator,
    calculate_trend_fusion,
)

__all__ = [
    'Indicator',
    'result_to_row',
    'moving_average',
    'rsi',
    'SSLChannelConfig',
    'SSLChannelResult',
    'SSLChannelIndicator',
    'calculate_ssl_channel',
    'TrendFusionConfig',
    'TrendFusionResult',
    'TrendFusionIndicator',
    'calculate_trend_fusion',
]
