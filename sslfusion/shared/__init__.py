"""
Shared types and defaults for the signal engine.

This module provides:
- Signal, trend, bias and moving-average enums
- PriceBar and TradingSignal value objects
- Centralized default values for all indicator parameters
"""
from .types import SignalType, TrendDirection, RsiBias, MAType, PriceBar, TradingSignal
from .defaults import (
    SSL_MA_PERIOD, SSL_MA_TYPE, SSL_USE_WICKS,
    TREND_SHORT_PERIOD, TREND_LONG_PERIOD, TREND_RSI_LENGTH,
    TREND_TOP_LEVEL, TREND_BOTTOM_LEVEL,
    MIN_SIGNAL_BARS, DEFAULT_TIME_RANGE,
)

__all__ = [
    'SignalType',
    'TrendDirection',
    'RsiBias',
    'MAType',
    'PriceBar',
    'TradingSignal',
    'SSL_MA_PERIOD', 'SSL_MA_TYPE', 'SSL_USE_WICKS',
    'TREND_SHORT_PERIOD', 'TREND_LONG_PERIOD', 'TREND_RSI_LENGTH',
    'TREND_TOP_LEVEL', 'TREND_BOTTOM_LEVEL',
    'MIN_SIGNAL_BARS', 'DEFAULT_TIME_RANGE',
]
