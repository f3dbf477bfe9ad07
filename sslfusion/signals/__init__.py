"""
Signal generation module.

Combines the SSL Channel and Trend Fusion indicators into one trading
signal (confluence), loads indicator settings, and evaluates named time
ranges of a price series.
"""
from .config import IndicatorSettings, DEFAULT_SETTINGS
from .config_loader import load_settings_from_yaml, save_settings_to_yaml
from .combinator import combine, calculate_trading_signal
from .evaluator import SignalEvaluator, RangeEvaluation

__all__ = [
    'IndicatorSettings',
    'DEFAULT_SETTINGS',
    'load_settings_from_yaml',
    'save_settings_to_yaml',
    'combine',
    'calculate_trading_signal',
    'SignalEvaluator',
    'RangeEvaluation',
]
