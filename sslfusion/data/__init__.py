"""
Data loading and window selection module.

Provides a unified interface for loading OHLC price series and
selecting the time-range window the indicators are evaluated on.
"""
from .loader import (
    DataLoader,
    DataLoadError,
    DataValidationError,
    OHLC_COLUMNS,
    bars_to_frame,
    frame_to_bars,
    validate_price_frame,
)
from .windows import (
    TimeRange,
    range_cutoff,
    select_window,
    select_custom_window,
    full_data_range,
)

__all__ = [
    'DataLoader',
    'DataLoadError',
    'DataValidationError',
    'OHLC_COLUMNS',
    'bars_to_frame',
    'frame_to_bars',
    'validate_price_frame',
    'TimeRange',
    'range_cutoff',
    'select_window',
    'select_custom_window',
    'full_data_range',
]
