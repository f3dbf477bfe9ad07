"""
Centralized default values for indicator parameters.

This is the SINGLE SOURCE OF TRUTH for all indicator parameter defaults.
All modules should import from here to ensure consistency.
"""

# SSL Channel defaults
SSL_MA_PERIOD = 200  # Period of the high/low moving averages
SSL_MA_TYPE = "SMA"  # "SMA" or "EMA"
SSL_USE_WICKS = False  # Compare high/low instead of close against the channel

# Trend Fusion defaults
TREND_SHORT_PERIOD = 14  # Short EMA period
TREND_LONG_PERIOD = 50  # Long EMA period
TREND_RSI_LENGTH = 14  # RSI length (also drives momentum)
TREND_TOP_LEVEL = 60  # RSI crossover above this -> bullish bias
TREND_BOTTOM_LEVEL = 40  # RSI crossunder below this -> bearish bias

# Sentinels returned on insufficient data
MA_INSUFFICIENT_DATA = 0.0
RSI_NEUTRAL = 50.0
RSI_BIAS_NEUTRAL_LEVEL = 50.0

# Minimum window length before the combined signal can be anything but NEUTRAL.
# Fixed, does not follow SSL_MA_PERIOD.
MIN_SIGNAL_BARS = 200

# Window selection
DEFAULT_TIME_RANGE = "1D"
