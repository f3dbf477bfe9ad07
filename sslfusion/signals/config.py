"""
Indicator settings for signal generation.

Groups the SSL Channel and Trend Fusion parameters that the combined signal
is computed with. Validation runs at construction time (fail fast with clear
errors); the per-indicator configs validate themselves.
"""
from dataclasses import dataclass, field

from ..indicators.ssl_channel import SSLChannelConfig
from ..indicators.trend_fusion import TrendFusionConfig
from ..shared.defaults import SSL_USE_WICKS


@dataclass
class IndicatorSettings:
    """Settings for both indicators feeding the combined signal."""
    name: str = "default"
    description: str = ""
    ssl_channel: SSLChannelConfig = field(default_factory=SSLChannelConfig)
    trend_fusion: TrendFusionConfig = field(default_factory=TrendFusionConfig)
    use_wicks: bool = SSL_USE_WICKS

    def __post_init__(self):
        if not isinstance(self.ssl_channel, SSLChannelConfig):
            raise ValueError(
                f"ssl_channel must be an SSLChannelConfig, got {type(self.ssl_channel).__name__}"
            )
        if not isinstance(self.trend_fusion, TrendFusionConfig):
            raise ValueError(
                f"trend_fusion must be a TrendFusionConfig, got {type(self.trend_fusion).__name__}"
            )

    @property
    def min_bars(self) -> int:
        """Bars needed before both indicators leave their neutral sentinels."""
        return max(self.ssl_channel.ma_period, self.trend_fusion.min_bars)


DEFAULT_SETTINGS = IndicatorSettings(
    name="default",
    description="SSL Channel 200 SMA + Trend Fusion 14/50 EMA, RSI 14 (60/40)",
)
