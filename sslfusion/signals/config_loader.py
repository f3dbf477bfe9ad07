"""
YAML configuration loader for indicator settings.

Loads indicator settings from YAML files, allowing easy sharing
and modification of settings without code changes.

Layout:

    name: my_settings
    description: ...
    ssl_channel:
      ma_period: 200
      ma_type: SMA
      use_wicks: false
    trend_fusion:
      short_period: 14
      long_period: 50
      rsi_length: 14
      top_level: 60
      bottom_level: 40
"""
import yaml
from pathlib import Path
from typing import Union

from .config import IndicatorSettings
from ..indicators.ssl_channel import SSLChannelConfig
from ..indicators.trend_fusion import TrendFusionConfig
from ..shared.defaults import (
    SSL_MA_PERIOD, SSL_MA_TYPE, SSL_USE_WICKS,
    TREND_SHORT_PERIOD, TREND_LONG_PERIOD, TREND_RSI_LENGTH,
    TREND_TOP_LEVEL, TREND_BOTTOM_LEVEL,
)


def load_settings_from_yaml(yaml_path: Union[str, Path]) -> IndicatorSettings:
    """
    Load indicator settings from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        IndicatorSettings object

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is empty or contains invalid values
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if not config_dict:
        raise ValueError(f"Empty config file: {yaml_path}")
    if not isinstance(config_dict, dict):
        raise ValueError(f"Config file must contain a mapping: {yaml_path}")

    ssl = config_dict.get('ssl_channel') or {}
    trend = config_dict.get('trend_fusion') or {}

    return IndicatorSettings(
        name=config_dict.get('name', yaml_path.stem),
        description=config_dict.get('description', ''),
        ssl_channel=SSLChannelConfig(
            ma_period=ssl.get('ma_period', SSL_MA_PERIOD),
            ma_type=ssl.get('ma_type', SSL_MA_TYPE),
        ),
        use_wicks=bool(ssl.get('use_wicks', SSL_USE_WICKS)),
        trend_fusion=TrendFusionConfig(
            short_period=trend.get('short_period', TREND_SHORT_PERIOD),
            long_period=trend.get('long_period', TREND_LONG_PERIOD),
            rsi_length=trend.get('rsi_length', TREND_RSI_LENGTH),
            top_level=trend.get('top_level', TREND_TOP_LEVEL),
            bottom_level=trend.get('bottom_level', TREND_BOTTOM_LEVEL),
        ),
    )


def save_settings_to_yaml(settings: IndicatorSettings, yaml_path: Union[str, Path]):
    """
    Save indicator settings to YAML file.

    Args:
        settings: IndicatorSettings object to save
        yaml_path: Path where to save YAML file
    """
    yaml_path = Path(yaml_path)

    config_dict = {
        'name': settings.name,
        'description': settings.description,
        'ssl_channel': {
            'ma_period': settings.ssl_channel.ma_period,
            'ma_type': settings.ssl_channel.ma_type.value,
            'use_wicks': settings.use_wicks,
        },
        'trend_fusion': {
            'short_period': settings.trend_fusion.short_period,
            'long_period': settings.trend_fusion.long_period,
            'rsi_length': settings.trend_fusion.rsi_length,
            'top_level': settings.trend_fusion.top_level,
            'bottom_level': settings.trend_fusion.bottom_level,
        },
    }

    # Ensure parent directory exists
    yaml_path.parent.mkdir(parents=True, exist_ok=True)

    with open(yaml_path, 'w') as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
