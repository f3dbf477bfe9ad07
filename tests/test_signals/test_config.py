"""
Tests for indicator settings and the YAML loader.
"""
import tempfile
from pathlib import Path

import pytest
import yaml
from sslfusion.indicators.ssl_channel import SSLChannelConfig
from sslfusion.indicators.trend_fusion import TrendFusionConfig
from sslfusion.signals.config import IndicatorSettings, DEFAULT_SETTINGS
from sslfusion.signals.config_loader import load_settings_from_yaml, save_settings_to_yaml
from sslfusion.shared.defaults import (
    SSL_MA_PERIOD, TREND_SHORT_PERIOD, TREND_LONG_PERIOD, TREND_RSI_LENGTH,
    TREND_TOP_LEVEL, TREND_BOTTOM_LEVEL,
)
from sslfusion.shared.types import MAType

REPO_ROOT = Path(__file__).resolve().parents[2]


class TestIndicatorSettings:
    """Test IndicatorSettings dataclass."""

    def test_default_settings_exist(self):
        assert isinstance(DEFAULT_SETTINGS, IndicatorSettings)

    def test_defaults_use_centralized_values(self):
        assert DEFAULT_SETTINGS.ssl_channel.ma_period == SSL_MA_PERIOD
        assert DEFAULT_SETTINGS.ssl_channel.ma_type is MAType.SMA
        assert DEFAULT_SETTINGS.use_wicks is False
        trend = DEFAULT_SETTINGS.trend_fusion
        assert trend.short_period == TREND_SHORT_PERIOD
        assert trend.long_period == TREND_LONG_PERIOD
        assert trend.rsi_length == TREND_RSI_LENGTH
        assert trend.top_level == TREND_TOP_LEVEL
        assert trend.bottom_level == TREND_BOTTOM_LEVEL

    def test_min_bars(self):
        assert DEFAULT_SETTINGS.min_bars == 200
        settings = IndicatorSettings(
            ssl_channel=SSLChannelConfig(ma_period=20),
            trend_fusion=TrendFusionConfig(long_period=80),
        )
        assert settings.min_bars == 80

    def test_rejects_wrong_section_types(self):
        with pytest.raises(ValueError, match="ssl_channel must be an SSLChannelConfig"):
            IndicatorSettings(ssl_channel={"ma_period": 200})
        with pytest.raises(ValueError, match="trend_fusion must be a TrendFusionConfig"):
            IndicatorSettings(trend_fusion=None)


class TestLoadSettingsFromYaml:
    """YAML settings files."""

    def _write(self, tmp_path, content):
        path = tmp_path / "settings.yaml"
        path.write_text(content)
        return path

    def test_full_file(self, tmp_path):
        path = self._write(tmp_path, """
name: fast
description: short periods
ssl_channel:
  ma_period: 20
  ma_type: ema
  use_wicks: true
trend_fusion:
  short_period: 5
  long_period: 20
  rsi_length: 7
  top_level: 70
  bottom_level: 30
""")
        settings = load_settings_from_yaml(path)
        assert settings.name == "fast"
        assert settings.description == "short periods"
        assert settings.ssl_channel == SSLChannelConfig(ma_period=20, ma_type=MAType.EMA)
        assert settings.use_wicks is True
        assert settings.trend_fusion == TrendFusionConfig(
            short_period=5, long_period=20, rsi_length=7, top_level=70, bottom_level=30
        )

    def test_missing_sections_use_defaults(self, tmp_path):
        path = self._write(tmp_path, "ssl_channel:\n  ma_period: 100\n")
        settings = load_settings_from_yaml(path)
        assert settings.name == "settings"
        assert settings.ssl_channel.ma_period == 100
        assert settings.ssl_channel.ma_type is MAType.SMA
        assert settings.trend_fusion == TrendFusionConfig()

    def test_invalid_values_raise(self, tmp_path):
        path = self._write(tmp_path, "trend_fusion:\n  top_level: 30\n  bottom_level: 70\n")
        with pytest.raises(ValueError, match="bottom_level"):
            load_settings_from_yaml(path)

    def test_quoted_level_raises_value_error(self, tmp_path):
        path = self._write(tmp_path, "trend_fusion:\n  top_level: '60'\n")
        with pytest.raises(ValueError, match="top_level must be a number"):
            load_settings_from_yaml(path)

    def test_quoted_period_raises_value_error(self, tmp_path):
        path = self._write(tmp_path, "ssl_channel:\n  ma_period: '200'\n")
        with pytest.raises(ValueError, match="ma_period must be a positive integer"):
            load_settings_from_yaml(path)

    def test_unknown_ma_type_raises(self, tmp_path):
        path = self._write(tmp_path, "ssl_channel:\n  ma_type: HMA\n")
        with pytest.raises(ValueError, match="Unknown moving average type"):
            load_settings_from_yaml(path)

    def test_empty_file_raises(self, tmp_path):
        with pytest.raises(ValueError, match="Empty config file"):
            load_settings_from_yaml(self._write(tmp_path, ""))

    def test_non_mapping_raises(self, tmp_path):
        with pytest.raises(ValueError, match="must contain a mapping"):
            load_settings_from_yaml(self._write(tmp_path, "- 1\n- 2\n"))

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings_from_yaml(tmp_path / "nope.yaml")

    def test_shipped_default_config_matches_defaults(self):
        settings = load_settings_from_yaml(REPO_ROOT / "configs" / "default.yaml")
        assert settings.ssl_channel == DEFAULT_SETTINGS.ssl_channel
        assert settings.trend_fusion == DEFAULT_SETTINGS.trend_fusion
        assert settings.use_wicks == DEFAULT_SETTINGS.use_wicks
        assert settings.description == DEFAULT_SETTINGS.description


class TestSaveSettingsToYaml:
    def test_save_then_load(self):
        settings = IndicatorSettings(
            name="saved",
            description="round trip",
            ssl_channel=SSLChannelConfig(ma_period=150, ma_type="EMA"),
            trend_fusion=TrendFusionConfig(short_period=10, long_period=30),
            use_wicks=True,
        )
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "saved.yaml"
            save_settings_to_yaml(settings, path)
            assert load_settings_from_yaml(path) == settings

    def test_written_layout(self, tmp_path):
        path = tmp_path / "out.yaml"
        save_settings_to_yaml(DEFAULT_SETTINGS, path)
        data = yaml.safe_load(path.read_text())
        assert list(data) == ["name", "description", "ssl_channel", "trend_fusion"]
        assert data["ssl_channel"] == {"ma_period": 200, "ma_type": "SMA", "use_wicks": False}
