"""
Tests for price file loading and validation.
"""
import json

import pytest
import pandas as pd
from sslfusion.data.loader import (
    OHLC_COLUMNS,
    DataLoader,
    DataLoadError,
    DataValidationError,
    bars_to_frame,
    frame_to_bars,
    validate_price_frame,
)
from sslfusion.shared.types import PriceBar


def _record(ts, o, h, l, c):
    return {"timestamp": ts, "open": o, "high": h, "low": l, "close": c}


@pytest.fixture
def json_file(tmp_path):
    records = [
        _record("2024-01-01T02:00:00.000Z", "2031.5", "2033.0", "2030.0", "2032.25"),
        _record("2024-01-01T00:00:00.000Z", "2030.0", "2031.0", "2029.0", "2030.5"),
        _record("2024-01-01T01:00:00.000Z", "2030.5", "2032.0", "2030.0", "2031.5"),
    ]
    path = tmp_path / "prices.json"
    path.write_text(json.dumps(records))
    return path


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "prices.csv"
    path.write_text(
        "Date,open,high,low,close,volume\n"
        "2024-01-02,101,103,100,102,10\n"
        "2024-01-03,102,104,101,103,11\n"
        "2024-01-04,103,105,102,104,12\n"
    )
    return path


class TestJsonLoading:
    def test_loads_sorted_utc_frame(self, json_file):
        df = DataLoader(json_file).load()
        assert list(df.columns) == OHLC_COLUMNS
        assert str(df.index.tz) == "UTC"
        assert df.index.is_monotonic_increasing
        assert df["Close"].tolist() == [2030.5, 2031.5, 2032.25]

    def test_string_numbers_become_floats(self, json_file):
        df = DataLoader(json_file).load()
        assert all(dtype == float for dtype in df.dtypes)

    def test_empty_list(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("[]")
        df = DataLoader(path).load()
        assert len(df) == 0
        assert list(df.columns) == OHLC_COLUMNS

    def test_missing_timestamp_field(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"open": 1, "high": 1, "low": 1, "close": 1}]))
        with pytest.raises(DataLoadError, match="timestamp"):
            DataLoader(path).load()

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"timestamp": "2024-01-01"}))
        with pytest.raises(DataLoadError, match="list of price records"):
            DataLoader(path).load()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[{")
        with pytest.raises(DataLoadError, match="Invalid JSON"):
            DataLoader(path).load()

    def test_non_numeric_price(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([_record("2024-01-01T00:00:00Z", "abc", "1", "1", "1")]))
        with pytest.raises(DataLoadError, match="Non-numeric"):
            DataLoader(path).load()


class TestCsvLoading:
    def test_lowercase_columns_normalized(self, csv_file):
        df = DataLoader(csv_file).load()
        assert list(df.columns) == OHLC_COLUMNS
        assert str(df.index.tz) == "UTC"
        assert df["Open"].tolist() == [101.0, 102.0, 103.0]

    def test_missing_column(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("Date,Open,High,Close\n2024-01-02,1,2,1\n")
        with pytest.raises(DataLoadError, match="Missing columns"):
            DataLoader(path).load()


class TestLoaderErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DataLoader(tmp_path / "nope.json")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "prices.parquet"
        path.write_bytes(b"")
        with pytest.raises(DataLoadError, match="Unsupported"):
            DataLoader(path).load()


class TestDateFiltering:
    def test_inclusive_bounds(self, csv_file):
        df = DataLoader(csv_file).load(start_date="2024-01-03", end_date="2024-01-03")
        assert len(df) == 1
        assert df.index[0] == pd.Timestamp("2024-01-03", tz="UTC")

    def test_aware_bounds(self, json_file):
        df = DataLoader(json_file).load(start_date=pd.Timestamp("2024-01-01 01:00", tz="UTC"))
        assert len(df) == 2


class TestValidation:
    def _frame(self, **overrides):
        index = pd.date_range("2024-01-01", periods=3, freq="D", tz="UTC")
        data = {
            "Open": [10.0, 11.0, 12.0],
            "High": [11.0, 12.0, 13.0],
            "Low": [9.0, 10.0, 11.0],
            "Close": [10.5, 11.5, 12.5],
        }
        data.update(overrides)
        return pd.DataFrame(data, index=index)

    def test_valid_frame_passes(self):
        validate_price_frame(self._frame())

    def test_unsorted(self):
        df = self._frame().iloc[::-1]
        with pytest.raises(DataValidationError, match="chronological"):
            validate_price_frame(df)

    def test_missing_prices(self):
        with pytest.raises(DataValidationError, match="Missing prices"):
            validate_price_frame(self._frame(Close=[10.5, None, 12.5]))

    def test_negative_prices(self):
        with pytest.raises(DataValidationError, match="Negative"):
            validate_price_frame(self._frame(Low=[-1.0, 10.0, 11.0]))

    def test_low_above_high(self):
        with pytest.raises(DataValidationError, match="low > high"):
            validate_price_frame(self._frame(Low=[9.0, 13.0, 11.0]))

    def test_close_outside_range(self):
        with pytest.raises(DataValidationError, match="close outside"):
            validate_price_frame(self._frame(Close=[10.5, 11.5, 14.0]))

    def test_load_rejects_malformed_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([_record("2024-01-01T00:00:00Z", 10, 9, 11, 10)]))
        with pytest.raises(DataValidationError):
            DataLoader(path).load()

    def test_load_without_validation(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([_record("2024-01-01T00:00:00Z", 10, 9, 11, 10)]))
        df = DataLoader(path).load(validate=False)
        assert len(df) == 1


class TestBarConversion:
    def test_bars_to_frame_and_back(self):
        bars = [
            PriceBar(pd.Timestamp("2024-01-01", tz="UTC"), 1.0, 2.0, 0.5, 1.5),
            PriceBar(pd.Timestamp("2024-01-02", tz="UTC"), 1.5, 2.5, 1.0, 2.0),
        ]
        df = bars_to_frame(bars)
        assert list(df.columns) == OHLC_COLUMNS
        assert df["High"].tolist() == [2.0, 2.5]
        assert frame_to_bars(df) == bars
