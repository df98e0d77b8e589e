"""Tests for date/time parsing and temporal coercion."""

import datetime

import numpy as np
import pandas as pd
import pytest

from event_annotations import DateTimeParser, format_datetime, is_missing, parse_datetime, to_timestamp


# ---------------------------------------------------------------------------
# DateTimeParser
# ---------------------------------------------------------------------------


class TestDateTimeParser:
    @pytest.mark.parametrize("text, expected", [
        ("2020", "2020-01-01 00:00:00"),
        ("2020-06", "2020-06-01 00:00:00"),
        ("2020-06-01", "2020-06-01 00:00:00"),
        ("2020-06-01 13", "2020-06-01 13:00:00"),
        ("2020-06-01 1330", "2020-06-01 13:30:00"),
        ("2020-06-01 13:30", "2020-06-01 13:30:00"),
        ("2020-06-01T13:30:05", "2020-06-01 13:30:05"),
        ("2020-06-01 13:30:05:25", "2020-06-01 13:30:05.250000"),
        ("2020-06-01 13:30:05.5", "2020-06-01 13:30:05.500000"),
        ("202006011330", "2020-06-01 13:30:00"),
        ("06/2020", "2020-06-01 00:00:00"),
        ("6/2020", "2020-06-01 00:00:00"),
        ("06/01/2020", "2020-06-01 00:00:00"),
        ("6/1/2020", "2020-06-01 00:00:00"),
        ("06/01/2020 13", "2020-06-01 13:00:00"),
        ("06/01/2020 13:30", "2020-06-01 13:30:00"),
        ("06/01/2020 13:30:05", "2020-06-01 13:30:05"),
        ("06-01-2020 13", "2020-06-01 13:00:00"),
        ("  2020-06-01  ", "2020-06-01 00:00:00"),
    ])
    def test_recognized_forms(self, text, expected):
        assert DateTimeParser.parse(text) == pd.Timestamp(expected)

    @pytest.mark.parametrize("text", [
        "",
        "   ",
        "yesterday",
        "2020-06-01 13:3",
        "20200601",
        "2020/06/01",
    ])
    def test_unrecognized_forms(self, text):
        with pytest.raises(ValueError):
            parse_datetime(text)

    @pytest.mark.parametrize("text", ["2020-13-01", "2020-02-30", "2020-06-01 25:00"])
    def test_out_of_range_components(self, text):
        with pytest.raises(ValueError, match="Invalid date/time"):
            parse_datetime(text)

    def test_none(self):
        with pytest.raises(ValueError):
            parse_datetime(None)


class TestFormatDatetime:
    def test_midnight_is_date_only(self):
        assert format_datetime(pd.Timestamp("2020-06-01")) == "2020-06-01"

    def test_time_of_day(self):
        assert format_datetime(pd.Timestamp("2020-06-01 13:30")) == "2020-06-01 13:30:00"

    def test_none(self):
        assert format_datetime(None) is None

    @pytest.mark.parametrize("value", ["2020-06-01", "2020-06-01 13:30:05", "2020-06-01 13:30:05.125"])
    def test_output_parses_back(self, value):
        ts = pd.Timestamp(value)
        assert parse_datetime(format_datetime(ts)) == ts


# ---------------------------------------------------------------------------
# Temporal coercion
# ---------------------------------------------------------------------------


class TestToTimestamp:
    @pytest.mark.parametrize("value", [None, float("nan"), pd.NaT, np.datetime64("NaT")])
    def test_missing(self, value):
        assert to_timestamp(value) is None

    def test_timestamp_passes_through(self):
        ts = pd.Timestamp("2020-06-01 12:00")
        assert to_timestamp(ts) is ts

    def test_date_promoted_to_midnight(self):
        result = to_timestamp(datetime.date(2020, 6, 1))
        assert isinstance(result, pd.Timestamp)
        assert result == pd.Timestamp("2020-06-01 00:00:00")

    def test_datetime(self):
        assert to_timestamp(datetime.datetime(2020, 6, 1, 8, 15)) == pd.Timestamp("2020-06-01 08:15")

    def test_datetime64(self):
        assert to_timestamp(np.datetime64("2020-06-01T08:15")) == pd.Timestamp("2020-06-01 08:15")

    def test_text(self):
        assert to_timestamp("06/01/2020") == pd.Timestamp("2020-06-01")

    @pytest.mark.parametrize("value", [
        pd.Timestamp("2021-01-01", tz="UTC"),
        datetime.datetime(2021, 1, 1, tzinfo=datetime.timezone.utc),
    ])
    def test_time_zone_aware_rejected(self, value):
        with pytest.raises(ValueError, match="Time zone"):
            to_timestamp(value)

    @pytest.mark.parametrize("value", [2020, 2020.5, ["2020"]])
    def test_unsupported_types(self, value):
        with pytest.raises(TypeError):
            to_timestamp(value)


class TestIsMissing:
    @pytest.mark.parametrize("value", [None, float("nan"), np.nan, pd.NaT, pd.NA])
    def test_missing(self, value):
        assert is_missing(value)

    @pytest.mark.parametrize("value", ["", "x", 0, 0.0, pd.Timestamp("2020-01-01"), [1, 2]])
    def test_present(self, value):
        assert not is_missing(value)
