"""Tests for event value objects, match results and the events DataFrame."""

import json

import pandas as pd
import pytest

from event_annotations import (
    ConfigurationError,
    Event,
    EventMatcher,
    MatchResult,
    RowCoercionError,
    SkippedRow,
    TimeSeriesEvent,
    events_to_dataframe,
)


@pytest.fixture
def drought_event():
    return Event(
        id="E1",
        type="Drought",
        start=pd.Timestamp("2020-01-01"),
        end=pd.Timestamp("2020-06-01 12:00"),
        location_type="County",
        location_id="Adams",
        label="Drought 2020",
        description="First drought",
    )


# ---------------------------------------------------------------------------
# Event
# ---------------------------------------------------------------------------


class TestEvent:
    def test_immutable(self, drought_event):
        with pytest.raises(AttributeError):
            drought_event.label = "changed"

    def test_open_ended(self, drought_event):
        assert not drought_event.is_open_ended
        assert Event(id="E3", type="Drought", start=pd.Timestamp("2021-01-01")).is_open_ended

    def test_to_dict(self, drought_event):
        d = drought_event.to_dict()
        assert d["start"] == "2020-01-01"
        assert d["end"] == "2020-06-01 12:00:00"
        assert d["location_id"] == "Adams"

    def test_dict_round_trip(self, drought_event):
        assert Event.from_dict(drought_event.to_dict()) == drought_event

    def test_to_json(self, drought_event):
        assert json.loads(drought_event.to_json())["label"] == "Drought 2020"

    def test_open_end_serializes_as_null(self):
        event = Event(id="E3", type="Drought", start=pd.Timestamp("2021-01-01"))
        assert json.loads(event.to_json())["end"] is None


class TestTimeSeriesEvent:
    def test_time_series_is_borrowed(self, drought_event, time_series):
        ts_event = TimeSeriesEvent(time_series, drought_event)
        assert ts_event.time_series is time_series
        assert ts_event.event is drought_event

    def test_equality_ignores_time_series(self, drought_event, time_series):
        assert TimeSeriesEvent(time_series, drought_event) == TimeSeriesEvent(None, drought_event)


# ---------------------------------------------------------------------------
# MatchResult
# ---------------------------------------------------------------------------


class TestMatchResult:
    def test_counts(self, drought_event):
        result = MatchResult(
            events=[TimeSeriesEvent(None, drought_event)],
            skipped=[SkippedRow(row_index=4, column="Start", reason="bad date")],
            rows_scanned=5,
        )
        assert len(result) == 1
        assert result.skipped_count == 1
        assert [ts_event.event.id for ts_event in result] == ["E1"]

    def test_empty(self):
        result = MatchResult()
        assert len(result) == 0
        assert result.skipped_count == 0


# ---------------------------------------------------------------------------
# events_to_dataframe
# ---------------------------------------------------------------------------


class TestEventsToDataFrame:
    def test_one_row_per_event(self, drought_df, roles, county_columns, adams_profile):
        ts_events = EventMatcher(drought_df).create_time_series_events(roles, county_columns, adams_profile)
        df = events_to_dataframe(ts_events)
        assert list(df["id"]) == ["E1", "E3"]
        assert df["start"].iloc[0] == pd.Timestamp("2020-01-01")
        assert pd.isnull(df["end"].iloc[1])
        assert pd.api.types.is_datetime64_any_dtype(df["start"])

    def test_empty(self):
        df = events_to_dataframe([])
        assert df.empty
        assert "description" in df.columns


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TestExceptions:
    def test_configuration_error_details(self):
        error = ConfigurationError("Column not found", table_id="Events", column="County")
        assert str(error) == "Column not found (table=Events, column=County)"
        assert isinstance(error, ValueError)

    def test_row_coercion_error(self):
        error = RowCoercionError("bad date", row_index=3, column="Start")
        assert error.row_index == 3
        assert error.message == "bad date"
        assert "row=3" in str(error)
