"""Shared test fixtures for event annotation tests."""

import pandas as pd
import pytest

from event_annotations import ColumnRoleMap, LocationColumnMap, LocationProfile


@pytest.fixture
def roles():
    """Column names of the drought table."""
    return ColumnRoleMap(
        id="EventID",
        type="EventType",
        start="Start",
        end="End",
        label="Label",
        description="Description",
    )


@pytest.fixture
def county_columns():
    """Only the County column carries a location."""
    return LocationColumnMap({"County": "County"})


@pytest.fixture
def adams_profile():
    """Time series located in Adams county."""
    return LocationProfile([("County", "Adams")])


@pytest.fixture
def drought_df():
    """
    Three events:
    (1) Drought in Adams, 2020-01-01 to 2020-06-01
    (2) Flood in Denver, 2020-02-01, ongoing
    (3) Drought in Adams, 2021-01-01, ongoing
    """
    return pd.DataFrame({
        "EventID": ["E1", "E2", "E3"],
        "EventType": ["Drought", "Flood", "Drought"],
        "Start": ["2020-01-01", "2020-02-01", "2021-01-01"],
        "End": ["2020-06-01", None, None],
        "County": ["Adams", "Denver", "Adams"],
        "State": ["CO", "CO", "CO"],
        "Label": ["Drought 2020", "Flood 2020", "Drought 2021"],
        "Description": ["First drought", "Spring flood", "Second drought"],
    })


@pytest.fixture
def time_series():
    """Monthly series for Adams county, CO."""
    index = pd.date_range("2019-01-01", periods=48, freq="MS")
    series = pd.Series(range(48), index=index, name="Adams.Streamflow")
    series.attrs.update({"County": "Adams", "State": "CO"})
    return series
