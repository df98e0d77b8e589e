import datetime

import pandas as pd

from .config import MatcherConfig
from .events import events_to_dataframe
from .matcher import EventMatcher, validate_configuration

def main():
    """Main execution function to demonstrate package capabilities."""
    print("Event Annotation Matcher - Example Usage")

    # 1. Event table with mixed date representations
    events_df = pd.DataFrame({
        "EventID": ["D-2020-01", "F-2020-02", "D-2021-01", "D-2021-02"],
        "EventType": ["Drought", "Flood", "Drought", "drought"],
        "Start": [pd.Timestamp("2020-01-01"), "2020-02-01", datetime.date(2021, 1, 1), "not a date"],
        "End": ["2020-06-01", None, None, None],
        "County": ["Adams", "Denver", "Adams", "Adams"],
        "State": ["CO", "CO", "CO", "CO"],
        "Label": ["Drought 2020", "Spring flood", "Drought 2021", "Bad row"],
        "Description": ["Severe drought", "Flooding on the river", "Ongoing drought", "Start cannot be parsed"],
    })
    events_df.attrs["table_id"] = "ColoradoEvents"

    # 2. Time series carrying its location identity in attrs
    index = pd.date_range("2019-01-01", "2022-12-31", freq="MS")
    streamflow = pd.Series(range(len(index)), index=index, name="Adams.Streamflow")
    streamflow.attrs.update({"County": "Adams", "State": "CO"})

    # 3. Configuration
    config = MatcherConfig(
        roles={
            "id": "EventID", "type": "EventType", "start": "Start",
            "end": "End", "label": "Label", "description": "Description",
        },
        location_columns={"County": "County"},
        location_sources={"County": "${TS:County}"},
        event_types=["Drought"],
    )
    errors = validate_configuration(events_df, config.roles, config.location_columns)
    if errors:
        print(f"Configuration problems: {errors}")
        return

    # 4. Match
    matcher = EventMatcher(events_df, streamflow, verbose=True)
    result = matcher.match_config(config)

    print(f"\nMatched {len(result)} events for {streamflow.name}:")
    print(events_to_dataframe(result.events).to_string(index=False))
    for skipped in result.skipped:
        print(f"Skipped row {skipped.row_index} ({skipped.column}): {skipped.reason}")

    print("\nConfiguration used:")
    print(config.to_json())


if __name__ == "__main__":
    main()
