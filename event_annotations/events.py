import json
import pandas as pd
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .parsing import format_datetime
from .utils import TemporalValue, to_timestamp

# ============================================================================
# Event Value Objects
# ============================================================================

@dataclass(frozen=True)
class Event:
    """
    A single time or timespan event associated with a single location.

    Start and end may each be None:

        start        end          interpretation
        ----------   ----------   ------------------------------------------
        Timestamp    Timestamp    event with a discrete start and end
        Timestamp    None         event is ongoing (or a point in time)
        None         Timestamp    event started indefinitely long ago
        None         None         event applies to the whole period

    start <= end is not enforced.
    """

    id: str
    type: str
    start: TemporalValue = None
    end: TemporalValue = None
    location_type: str = ""  # Location type that matched, e.g. "County"
    location_id: str = ""  # Location identifier that matched, e.g. "Adams"
    label: str = ""  # Short text for graph labels
    description: str = ""  # Longer text for tooltips and reports

    @property
    def is_open_ended(self) -> bool:
        return self.end is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "type": self.type,
            "start": format_datetime(self.start),
            "end": format_datetime(self.end),
            "location_type": self.location_type,
            "location_id": self.location_id,
            "label": self.label,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Event':
        """Create event from dictionary."""
        kwargs = data.copy()
        kwargs["start"] = to_timestamp(kwargs.get("start"))
        kwargs["end"] = to_timestamp(kwargs.get("end"))
        return cls(**kwargs)

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


@dataclass(frozen=True)
class TimeSeriesEvent:
    """An event to be drawn on a time series graph."""

    # Borrowed from the caller; never modified
    time_series: Any = field(compare=False, repr=False)
    event: Event


# ============================================================================
# Match Diagnostics
# ============================================================================

@dataclass(frozen=True)
class SkippedRow:
    """A table row that matched but could not be turned into an event."""

    row_index: int
    column: Optional[str]
    reason: str


@dataclass
class MatchResult:
    """Events produced by one matching pass plus the rows it had to skip."""

    events: List[TimeSeriesEvent] = field(default_factory=list)
    skipped: List[SkippedRow] = field(default_factory=list)
    rows_scanned: int = 0

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self):
        return iter(self.events)


def events_to_dataframe(ts_events: List[TimeSeriesEvent]) -> pd.DataFrame:
    """
    Create a DataFrame with one row per event.

    Useful for annotation renderers, dashboards and reports.
    """
    columns = ["id", "type", "start", "end", "location_type", "location_id", "label", "description"]
    records = []
    for ts_event in ts_events:
        event = ts_event.event
        records.append({
            "id": event.id,
            "type": event.type,
            "start": event.start if event.start is not None else pd.NaT,
            "end": event.end if event.end is not None else pd.NaT,
            "location_type": event.location_type,
            "location_id": event.location_id,
            "label": event.label,
            "description": event.description,
        })
    df = pd.DataFrame.from_records(records, columns=columns)
    df["start"] = pd.to_datetime(df["start"])
    df["end"] = pd.to_datetime(df["end"])
    return df
