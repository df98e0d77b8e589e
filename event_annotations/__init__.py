"""
Event Annotation Matcher
========================

Match records in a table of domain events (droughts, outages, incidents)
to a time series by event type and location, producing the events to draw
as annotations on the time series graph.
"""

__version__ = "0.1.0"

from .utils import (
    is_missing,
    to_timestamp,
)
from .parsing import (
    DateTimeParser,
    parse_datetime,
    format_datetime,
)
from .exceptions import (
    EventAnnotationError,
    ConfigurationError,
    RowCoercionError,
)
from .tables import (
    EventTable,
    DataFrameEventTable,
    DatasetEventTable,
    RecordEventTable,
)
from .factory import create_event_table
from .domains import (
    ColumnRoleMap,
    LocationColumnMap,
    LocationProfile,
    TimeWindow,
)
from .events import (
    Event,
    TimeSeriesEvent,
    SkippedRow,
    MatchResult,
    events_to_dataframe,
)
from .config import MatcherConfig
from .matcher import (
    EventMatcher,
    ResolvedColumns,
    validate_configuration,
)

__all__ = [
    # Errors
    "EventAnnotationError",
    "ConfigurationError",
    "RowCoercionError",
    # Tables
    "EventTable",
    "DataFrameEventTable",
    "DatasetEventTable",
    "RecordEventTable",
    "create_event_table",
    # Domains
    "ColumnRoleMap",
    "LocationColumnMap",
    "LocationProfile",
    "TimeWindow",
    # Events
    "Event",
    "TimeSeriesEvent",
    "SkippedRow",
    "MatchResult",
    "events_to_dataframe",
    # Matching
    "MatcherConfig",
    "EventMatcher",
    "ResolvedColumns",
    "validate_configuration",
    # Utilities
    "DateTimeParser",
    "parse_datetime",
    "format_datetime",
    "is_missing",
    "to_timestamp",
]
