import warnings
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .config import MatcherConfig
from .domains import ColumnRoleMap, LocationColumnMap, LocationProfile, TimeWindow
from .events import Event, MatchResult, SkippedRow, TimeSeriesEvent
from .exceptions import ConfigurationError, RowCoercionError
from .factory import create_event_table
from .tables import EventTable
from .utils import contains_ignore_case, equals_ignore_case, is_missing, to_timestamp

RolesArg = Union[ColumnRoleMap, Mapping[str, str]]
LocationColumnsArg = Union[LocationColumnMap, Mapping[str, str]]
ProfileArg = Union[LocationProfile, Mapping[str, Any]]

# ============================================================================
# Resolved Columns
# ============================================================================

@dataclass(frozen=True)
class ResolvedColumns:
    """Column indices for each event role and location type, resolved once per pass."""
    id: int
    type: int
    start: int
    end: int
    label: int
    description: int
    locations: Tuple[Tuple[str, int], ...] = ()


# ============================================================================
# Event Matcher
# ============================================================================

class EventMatcher:
    """
    Main class for matching event table records to a time series.

    Features:
    - Resolve named columns once, failing fast on misconfiguration
    - Filter by requested event types (case-insensitive)
    - Match event locations against the time series location profile
    - Coerce start/end cells to Timestamps, skipping malformed rows
    - Restrict events to an optional time window

    The table and time series are borrowed and never modified; each call
    returns fresh results.
    """

    def __init__(self, event_table: Any, time_series: Any = None, verbose: bool = False):
        """
        Initialize matcher for one (event table, time series) pair.

        Args:
            event_table: EventTable, or data accepted by create_event_table
                (DataFrame, Dataset, list of records)
            time_series: Time series the events are associated with
            verbose: If True, print progress of each matching pass
        """
        self.event_table: EventTable = create_event_table(event_table)
        self.time_series = time_series
        self.verbose = verbose

    def _log(self, message: str) -> None:
        if self.verbose:
            print(message)

    # ------------------------------------------------------------------
    # Stage 1: column resolution
    # ------------------------------------------------------------------

    def resolve_columns(self, roles: RolesArg, location_columns: LocationColumnsArg) -> ResolvedColumns:
        """
        Resolve every role and location column name to a column index.

        Raises:
            ConfigurationError: If any column is not in the table
        """
        roles = _as_roles(roles)
        location_columns = _as_location_columns(location_columns)
        table = self.event_table

        def lookup(column: str, what: str) -> int:
            try:
                return table.resolve_column(column)
            except KeyError as e:
                raise ConfigurationError(
                    f'Event table "{table.table_id}" {what} column "{column}" not found in table',
                    table_id=table.table_id, column=column,
                ) from e

        indices = {role: lookup(column, f"event {role}") for role, column in roles.items()}
        locations = tuple(
            (location_type, lookup(column, f"location ({location_type})"))
            for location_type, column in location_columns.items()
        )
        return ResolvedColumns(locations=locations, **indices)

    # ------------------------------------------------------------------
    # Stage 2: event type filter
    # ------------------------------------------------------------------

    @staticmethod
    def matches_event_type(event_type: Optional[str], event_types: Sequence[str]) -> bool:
        """An empty request matches every type; otherwise compare ignoring case."""
        if not event_types:
            return True
        return contains_ignore_case(event_types, event_type)

    # ------------------------------------------------------------------
    # Stage 3: location match
    # ------------------------------------------------------------------

    @staticmethod
    def match_location(event_locations: Iterable[Tuple[str, Optional[str]]],
                       profile: LocationProfile) -> Optional[Tuple[str, str]]:
        """
        Find the first event location that agrees with the profile.

        A single (type, value) pair agreeing ignoring case is enough; the event
        does not have to assert every location in the profile.

        Returns:
            The matching (location type, location id) from the event, or None
        """
        profile_locations = profile.items()
        for location_type, location_id in event_locations:
            if location_id is None:
                continue
            for profile_type, profile_id in profile_locations:
                if equals_ignore_case(location_type, profile_type) and equals_ignore_case(location_id, profile_id):
                    return location_type, location_id
        return None

    def _event_locations(self, row: Sequence[Any], columns: ResolvedColumns):
        """Yield (location type, location id) pairs for a row; missing ids are None."""
        for location_type, index in columns.locations:
            value = self.event_table.cell(row, index)
            yield location_type, (None if is_missing(value) else self.event_table.cell_string(row, index))

    # ------------------------------------------------------------------
    # Stage 4: field extraction
    # ------------------------------------------------------------------

    def extract_event(self, row: Sequence[Any], row_index: int, columns: ResolvedColumns,
                      location: Tuple[str, str]) -> Event:
        """
        Build an Event from a matched row.

        Raises:
            RowCoercionError: If any field cannot be extracted or parsed
        """
        table = self.event_table
        column_names = table.column_names

        def text(index: int) -> str:
            try:
                return table.cell_string(row, index)
            except (TypeError, ValueError) as e:
                raise RowCoercionError(str(e), row_index, column_names[index]) from e

        def temporal(index: int):
            try:
                return to_timestamp(table.cell(row, index))
            except (TypeError, ValueError) as e:
                raise RowCoercionError(str(e), row_index, column_names[index]) from e

        location_type, location_id = location
        return Event(
            id=text(columns.id),
            type=text(columns.type),
            start=temporal(columns.start),
            end=temporal(columns.end),
            location_type=location_type,
            location_id=location_id,
            label=text(columns.label),
            description=text(columns.description),
        )

    # ------------------------------------------------------------------
    # Full pass
    # ------------------------------------------------------------------

    def match(self,
              roles: RolesArg,
              location_columns: LocationColumnsArg,
              profile: ProfileArg,
              event_types: Optional[Union[str, Sequence[str]]] = None,
              window_start: Any = None,
              window_end: Any = None) -> MatchResult:
        """
        Match the event table against the time series.

        Args:
            roles: Column names for the id, type, start, end, label and description
            location_columns: Location type -> column holding that location's id
            profile: Location identity of the time series, e.g. {"County": "Adams"}
            event_types: Event types to include (e.g., ["Drought"]); None or empty for all
            window_start: Only include events ending on or after this time
            window_end: Only include events starting on or before this time

        Returns:
            MatchResult with the events in table order and the rows that were
            skipped because a field could not be read

        Raises:
            ConfigurationError: If a column does not exist; raised before any row is read
        """
        table = self.event_table
        self._log(f"\n--- Matching Events: table '{table.table_id}' ---")

        self._log("Step 1: Resolving columns...")
        columns = self.resolve_columns(roles, location_columns)
        profile = _as_profile(profile)
        window = TimeWindow(window_start, window_end)
        if isinstance(event_types, str):
            event_types = [event_types]
        event_types = list(event_types or [])

        if not columns.locations:
            warnings.warn(
                f"No location columns configured for event table '{table.table_id}'; no events can match",
                UserWarning, stacklevel=2,
            )

        if self.verbose:
            self._log(f"Step 2: Scanning {len(table)} rows "
                      f"(types: {event_types or 'all'}, locations: {profile.to_dict()})...")
        result = MatchResult()
        for row_index, row in enumerate(table.rows()):
            result.rows_scanned += 1

            if not self.matches_event_type(table.cell_string(row, columns.type), event_types):
                continue

            location = self.match_location(self._event_locations(row, columns), profile)
            if location is None:
                continue

            try:
                event = self.extract_event(row, row_index, columns, location)
            except RowCoercionError as e:
                self._log(f"  -> Skipping row {row_index}: {e}")
                result.skipped.append(SkippedRow(row_index=e.row_index, column=e.column, reason=e.message))
                continue

            if not window.overlaps(event.start, event.end):
                continue

            result.events.append(TimeSeriesEvent(self.time_series, event))

        self._log(f"--- Matching Complete: {len(result.events)} events, "
                  f"{result.skipped_count} rows skipped ---")
        return result

    def create_time_series_events(self,
                                  roles: RolesArg,
                                  location_columns: LocationColumnsArg,
                                  profile: ProfileArg,
                                  event_types: Optional[Union[str, Sequence[str]]] = None,
                                  window_start: Any = None,
                                  window_end: Any = None) -> List[TimeSeriesEvent]:
        """Return the matched events only; see match() for the arguments."""
        return self.match(roles, location_columns, profile, event_types=event_types,
                          window_start=window_start, window_end=window_end).events

    def match_config(self, config: MatcherConfig,
                     properties: Optional[Mapping[str, Any]] = None) -> MatchResult:
        """
        Run a matching pass from a MatcherConfig.

        The location profile is expanded from the config's location sources
        using properties, defaulting to the time series attrs.
        """
        if properties is None:
            properties = getattr(self.time_series, "attrs", None) or {}
        return self.match(
            config.roles,
            config.location_columns,
            config.location_profile(properties),
            event_types=config.event_types,
            window_start=config.window.start,
            window_end=config.window.end,
        )


def _as_roles(roles: RolesArg) -> ColumnRoleMap:
    if isinstance(roles, ColumnRoleMap):
        return roles
    return ColumnRoleMap.from_dict(roles)


def _as_location_columns(location_columns: Optional[LocationColumnsArg]) -> LocationColumnMap:
    if isinstance(location_columns, LocationColumnMap):
        return location_columns
    return LocationColumnMap.from_dict(location_columns or {})


def _as_profile(profile: Optional[ProfileArg]) -> LocationProfile:
    if isinstance(profile, LocationProfile):
        return profile
    return LocationProfile.from_dict(profile or {})


def validate_configuration(event_table: Any, roles: RolesArg,
                           location_columns: Optional[LocationColumnsArg] = None) -> List[str]:
    """
    Validate that columns can be resolved against an event table.

    Returns list of error messages (empty if valid).
    """
    table = create_event_table(event_table)
    errors = []

    try:
        roles = _as_roles(roles)
    except ConfigurationError as e:
        return [str(e)]
    for role, column in roles.items():
        try:
            table.resolve_column(column)
        except KeyError:
            errors.append(f"Missing {role} column: {column}")

    try:
        location_columns = _as_location_columns(location_columns)
    except ConfigurationError as e:
        errors.append(str(e))
        return errors
    for location_type, column in location_columns.items():
        try:
            table.resolve_column(column)
        except KeyError:
            errors.append(f"Missing location column for {location_type}: {column}")

    if not len(location_columns):
        errors.append("No location columns configured; no events can match")

    return errors
