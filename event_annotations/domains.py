import re
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .exceptions import ConfigurationError
from .parsing import format_datetime
from .utils import ROLE_NAMES, RoleName, TemporalValue, to_timestamp

# ============================================================================
# Column Mapping Classes
# ============================================================================

@dataclass(frozen=True)
class ColumnRoleMap:
    """
    Names of the event table columns that hold each event field.

    Example:
        ColumnRoleMap(id="EventID", type="EventType", start="Start",
                      end="End", label="Label", description="Description")
    """
    id: str
    type: str
    start: str
    end: str
    label: str
    description: str

    def __post_init__(self):
        """Validate column names."""
        for role, column in self.items():
            if not isinstance(column, str) or not column.strip():
                raise ConfigurationError(f"Column name for role '{role}' must be a non-empty string")

    def items(self) -> List[Tuple[RoleName, str]]:
        """Return (role, column name) pairs in role order."""
        return [(f.name, getattr(self, f.name)) for f in fields(self)]

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> 'ColumnRoleMap':
        """Create from dictionary keyed by role name."""
        unknown = set(data) - set(ROLE_NAMES)
        if unknown:
            raise ConfigurationError(f"Unknown column roles: {sorted(unknown)}. Must be among {list(ROLE_NAMES)}")
        missing = [role for role in ROLE_NAMES if role not in data]
        if missing:
            raise ConfigurationError(f"Missing column roles: {missing}")
        return cls(**data)

    def to_dict(self) -> Dict[str, str]:
        return dict(self.items())


@dataclass
class LocationColumnMap:
    """
    Ordered mapping from location type (e.g., "County") to the event table
    column holding that type's identifier for each event.

    An empty map is allowed, but then no event can match a time series.
    """
    columns: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Copy and validate the mapping."""
        self.columns = dict(self.columns)
        for location_type, column in self.columns.items():
            if not isinstance(location_type, str) or not location_type.strip():
                raise ConfigurationError("Location type must be a non-empty string")
            if not isinstance(column, str) or not column.strip():
                raise ConfigurationError(f"Column name for location type '{location_type}' must be a non-empty string")

    def items(self) -> List[Tuple[str, str]]:
        return list(self.columns.items())

    def __len__(self) -> int:
        return len(self.columns)

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> 'LocationColumnMap':
        return cls(columns=dict(data))

    def to_dict(self) -> Dict[str, str]:
        return dict(self.columns)


# ============================================================================
# Location Profile
# ============================================================================

# Matches "${TS:County}" and "${County}"
PROPERTY_REFERENCE = re.compile(r"\$\{(?:TS:)?([^}]+)\}")


@dataclass
class LocationProfile:
    """
    Location identity of a time series as ordered (type, value) pairs.

    Example:
        LocationProfile([("County", "Adams"), ("State", "CO")])
    """
    locations: List[Tuple[str, str]] = field(default_factory=list)

    def __post_init__(self):
        """Normalize pairs and validate."""
        normalized = []
        for pair in self.locations:
            if len(pair) != 2:
                raise ValueError(f"Location must be a (type, value) pair, got {pair!r}")
            location_type, value = pair
            if not isinstance(location_type, str) or not location_type.strip():
                raise ValueError("Location type must be a non-empty string")
            if value is None:
                raise ValueError(f"Location '{location_type}' has no value")
            normalized.append((location_type, str(value)))
        self.locations = normalized

    def items(self) -> List[Tuple[str, str]]:
        return list(self.locations)

    def __len__(self) -> int:
        return len(self.locations)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'LocationProfile':
        """Create from dictionary of location type -> value."""
        return cls(locations=list(data.items()))

    def to_dict(self) -> Dict[str, str]:
        return dict(self.locations)

    @classmethod
    def from_properties(cls, source_map: Mapping[str, str],
                        properties: Mapping[str, Any]) -> 'LocationProfile':
        """
        Expand a location source map using time series properties.

        Values may reference properties as "${TS:Name}" or "${Name}";
        anything else is used literally.

        Args:
            source_map: Location type -> value template, e.g. {"County": "${TS:County}"}
            properties: Time series properties, e.g. {"County": "Adams"}

        Returns:
            Resolved LocationProfile

        Raises:
            ConfigurationError: If a template references a missing property
        """
        def expand(location_type: str, template: str) -> str:
            def substitute(match: re.Match) -> str:
                name = match.group(1)
                if name not in properties or properties[name] is None:
                    raise ConfigurationError(
                        f"Time series property '{name}' needed for location type '{location_type}' is not defined"
                    )
                return str(properties[name])
            return PROPERTY_REFERENCE.sub(substitute, str(template))

        return cls(locations=[(location_type, expand(location_type, template))
                              for location_type, template in source_map.items()])

    @classmethod
    def from_series(cls, source_map: Mapping[str, str], series: Any) -> 'LocationProfile':
        """Expand a location source map using the attrs of a pandas Series or xarray DataArray."""
        attrs = getattr(series, "attrs", None)
        if attrs is None:
            raise ValueError(f"Time series of type {type(series).__name__} has no attrs")
        return cls.from_properties(source_map, attrs)


# ============================================================================
# Time Window
# ============================================================================

@dataclass
class TimeWindow:
    """
    Optional time window restricting matched events.

    A missing bound leaves that side unbounded. Bounds may be given as
    Timestamps, datetimes, dates or date/time text.
    """
    start: Optional[Any] = None
    end: Optional[Any] = None

    def __post_init__(self):
        """Coerce bounds and validate."""
        self.start = to_timestamp(self.start)
        self.end = to_timestamp(self.end)
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValueError("Window start must not be after window end")

    @property
    def is_unbounded(self) -> bool:
        return self.start is None and self.end is None

    def overlaps(self, event_start: TemporalValue, event_end: TemporalValue) -> bool:
        """
        Check whether an event interval intersects the window.

        A missing event start extends to the infinite past, a missing event
        end to the infinite future.
        """
        if self.end is not None and event_start is not None and event_start > self.end:
            return False
        if self.start is not None and event_end is not None and event_end < self.start:
            return False
        return True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'TimeWindow':
        return cls(**data)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"start": format_datetime(self.start), "end": format_datetime(self.end)}
