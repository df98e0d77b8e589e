import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from .domains import ColumnRoleMap, LocationColumnMap, LocationProfile, TimeWindow

# ============================================================================
# Matcher Configuration
# ============================================================================

@dataclass
class MatcherConfig:
    """
    Everything needed for one matching pass, in one serializable bundle.

    The location source map holds location type -> value templates that are
    expanded against the time series properties (see
    LocationProfile.from_properties) to build the location profile.
    """

    roles: ColumnRoleMap
    location_columns: LocationColumnMap = field(default_factory=LocationColumnMap)
    location_sources: Dict[str, str] = field(default_factory=dict)
    event_types: List[str] = field(default_factory=list)
    window: TimeWindow = field(default_factory=TimeWindow)

    def __post_init__(self):
        """Accept plain dictionaries for the nested parts."""
        if isinstance(self.roles, Mapping):
            self.roles = ColumnRoleMap.from_dict(self.roles)
        if isinstance(self.location_columns, Mapping):
            self.location_columns = LocationColumnMap.from_dict(self.location_columns)
        if isinstance(self.window, Mapping):
            self.window = TimeWindow.from_dict(self.window)
        if isinstance(self.event_types, str):
            self.event_types = [self.event_types]
        self.event_types = list(self.event_types or [])
        self.location_sources = dict(self.location_sources or {})

    def location_profile(self, properties: Mapping[str, Any]) -> LocationProfile:
        """Build the location profile for a time series from its properties."""
        return LocationProfile.from_properties(self.location_sources, properties)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "roles": self.roles.to_dict(),
            "location_columns": self.location_columns.to_dict(),
            "location_sources": dict(self.location_sources),
            "event_types": list(self.event_types),
            "window": self.window.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MatcherConfig':
        """Create configuration from dictionary."""
        if "roles" not in data:
            raise ValueError("Matcher configuration requires 'roles'")
        kwargs = data.copy()
        window = kwargs.pop("window", None) or {}
        return cls(window=TimeWindow.from_dict(window), **kwargs)

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> 'MatcherConfig':
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(text))
