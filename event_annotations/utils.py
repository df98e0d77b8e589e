import datetime
import numpy as np
import pandas as pd
from typing import Any, Iterable, Optional, Literal

from .parsing import parse_datetime

# ============================================================================
# Type Definitions
# ============================================================================

RoleName = Literal["id", "type", "start", "end", "label", "description"]
TemporalValue = Optional[pd.Timestamp]

ROLE_NAMES = ("id", "type", "start", "end", "label", "description")


# ============================================================================
# Utility Functions
# ============================================================================

def is_missing(value: Any) -> bool:
    """
    Determine whether a table cell holds no value.

    None, NaN and NaT all count as missing. Containers and strings are
    never missing (an empty string is a value).
    """
    if value is None:
        return True
    if isinstance(value, (str, bytes)):
        return False
    try:
        return bool(pd.isnull(value))
    except (TypeError, ValueError):
        # Array-like cells make pd.isnull ambiguous; treat them as present.
        return False


def equals_ignore_case(a: Optional[str], b: Optional[str]) -> bool:
    """Case-insensitive string equality; None never equals anything."""
    if a is None or b is None:
        return False
    return a.casefold() == b.casefold()


def contains_ignore_case(values: Iterable[str], candidate: Optional[str]) -> bool:
    """Return True if candidate equals any of values, ignoring case."""
    return any(equals_ignore_case(value, candidate) for value in values)


def to_timestamp(value: Any) -> TemporalValue:
    """
    Coerce a temporal cell to the canonical temporal value.

    Priority order:
    1. missing (None, NaN, NaT) -> None
    2. pandas.Timestamp / datetime.datetime / numpy.datetime64 -> naive Timestamp
    3. datetime.date -> Timestamp at midnight of that date
    4. str -> parsed with the canonical date/time grammar

    Args:
        value: Cell value to coerce

    Returns:
        Canonical Timestamp, or None for a missing value

    Raises:
        ValueError: If a string cannot be parsed or the value carries a time zone
        TypeError: If the value has no temporal interpretation
    """
    if is_missing(value):
        return None
    if isinstance(value, (datetime.datetime, np.datetime64)):
        timestamp = value if isinstance(value, pd.Timestamp) else pd.Timestamp(value)
        if timestamp.tzinfo is not None:
            raise ValueError(f"Time zone aware value {value!r} is not supported; use naive date/times")
        return timestamp
    if isinstance(value, datetime.date):
        return pd.Timestamp(year=value.year, month=value.month, day=value.day)
    if isinstance(value, str):
        return parse_datetime(value)
    raise TypeError(f"Cannot interpret {type(value).__name__} value {value!r} as a date/time")
