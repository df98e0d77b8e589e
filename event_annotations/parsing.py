import re
from typing import Optional

import pandas as pd

# ============================================================================
# Date/Time Text Parser
# ============================================================================

class DateTimeParser:
    """Parse date/time text in the forms used by event tables into Timestamps."""

    # Pattern definitions, tried in order
    PATTERNS = {
        # "2020", "2020-06", "2020-06-01", "2020-06-01 13", "2020-06-01 1330",
        # "2020-06-01 13:30", "2020-06-01T13:30:05", "2020-06-01 13:30:05:25"
        "year_first": (
            r"(?P<year>\d{4})"
            r"(?:-(?P<month>\d{1,2})"
            r"(?:-(?P<day>\d{1,2})"
            r"(?:[ T](?P<hour>\d{2})"
            r"(?::?(?P<minute>\d{2})"
            r"(?::(?P<second>\d{2})"
            r"(?:[:.](?P<fraction>\d{1,6}))?)?)?)?)?)?"
        ),

        # "202006011330"
        "compact": r"(?P<year>\d{4})(?P<month>\d{2})(?P<day>\d{2})(?P<hour>\d{2})(?P<minute>\d{2})",

        # "6/1/2020", "06/01/2020 13", "06/01/2020 13:30", "06/01/2020 13:30:05"
        "month_first": (
            r"(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{4})"
            r"(?: (?P<hour>\d{2})(?::(?P<minute>\d{2})(?::(?P<second>\d{2}))?)?)?"
        ),

        # "06-01-2020 13"
        "month_first_dash": r"(?P<month>\d{2})-(?P<day>\d{2})-(?P<year>\d{4}) (?P<hour>\d{2})",

        # "06/2020", "6/2020"
        "month_year": r"(?P<month>\d{1,2})/(?P<year>\d{4})",
    }

    @classmethod
    def parse(cls, text: str) -> pd.Timestamp:
        """
        Parse text into a Timestamp.

        Components missing from the text default to the start of the period,
        so "2020-06" is 2020-06-01 00:00:00.

        Args:
            text: Date/time string

        Returns:
            Parsed Timestamp

        Raises:
            ValueError: If the text is empty, has an unrecognized format, or
                holds an out-of-range component (e.g., month 13)
        """
        if text is None:
            raise ValueError("Cannot parse date/time from None")
        text = text.strip()
        if not text:
            raise ValueError("Cannot parse date/time from empty string")

        for pattern in cls.PATTERNS.values():
            match = re.fullmatch(pattern, text)
            if match:
                return cls._build(match.groupdict(), text)

        raise ValueError(f'Date/time string "{text}" format is not recognized')

    @classmethod
    def _build(cls, parts: dict, text: str) -> pd.Timestamp:
        """Create a Timestamp from matched components."""
        def component(name: str, default: int) -> int:
            value = parts.get(name)
            return int(value) if value is not None else default

        fraction: Optional[str] = parts.get("fraction")
        microsecond = int(fraction.ljust(6, "0")) if fraction else 0
        try:
            return pd.Timestamp(
                year=component("year", 1),
                month=component("month", 1),
                day=component("day", 1),
                hour=component("hour", 0),
                minute=component("minute", 0),
                second=component("second", 0),
                microsecond=microsecond,
            )
        except ValueError as e:
            raise ValueError(f'Invalid date/time "{text}": {e}') from e


def parse_datetime(text: str) -> pd.Timestamp:
    """Parse date/time text using the canonical grammar."""
    return DateTimeParser.parse(text)


def format_datetime(value: Optional[pd.Timestamp]) -> Optional[str]:
    """
    Render a Timestamp in the canonical text form.

    Midnight values render as a date only; the output always parses back to
    the same Timestamp with parse_datetime.
    """
    if value is None:
        return None
    if value == value.normalize():
        return value.strftime("%Y-%m-%d")
    if value.microsecond:
        return value.strftime("%Y-%m-%d %H:%M:%S.%f")
    return value.strftime("%Y-%m-%d %H:%M:%S")
