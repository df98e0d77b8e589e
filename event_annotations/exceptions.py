"""Exceptions raised while matching events to time series."""

from typing import Dict, Optional


class EventAnnotationError(ValueError):
    """Base exception for all event annotation errors."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigurationError(EventAnnotationError):
    """
    The requested columns or profile cannot be used with the event table.

    Raised before any table row is scanned, so no partial output exists.
    """

    def __init__(self, message: str, table_id: Optional[str] = None,
                 column: Optional[str] = None):
        details = {}
        if table_id is not None:
            details["table"] = table_id
        if column is not None:
            details["column"] = column
        super().__init__(message, details)
        self.table_id = table_id
        self.column = column


class RowCoercionError(EventAnnotationError):
    """A single row's field could not be extracted or parsed."""

    def __init__(self, message: str, row_index: int, column: Optional[str] = None):
        details = {"row": str(row_index)}
        if column is not None:
            details["column"] = column
        super().__init__(message, details)
        self.row_index = row_index
        self.column = column
