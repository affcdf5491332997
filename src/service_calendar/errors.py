"""Error taxonomy for calendar conversion.

Everything except ``MissingValidityPeriodError`` is fatal and propagates out
of the conversion step. ``MissingValidityPeriodError`` is raised and handled
per service inside the serializer loop.
"""

from typing import Optional


class CalendarError(RuntimeError):
    """Base class for calendar conversion failures."""


class SourceMissingError(CalendarError):
    """Neither calendar.txt nor calendar_dates.txt is present in the feed."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"calendar_dates.txt or calendar.txt not found in {location}")


class CalendarIOError(CalendarError):
    """A source could not be opened or read."""

    def __init__(self, path: str, reason: object = None):
        self.path = path
        self.reason = reason
        message = f"Error reading {path}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)


class CalendarWriteError(CalendarIOError):
    """A destination could not be created, serialized or flushed."""

    def __init__(self, path: str, reason: object = None):
        self.path = path
        self.reason = reason
        message = f"Error writing {path}"
        if reason is not None:
            message = f"{message}: {reason}"
        CalendarError.__init__(self, message)


class RowParseError(CalendarError):
    """A row of calendar.txt or calendar_dates.txt could not be decoded."""

    def __init__(self, path: str, reason: object, row: Optional[int] = None):
        self.path = path
        self.row = row
        self.reason = reason
        location = path if row is None else f"{path} (row {row})"
        super().__init__(f"Error parsing {location}: {reason}")


class MissingValidityPeriodError(CalendarError):
    """The compressor returned a weekly pattern without a validity period."""

    def __init__(self, service_id: str):
        self.service_id = service_id
        super().__init__(f"Validity period not found for service id {service_id}")
