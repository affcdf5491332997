"""Typed rows of calendar.txt / calendar_dates.txt and their field codecs.

GTFS encodes weekday flags as a single digit, dates as ``YYYYMMDD`` text and
exception types as ``1`` (added) or ``2`` (removed). The codecs below are the
only place those encodings are known.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import IntEnum
from typing import Dict, Iterable, List, Mapping, Set

DATE_FORMAT = "%Y%m%d"

# Monday..Sunday, matching ``date.weekday()`` indexes 0..6
WEEKDAY_COLUMNS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


class ExceptionType(IntEnum):
    ADD = 1
    REMOVE = 2


def decode_bool(value: str) -> bool:
    text = str(value).strip()
    if text == "1":
        return True
    if text == "0":
        return False
    raise ValueError(f"invalid boolean {value!r}, expected '0' or '1'")


def encode_bool(value: bool) -> str:
    return "1" if value else "0"


def decode_date(value: str) -> date:
    text = str(value).strip()
    if len(text) != 8 or not text.isdigit():
        raise ValueError(f"invalid date {value!r}, expected YYYYMMDD")
    return datetime.strptime(text, DATE_FORMAT).date()


def encode_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def decode_exception_type(value: str) -> ExceptionType:
    text = str(value).strip()
    try:
        return ExceptionType(int(text))
    except ValueError:
        raise ValueError(f"invalid exception_type {value!r}, expected '1' or '2'") from None


def encode_exception_type(value: ExceptionType) -> str:
    return str(int(value))


@dataclass
class WeeklyPatternRecord:
    """One row of calendar.txt."""

    service_id: str
    monday: bool
    tuesday: bool
    wednesday: bool
    thursday: bool
    friday: bool
    saturday: bool
    sunday: bool
    start_date: date
    end_date: date

    @classmethod
    def from_row(cls, row: Mapping[str, str]) -> "WeeklyPatternRecord":
        flags = {name: decode_bool(row[name]) for name in WEEKDAY_COLUMNS}
        return cls(
            service_id=str(row["service_id"]),
            start_date=decode_date(row["start_date"]),
            end_date=decode_date(row["end_date"]),
            **flags,
        )

    @classmethod
    def from_weekdays(cls, service_id: str, weekdays: Iterable[int], start_date: date, end_date: date) -> "WeeklyPatternRecord":
        """Build a record from weekday indexes (0=Monday)."""
        days = set(weekdays)
        flags = {name: index in days for index, name in enumerate(WEEKDAY_COLUMNS)}
        return cls(service_id=service_id, start_date=start_date, end_date=end_date, **flags)

    def valid_weekdays(self) -> Set[int]:
        return {index for index, name in enumerate(WEEKDAY_COLUMNS) if getattr(self, name)}

    def to_row(self) -> Dict[str, str]:
        row = {"service_id": self.service_id}
        row.update({name: encode_bool(getattr(self, name)) for name in WEEKDAY_COLUMNS})
        row["start_date"] = encode_date(self.start_date)
        row["end_date"] = encode_date(self.end_date)
        return row


@dataclass
class DateExceptionRecord:
    """One row of calendar_dates.txt."""

    service_id: str
    date: date
    exception_type: ExceptionType

    @classmethod
    def from_row(cls, row: Mapping[str, str]) -> "DateExceptionRecord":
        return cls(
            service_id=str(row["service_id"]),
            date=decode_date(row["date"]),
            exception_type=decode_exception_type(row["exception_type"]),
        )

    def to_row(self) -> Dict[str, str]:
        return {
            "service_id": self.service_id,
            "date": encode_date(self.date),
            "exception_type": encode_exception_type(self.exception_type),
        }


@dataclass
class ServiceCalendar:
    """Canonical set of operating dates for one service."""

    id: str
    dates: Set[date] = field(default_factory=set)

    def sorted_dates(self) -> List[date]:
        return sorted(self.dates)


# service_id -> calendar, in order of first appearance
Catalog = Dict[str, ServiceCalendar]
