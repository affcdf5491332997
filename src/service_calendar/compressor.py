"""Compress a set of operating dates into a weekly pattern plus exceptions.

The serializer only depends on the ``Compressor`` protocol; ``translate`` is
the default implementation. For every weekday it compares how many of its
occurrences inside the bounding range operate against how many do not, and
keeps the weekday when operating days are the strict majority. Whatever the
pattern cannot express is returned as ADD / REMOVE exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional, Protocol, Set

from .materialize import daterange
from .records import ExceptionType


@dataclass(frozen=True)
class ValidityPeriod:
    start_date: date
    end_date: date


@dataclass(frozen=True)
class ExceptionDate:
    date: date
    exception_type: ExceptionType


@dataclass
class Translation:
    """Weekly pattern (weekday indexes, 0=Monday) and the exceptions it needs."""

    operating_days: Set[int] = field(default_factory=set)
    validity_period: Optional[ValidityPeriod] = None
    exceptions: List[ExceptionDate] = field(default_factory=list)


class Compressor(Protocol):
    def __call__(self, dates: Iterable[date]) -> Translation: ...


def _choose_weekdays(dates: Set[date], start_date: date, end_date: date) -> Set[int]:
    operating = [0] * 7
    idle = [0] * 7
    for day in daterange(start_date, end_date):
        if day in dates:
            operating[day.weekday()] += 1
        else:
            idle[day.weekday()] += 1
    return {weekday for weekday in range(7) if operating[weekday] > idle[weekday]}


def translate(dates: Iterable[date]) -> Translation:
    """Deterministic default compressor."""
    dates = set(dates)
    if not dates:
        return Translation()

    ordered = sorted(dates)
    operating_days = _choose_weekdays(dates, ordered[0], ordered[-1])
    if not operating_days:
        return Translation(exceptions=[ExceptionDate(day, ExceptionType.ADD) for day in ordered])

    on_pattern = [day for day in ordered if day.weekday() in operating_days]
    validity_period = ValidityPeriod(on_pattern[0], on_pattern[-1])

    exceptions: List[ExceptionDate] = []
    for day in daterange(ordered[0], ordered[-1]):
        in_pattern = (
            validity_period.start_date <= day <= validity_period.end_date
            and day.weekday() in operating_days
        )
        if day in dates and not in_pattern:
            exceptions.append(ExceptionDate(day, ExceptionType.ADD))
        elif in_pattern and day not in dates:
            exceptions.append(ExceptionDate(day, ExceptionType.REMOVE))

    return Translation(operating_days, validity_period, exceptions)
