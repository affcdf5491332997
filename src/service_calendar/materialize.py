"""Expand calendar.txt weekly patterns into explicit operating dates."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Iterator, Optional, Set

from common.logging_utils import logger
from .errors import RowParseError
from .records import Catalog, ServiceCalendar, WeeklyPatternRecord


def daterange(start_date: date, end_date: date) -> Iterator[date]:
    """Yield every date from ``start_date`` to ``end_date`` inclusive (nothing if start > end)."""
    for offset in range((end_date - start_date).days + 1):
        yield start_date + timedelta(days=offset)


def materialize_dates(record: WeeklyPatternRecord) -> Set[date]:
    """Dates in the record's validity period that fall on one of its flagged weekdays."""
    valid_days = record.valid_weekdays()
    if not valid_days:
        return set()
    return {day for day in daterange(record.start_date, record.end_date) if day.weekday() in valid_days}


def build_catalog(records: Iterable[WeeklyPatternRecord], catalog: Optional[Catalog] = None, source: str = "calendar.txt") -> Catalog:
    """Insert one ServiceCalendar per record whose expansion is non-empty.

    Records expanding to no date at all are dropped without creating a calendar.
    """
    if catalog is None:
        catalog = {}

    seen: Set[str] = set()
    skipped = 0
    for position, record in enumerate(records, start=1):
        if record.service_id in seen:
            raise RowParseError(source, f"duplicate service_id {record.service_id!r}", row=position)
        seen.add(record.service_id)

        dates = materialize_dates(record)
        if not dates:
            skipped += 1
            logger.debug("Service %s has no operating date between %s and %s", record.service_id, record.start_date, record.end_date)
            continue
        catalog[record.service_id] = ServiceCalendar(id=record.service_id, dates=dates)

    if skipped:
        logger.info("Dropped %d weekly patterns without any operating date", skipped)
    return catalog
