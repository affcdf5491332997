"""Apply calendar_dates.txt exceptions on top of materialized calendars."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from common.logging_utils import logger
from .records import Catalog, DateExceptionRecord, ExceptionType, ServiceCalendar

ADDED = "added"
REMOVED = "removed"
CREATED = "created"
IGNORED = "ignored"


def apply_exception(catalog: Catalog, record: DateExceptionRecord) -> str:
    """Apply one exception to ``catalog`` in place and return the action taken.

    - known service, ADD: the date joins its set
    - known service, REMOVE: the date leaves its set
    - unknown service, ADD: a calendar holding only that date is created
    - unknown service, REMOVE: nothing happens

    Calendars are never removed, even when their set becomes empty.
    """
    calendar = catalog.get(record.service_id)

    if calendar is not None:
        if record.exception_type == ExceptionType.ADD:
            calendar.dates.add(record.date)
            return ADDED
        calendar.dates.discard(record.date)
        return REMOVED

    if record.exception_type == ExceptionType.REMOVE:
        return IGNORED

    # the lookup above missed, so the key is absent and insertion cannot collide
    assert record.service_id not in catalog
    catalog[record.service_id] = ServiceCalendar(id=record.service_id, dates={record.date})
    return CREATED


def merge_exceptions(catalog: Catalog, records: Iterable[DateExceptionRecord]) -> Counter:
    """Apply ``records`` strictly in iteration order; returns per-action counts."""
    actions: Counter = Counter()
    for record in records:
        actions[apply_exception(catalog, record)] += 1

    if actions[CREATED]:
        logger.info("Created %d services from calendar_dates.txt", actions[CREATED])
    if actions[IGNORED]:
        logger.debug("Ignored %d removals for unknown services", actions[IGNORED])
    return actions
