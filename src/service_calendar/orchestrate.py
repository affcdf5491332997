"""Read calendar.txt and calendar_dates.txt of a feed into a service catalog."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, TypeVar, Union

import pandas as pd
from google.cloud import storage
from pandera.errors import SchemaError, SchemaErrors

from common.logging_utils import logger
from common.transform_utils import Timer
from schemas.common.schema_utils import clean_and_validate_dataframe
from schemas.schema_registry import get_schema_class
from .errors import RowParseError, SourceMissingError
from .feed import FeedSource, open_feed
from .materialize import build_catalog
from .merge import merge_exceptions
from .records import Catalog, DateExceptionRecord, WeeklyPatternRecord

T = TypeVar("T")


class TransitCollections:
    """Holder owned by the wider pipeline; receives the finished catalog."""

    def __init__(self) -> None:
        self.calendars: Catalog = {}


def _failing_row(exc: Union[SchemaError, SchemaErrors]) -> Optional[int]:
    """1-based data row of the first failure reported by pandera, if any."""
    failure_cases = getattr(exc, "failure_cases", None)
    if not isinstance(failure_cases, pd.DataFrame) or "index" not in failure_cases.columns:
        return None
    indexes = pd.to_numeric(failure_cases["index"], errors="coerce").dropna()
    if indexes.empty:
        return None
    return int(indexes.min()) + 1


def _decode_rows(df: pd.DataFrame, decoder: Callable[[dict], T], path: str) -> List[T]:
    records: List[T] = []
    for position, row in enumerate(df.to_dict(orient="records"), start=1):
        try:
            records.append(decoder(row))
        except (KeyError, ValueError) as exc:
            raise RowParseError(path, exc, row=position) from exc
    return records


def read_records(feed: FeedSource, dataset: str, decoder: Callable[[dict], T]) -> List[T]:
    """Validate one calendar table with its schema and decode every row."""
    schema_class = get_schema_class(dataset)
    filename = schema_class._filename
    path = feed.describe(filename)

    df_raw = feed.read_table(filename)
    try:
        df = clean_and_validate_dataframe(df_raw, schema_class)
    except (SchemaError, SchemaErrors) as exc:
        raise RowParseError(path, exc, row=_failing_row(exc)) from exc

    return _decode_rows(df, decoder, path)


def read_calendars_from_feed(feed: FeedSource) -> Catalog:
    calendar_file = get_schema_class("calendar")._filename
    calendar_dates_file = get_schema_class("calendar_dates")._filename

    has_calendar = feed.exists(calendar_file)
    has_calendar_dates = feed.exists(calendar_dates_file)
    if not has_calendar and not has_calendar_dates:
        raise SourceMissingError(feed.location)

    if has_calendar:
        logger.info("Reading %s", feed.describe(calendar_file))
        weekly = read_records(feed, "calendar", WeeklyPatternRecord.from_row)
        catalog = build_catalog(weekly, source=feed.describe(calendar_file))
    else:
        logger.info("Skipping %s", feed.describe(calendar_file))
        catalog = {}

    if has_calendar_dates:
        logger.info("Reading %s", feed.describe(calendar_dates_file))
        exceptions = read_records(feed, "calendar_dates", DateExceptionRecord.from_row)
        merge_exceptions(catalog, exceptions)
    else:
        logger.info("Skipping %s", feed.describe(calendar_dates_file))

    return catalog


def read_calendars(location: Union[str, Path, FeedSource], client: Optional[storage.Client] = None) -> Catalog:
    """Build the service catalog of the feed at ``location``.

    Raises:
        SourceMissingError: neither calendar file is present
        CalendarIOError: the feed or one of its files cannot be opened
        RowParseError: a row of either file cannot be decoded
    """
    feed = location if isinstance(location, FeedSource) else open_feed(location, client=client)

    with Timer() as timer:
        catalog = read_calendars_from_feed(feed)

    logger.info("Calendars loaded: location=%s services=%d duration=%.2fs", feed.location, len(catalog), timer.duration)
    return catalog


def manage_calendars(location: Union[str, Path, FeedSource], collections: TransitCollections, client: Optional[storage.Client] = None) -> None:
    """Read the feed's calendars and install them into ``collections`` in one step."""
    collections.calendars = read_calendars(location, client=client)
