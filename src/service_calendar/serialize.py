"""Write a service catalog back as calendar.txt and calendar_dates.txt."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Union

import pandas as pd
from pandera.errors import SchemaError, SchemaErrors

from common.logging_utils import logger
from schemas.common.schema_utils import clean_and_validate_dataframe
from schemas.schema_registry import get_schema_class
from .compressor import Compressor, Translation, translate
from .errors import CalendarWriteError, MissingValidityPeriodError
from .records import Catalog, DateExceptionRecord, ServiceCalendar, WeeklyPatternRecord


def _weekly_record(calendar: ServiceCalendar, translation: Translation) -> WeeklyPatternRecord:
    if translation.validity_period is None:
        raise MissingValidityPeriodError(calendar.id)
    return WeeklyPatternRecord.from_weekdays(
        calendar.id,
        translation.operating_days,
        translation.validity_period.start_date,
        translation.validity_period.end_date,
    )


def translate_catalog(catalog: Catalog, compressor: Compressor = translate) -> Tuple[List[WeeklyPatternRecord], List[DateExceptionRecord]]:
    """Compress every calendar, in catalog order, into weekly and exception rows.

    A weekly pattern returned without validity period only costs that
    service its calendar.txt row; its exceptions are still kept.
    """
    weekly: List[WeeklyPatternRecord] = []
    exceptions: List[DateExceptionRecord] = []

    for calendar in catalog.values():
        translation = compressor(calendar.sorted_dates())

        if translation.operating_days:
            try:
                weekly.append(_weekly_record(calendar, translation))
            except MissingValidityPeriodError as exc:
                logger.warning("%s", exc)

        for exception in translation.exceptions:
            exceptions.append(DateExceptionRecord(calendar.id, exception.date, exception.exception_type))

    return weekly, exceptions


def write_table(path: Path, records: Sequence[Union[WeeklyPatternRecord, DateExceptionRecord]], dataset: str) -> None:
    """Serialize ``records`` to ``path``; the file only appears once fully written."""
    schema_class = get_schema_class(dataset)
    columns = list(schema_class.to_schema().columns.keys())

    try:
        df = pd.DataFrame([record.to_row() for record in records], columns=columns)
        df = clean_and_validate_dataframe(df, schema_class)
        payload = df.to_csv(index=False, lineterminator="\n")
    except (SchemaError, SchemaErrors, AttributeError, TypeError, ValueError) as exc:
        raise CalendarWriteError(str(path), exc) from exc

    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile("w", encoding="utf-8", newline="", dir=path.parent, prefix=f".{path.name}.", delete=False) as handle:
            tmp_name = handle.name
            handle.write(payload)
            handle.flush()
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise CalendarWriteError(str(path), exc) from exc


def write_calendar(output_dir: Union[str, Path], records: Sequence[WeeklyPatternRecord]) -> bool:
    """Write calendar.txt when there is at least one row; returns whether it was written."""
    logger.info("Writing calendar.txt")
    if not records:
        return False
    write_table(Path(output_dir) / get_schema_class("calendar")._filename, records, "calendar")
    return True


def write_calendar_dates(output_dir: Union[str, Path], records: Sequence[DateExceptionRecord]) -> bool:
    """Write calendar_dates.txt when there is at least one row; returns whether it was written."""
    logger.info("Writing calendar_dates.txt")
    if not records:
        return False
    write_table(Path(output_dir) / get_schema_class("calendar_dates")._filename, records, "calendar_dates")
    return True


def write_calendars(output_dir: Union[str, Path], catalog: Catalog, compressor: Compressor = translate) -> Dict[str, int]:
    """Compress ``catalog`` and write both calendar files into ``output_dir``."""
    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise CalendarWriteError(str(output_dir), exc) from exc

    weekly, exceptions = translate_catalog(catalog, compressor)
    write_calendar_dates(output_dir, exceptions)
    write_calendar(output_dir, weekly)

    logger.info(
        "Calendars written: output=%s services=%d calendar_rows=%d calendar_dates_rows=%d",
        output_dir,
        len(catalog),
        len(weekly),
        len(exceptions),
    )
    return {
        "services": len(catalog),
        "calendar_rows": len(weekly),
        "calendar_dates_rows": len(exceptions),
    }
