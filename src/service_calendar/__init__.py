"""
Service Calendars
=================

Conversion between GTFS/NTFS calendar.txt + calendar_dates.txt and a catalog
of explicit operating dates per service.
"""

from .compressor import Compressor, ExceptionDate, Translation, ValidityPeriod, translate
from .errors import (
    CalendarError,
    CalendarIOError,
    CalendarWriteError,
    MissingValidityPeriodError,
    RowParseError,
    SourceMissingError,
)
from .orchestrate import TransitCollections, manage_calendars, read_calendars
from .records import (
    Catalog,
    DateExceptionRecord,
    ExceptionType,
    ServiceCalendar,
    WeeklyPatternRecord,
)
from .serialize import translate_catalog, write_calendars
from .services import get_active_services, get_validity_period

__all__ = [
    'Catalog',
    'CalendarError',
    'CalendarIOError',
    'CalendarWriteError',
    'Compressor',
    'DateExceptionRecord',
    'ExceptionDate',
    'ExceptionType',
    'MissingValidityPeriodError',
    'RowParseError',
    'ServiceCalendar',
    'SourceMissingError',
    'Translation',
    'TransitCollections',
    'ValidityPeriod',
    'WeeklyPatternRecord',
    'get_active_services',
    'get_validity_period',
    'manage_calendars',
    'read_calendars',
    'translate',
    'translate_catalog',
    'write_calendars',
]
