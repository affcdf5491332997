"""
Schedule GTFS Table Schemas
===========================

These schemas define the structure of the GTFS Schedule calendar tables as they are read and written.
"""

from .calendar import Calendar
from .calendar_dates import CalendarDates

__all__ = [
    # DataFrameModel versions (pandera models)
    'Calendar',
    'CalendarDates',
]
