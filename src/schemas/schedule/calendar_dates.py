"""
Calendar Dates Table Schema
==========================

Schema for the calendar_dates.txt GTFS table.
Table-specific DataFrameModel definition with proper validation.
"""

import pandera.pandas as pa
from pandera.typing import Series
from schemas.common.columns import DATE_PATTERN, ServiceIdMixin


class CalendarDates(ServiceIdMixin, pa.DataFrameModel):
    """
    Pandera DataFrameModel for calendar dates data.
    Rows are applied in file order, so no uniqueness is required on (service_id, date).
    """

    # Service exception details
    date:				Series[str]		= pa.Field(nullable=False, str_matches=DATE_PATTERN, description="Date of the service exception in YYYYMMDD format")
    exception_type:			Series[str]		= pa.Field(nullable=False, isin=["1", "2"], description="Type of exception (1=added, 2=removed)")

    class Config:
        strict = False  # GTFS producers may append extra columns
        coerce = True   # Attempt to coerce data types


# File-specific configuration
CalendarDates._filename = "calendar_dates.txt"
CalendarDates._description = "Per-date service additions and removals"

__all__ = [
    'CalendarDates'
]
