"""
Calendar Table Schema
====================

Schema for the calendar.txt GTFS Schedule table.
Table-specific DataFrameModel definition with proper validation.
"""

import pandera.pandas as pa
from pandera.typing import Series
from schemas.common.columns import DATE_PATTERN, ServiceIdMixin


class Calendar(ServiceIdMixin, pa.DataFrameModel):
    """
    Pandera DataFrameModel for calendar data.
    Columns are kept as text; typed decoding happens per row afterwards.
    """

    # Day of week flags
    monday:					Series[str]		= pa.Field(nullable=False, isin=["0", "1"], description="Service available on Mondays (1=yes, 0=no)")
    tuesday:				Series[str]		= pa.Field(nullable=False, isin=["0", "1"], description="Service available on Tuesdays (1=yes, 0=no)")
    wednesday:				Series[str]		= pa.Field(nullable=False, isin=["0", "1"], description="Service available on Wednesdays (1=yes, 0=no)")
    thursday:				Series[str]		= pa.Field(nullable=False, isin=["0", "1"], description="Service available on Thursdays (1=yes, 0=no)")
    friday:					Series[str]		= pa.Field(nullable=False, isin=["0", "1"], description="Service available on Fridays (1=yes, 0=no)")
    saturday:				Series[str]		= pa.Field(nullable=False, isin=["0", "1"], description="Service available on Saturdays (1=yes, 0=no)")
    sunday:					Series[str]		= pa.Field(nullable=False, isin=["0", "1"], description="Service available on Sundays (1=yes, 0=no)")

    # Service period
    start_date:				Series[str]		= pa.Field(nullable=False, str_matches=DATE_PATTERN, description="Start date of the service in YYYYMMDD format")
    end_date:				Series[str]		= pa.Field(nullable=False, str_matches=DATE_PATTERN, description="End date of the service in YYYYMMDD format")

    class Config:
        strict = False  # GTFS producers may append extra columns
        coerce = True   # Attempt to coerce data types
        unique = ["service_id"]  # One weekly pattern per service


# File-specific configuration
Calendar._filename = "calendar.txt"
Calendar._description = "Weekly service patterns with their validity period"

__all__ = [
    'Calendar'
]
