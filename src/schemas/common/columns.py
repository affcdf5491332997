"""
Common Columns Mixins
=====================

Defines shared Pandera columns to be mixed into DataFrameModel schemas.
"""

import pandera.pandas as pa
from pandera.typing import Series


# GTFS dates are written as fixed eight digit YYYYMMDD text
DATE_PATTERN = r"^\d{8}$"


class ServiceIdMixin(pa.DataFrameModel):
    """
    Mixin that adds the service key shared by calendar.txt and calendar_dates.txt.

    - service_id: identifier of the service, never empty
    """

    service_id: Series[str] = pa.Field(nullable=False, str_length={"min_value": 1}, description="Service identifier")

    class Config:
        strict = False
        coerce = True


__all__ = [
    "DATE_PATTERN",
    "ServiceIdMixin",
]
