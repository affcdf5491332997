"""Environment-driven configuration for the calendar entry points."""

import os
from datetime import datetime
from typing import Dict, Optional

import pytz


def get_globals() -> Dict[str, Optional[str]]:

    # run variables
    function = os.getenv("FUNCTION")
    input_path = os.getenv("INPUT_PATH")
    output_path = os.getenv("OUTPUT_PATH")

    # service day variables
    service_date = os.getenv("SERVICE_DATE")
    timezone = os.getenv("TIMEZONE")
    return {
        "function": function,
        "input_path": input_path,
        "output_path": output_path,
        "service_date": service_date,
        "timezone": timezone,
    }


def resolve_service_date(service_date: Optional[str], timezone: Optional[str]) -> str:
    """Return ``service_date`` or, when unset, today's date (YYYYMMDD) in ``timezone``."""
    if service_date:
        return service_date

    if timezone is None:
        timezone = 'UTC'
    return datetime.now().astimezone(pytz.timezone(timezone)).strftime("%Y%m%d")
