#  Centralized Entry Point for calendar conversion
"""
Unified entry point for the service calendar functions:
- convert: read calendar.txt / calendar_dates.txt and write them back compressed
- active-services: list the services operating on a given date

Usage:
    python main.py convert --input path/to/feed.zip --output path/to/out
    python main.py active-services --input gs://bucket/feed.zip --date 20250914
"""

import argparse
import sys
from typing import Any, Dict, Optional, Tuple

from common.config import get_globals, resolve_service_date
from common.logging_utils import logger
from common.transform_utils import Timer, build_response
from service_calendar.errors import CalendarError
from service_calendar.orchestrate import read_calendars
from service_calendar.records import decode_date
from service_calendar.serialize import write_calendars
from service_calendar.services import get_active_services, get_validity_period


def run_convert(config: Dict[str, Optional[str]]) -> Tuple[Dict[str, object], int]:
    """Read the input feed's calendars and write them to the output directory."""
    if not config.get("input_path") or not config.get("output_path"):
        return build_response("convert", "error", http_code=400, error="input_path and output_path are required")

    try:
        with Timer() as timer:
            catalog = read_calendars(config["input_path"])
            counts = write_calendars(config["output_path"], catalog)
    except CalendarError as e:
        logger.error(f"Calendar conversion failed: {e}")
        return build_response("convert", "error", http_code=500, error=str(e))

    validity_period = get_validity_period(catalog)
    return build_response(
        "convert",
        "ok",
        input=config["input_path"],
        output=config["output_path"],
        validity_start=validity_period.start_date.isoformat() if validity_period else None,
        validity_end=validity_period.end_date.isoformat() if validity_period else None,
        duration=timer.duration,
        **counts,
    )


def run_active_services(config: Dict[str, Optional[str]]) -> Tuple[Dict[str, object], int]:
    """List the services of the input feed operating on the configured service date."""
    if not config.get("input_path"):
        return build_response("active-services", "error", http_code=400, error="input_path is required")

    service_date_text = resolve_service_date(config.get("service_date"), config.get("timezone"))
    try:
        service_date = decode_date(service_date_text)
    except ValueError as e:
        return build_response("active-services", "error", http_code=400, error=str(e))

    logger.info(f"Using service date: {service_date_text} in timezone {config.get('timezone') or 'UTC'}")

    try:
        catalog = read_calendars(config["input_path"])
    except CalendarError as e:
        logger.error(f"Reading calendars failed: {e}")
        return build_response("active-services", "error", http_code=500, error=str(e))

    active_services = get_active_services(catalog, service_date)
    return build_response(
        "active-services",
        "ok",
        service_date=service_date_text,
        services=active_services,
        count=len(active_services),
    )


HANDLERS = {
    "convert": run_convert,
    "active-services": run_active_services,
}


def main(request: Optional[Dict[str, Any]] = None) -> Tuple[Dict[str, object], int]:
    """
    Centralized dispatcher.

    Determines the function from the FUNCTION environment variable (or the
    request's "function" key) and routes accordingly. Request keys override
    the environment.
    """
    config = get_globals()
    if request:
        config.update({key: value for key, value in request.items() if value is not None})

    function = config.get("function") or "convert"
    handler = HANDLERS.get(function)
    if handler is None:
        logger.error(f"Unknown function: {function}")
        return build_response(function, "error", http_code=400, error=f"unknown function {function}")
    return handler(config)


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Convert GTFS service calendars")
    sub = ap.add_subparsers(dest="function", required=True)

    convert = sub.add_parser("convert", help="read and rewrite calendar.txt / calendar_dates.txt")
    convert.add_argument("--input", dest="input_path", required=True, help="feed directory, ZIP file or gs:// URI")
    convert.add_argument("--output", dest="output_path", required=True, help="output directory")

    active = sub.add_parser("active-services", help="list services operating on a date")
    active.add_argument("--input", dest="input_path", required=True, help="feed directory, ZIP file or gs:// URI")
    active.add_argument("--date", dest="service_date", help="service date as YYYYMMDD (default: today)")
    active.add_argument("--timezone", dest="timezone", help="timezone used for today's date (default: UTC)")
    return ap.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    body, http_code = main(vars(args))
    logger.info(f"Result: {body}")
    sys.exit(0 if http_code < 400 else 1)
