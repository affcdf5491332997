"""Queries over a finished service catalog."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from common.logging_utils import logger
from .compressor import ValidityPeriod
from .records import Catalog


def get_active_services(catalog: Catalog, service_date: date) -> List[str]:
    """Service ids operating on ``service_date``, in catalog order."""
    active_services = [service_id for service_id, calendar in catalog.items() if service_date in calendar.dates]
    logger.info("Found %d active services on %s", len(active_services), service_date)
    return active_services


def get_validity_period(catalog: Catalog) -> Optional[ValidityPeriod]:
    """First and last operating date over all services, or None without any date."""
    all_dates = [day for calendar in catalog.values() for day in calendar.dates]
    if not all_dates:
        return None
    return ValidityPeriod(min(all_dates), max(all_dates))
