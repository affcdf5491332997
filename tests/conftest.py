"""Shared fixtures for the calendar tests."""

import sys
import zipfile
from datetime import date
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from service_calendar.records import ServiceCalendar  # noqa: E402

CALENDAR_HEADER = "service_id,monday,tuesday,wednesday,thursday,friday,saturday,sunday,start_date,end_date\n"
CALENDAR_DATES_HEADER = "service_id,date,exception_type\n"


def write_file(path, content):
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)


@pytest.fixture
def feed_dir(tmp_path):
    """Empty feed directory; tests drop calendar files into it."""
    path = tmp_path / "feed"
    path.mkdir()
    return path


@pytest.fixture
def make_feed(feed_dir):
    """Write calendar.txt / calendar_dates.txt rows (without header) into ``feed_dir``."""

    def _make(calendar=None, calendar_dates=None):
        if calendar is not None:
            write_file(feed_dir / "calendar.txt", CALENDAR_HEADER + "".join(f"{row}\n" for row in calendar))
        if calendar_dates is not None:
            write_file(feed_dir / "calendar_dates.txt", CALENDAR_DATES_HEADER + "".join(f"{row}\n" for row in calendar_dates))
        return feed_dir

    return _make


@pytest.fixture
def zip_feed(tmp_path):
    """Pack calendar files into a ZIP archive, optionally inside a folder."""

    def _make(calendar=None, calendar_dates=None, folder=""):
        archive = tmp_path / "feed.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            if calendar is not None:
                zf.writestr(f"{folder}calendar.txt", CALENDAR_HEADER + "".join(f"{row}\n" for row in calendar))
            if calendar_dates is not None:
                zf.writestr(f"{folder}calendar_dates.txt", CALENDAR_DATES_HEADER + "".join(f"{row}\n" for row in calendar_dates))
        return archive

    return _make


@pytest.fixture
def s1_catalog():
    """S1 runs Mon/Wed/Fri from 2020-01-01 to 2020-01-10."""
    dates = {date(2020, 1, d) for d in (1, 3, 6, 8, 10)}
    return {"S1": ServiceCalendar(id="S1", dates=dates)}
