from datetime import date, timedelta

import pytest

from service_calendar.errors import RowParseError
from service_calendar.materialize import build_catalog, daterange, materialize_dates
from service_calendar.records import WeeklyPatternRecord


def count_weekdays(start, end, weekdays):
    """Count matching weekdays with whole weeks plus the remainder."""
    total_days = (end - start).days + 1
    full_weeks, remainder = divmod(total_days, 7)
    extra = sum(1 for i in range(remainder) if (start.weekday() + i) % 7 in weekdays)
    return full_weeks * len(weekdays) + extra


def test_daterange_is_inclusive():
    assert list(daterange(date(2020, 1, 30), date(2020, 2, 1))) == [
        date(2020, 1, 30),
        date(2020, 1, 31),
        date(2020, 2, 1),
    ]


def test_daterange_single_day_and_reversed():
    assert list(daterange(date(2020, 1, 1), date(2020, 1, 1))) == [date(2020, 1, 1)]
    assert list(daterange(date(2020, 1, 2), date(2020, 1, 1))) == []


def test_materialize_monday_wednesday_friday():
    record = WeeklyPatternRecord.from_weekdays("S1", [0, 2, 4], date(2020, 1, 1), date(2020, 1, 10))

    assert materialize_dates(record) == {
        date(2020, 1, 1),
        date(2020, 1, 3),
        date(2020, 1, 6),
        date(2020, 1, 8),
        date(2020, 1, 10),
    }


@pytest.mark.parametrize(
    "weekdays, start, end",
    [
        ({0, 1, 2, 3, 4}, date(2020, 1, 1), date(2020, 12, 31)),
        ({5, 6}, date(2019, 12, 28), date(2020, 3, 1)),
        ({3}, date(2024, 2, 1), date(2024, 2, 29)),
        ({0, 6}, date(2021, 6, 15), date(2021, 6, 20)),
        (set(range(7)), date(2022, 1, 1), date(2022, 1, 1)),
    ],
)
def test_materialized_dates_match_direct_count(weekdays, start, end):
    record = WeeklyPatternRecord.from_weekdays("S", weekdays, start, end)
    dates = materialize_dates(record)

    assert len(dates) == count_weekdays(start, end, weekdays)
    assert all(start <= d <= end and d.weekday() in weekdays for d in dates)


def test_materialize_start_after_end_is_empty():
    record = WeeklyPatternRecord.from_weekdays("S1", range(7), date(2020, 2, 1), date(2020, 1, 1))
    assert materialize_dates(record) == set()


def test_materialize_no_flag_is_empty():
    record = WeeklyPatternRecord.from_weekdays("S1", [], date(2020, 1, 1), date(2020, 12, 31))
    assert materialize_dates(record) == set()


def test_materialize_short_range_without_flagged_weekday():
    # 2020-01-04/05 is a weekend, the pattern only runs on weekdays
    record = WeeklyPatternRecord.from_weekdays("S1", [0, 1, 2, 3, 4], date(2020, 1, 4), date(2020, 1, 5))
    assert materialize_dates(record) == set()


def test_build_catalog_skips_empty_expansions_and_keeps_order():
    records = [
        WeeklyPatternRecord.from_weekdays("B", [0], date(2020, 1, 1), date(2020, 1, 31)),
        WeeklyPatternRecord.from_weekdays("EMPTY", [0], date(2020, 2, 1), date(2020, 1, 1)),
        WeeklyPatternRecord.from_weekdays("A", [6], date(2020, 1, 1), date(2020, 1, 31)),
    ]
    catalog = build_catalog(records)

    assert list(catalog) == ["B", "A"]
    assert catalog["B"].id == "B"
    assert len(catalog["B"].dates) == 4
    assert len(catalog["A"].dates) == 4


def test_build_catalog_extends_given_catalog():
    catalog = {}
    result = build_catalog([WeeklyPatternRecord.from_weekdays("S1", [2], date(2020, 1, 1), date(2020, 1, 1))], catalog)

    assert result is catalog
    assert catalog["S1"].dates == {date(2020, 1, 1)}


def test_build_catalog_rejects_duplicate_service_id():
    start = date(2020, 1, 1)
    records = [
        WeeklyPatternRecord.from_weekdays("S1", [2], start, start + timedelta(days=7)),
        WeeklyPatternRecord.from_weekdays("S1", [3], start, start + timedelta(days=7)),
    ]
    with pytest.raises(RowParseError) as excinfo:
        build_catalog(records)

    assert excinfo.value.row == 2
