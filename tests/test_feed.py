import gzip
import io
import zipfile
from datetime import date

import pytest
from google.api_core.exceptions import NotFound

from conftest import CALENDAR_DATES_HEADER, CALENDAR_HEADER
from service_calendar.errors import CalendarIOError
from service_calendar.feed import DirectoryFeed, ZipFeed, open_feed, split_gcs_uri
from service_calendar.orchestrate import read_calendars


def zip_bytes(files):
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return buf.getvalue()


class FakeBlob:

    def __init__(self, name, payload=None, content_encoding=None):
        self.name = name
        self.payload = payload
        self.content_encoding = content_encoding

    def download_as_bytes(self):
        if self.payload is None:
            raise NotFound(f"{self.name} not found")
        return self.payload


class FakeBucket:

    def __init__(self, blobs):
        self.blobs = blobs

    def blob(self, name):
        return self.blobs.get(name, FakeBlob(name))


class FakeClient:

    def __init__(self, blobs):
        self.blobs = blobs
        self.requested = []

    def bucket(self, name):
        self.requested.append(name)
        return FakeBucket(self.blobs)


FEED_ZIP = zip_bytes(
    {
        "calendar.txt": CALENDAR_HEADER + "S1,1,0,1,0,1,0,0,20200101,20200110\n",
        "calendar_dates.txt": CALENDAR_DATES_HEADER + "S1,20200108,2\n",
    }
)


def test_open_feed_directory(feed_dir):
    feed = open_feed(feed_dir)

    assert isinstance(feed, DirectoryFeed)
    assert not feed.exists("calendar.txt")
    assert feed.describe("calendar.txt") == str(feed_dir / "calendar.txt")


def test_zip_feed_matches_base_names(zip_feed):
    feed = open_feed(zip_feed(calendar=[], folder="nested/"))

    assert isinstance(feed, ZipFeed)
    assert feed.exists("calendar.txt")
    assert not feed.exists("calendar_dates.txt")
    assert feed.describe("calendar.txt").endswith("!nested/calendar.txt")
    assert list(feed.read_table("calendar.txt").columns)[0] == "service_id"


def test_read_table_keeps_text(feed_dir):
    (feed_dir / "calendar_dates.txt").write_text(CALENDAR_DATES_HEADER + "007,20200101,1\n", encoding="utf-8")
    df = DirectoryFeed(feed_dir).read_table("calendar_dates.txt")

    assert df.loc[0, "service_id"] == "007"
    assert df.loc[0, "date"] == "20200101"


def test_read_table_strips_byte_order_mark(feed_dir):
    (feed_dir / "calendar_dates.txt").write_bytes(("\ufeff" + CALENDAR_DATES_HEADER + "S1,20200101,1\n").encode("utf-8"))
    df = DirectoryFeed(feed_dir).read_table("calendar_dates.txt")

    assert list(df.columns) == ["service_id", "date", "exception_type"]


def test_split_gcs_uri():
    assert split_gcs_uri("gs://bucket/feeds/year=2025/feed.zip") == ("bucket", "feeds/year=2025/feed.zip")
    with pytest.raises(CalendarIOError):
        split_gcs_uri("gs://bucket")


def test_gcs_feed():
    client = FakeClient({"feeds/latest.zip": FakeBlob("feeds/latest.zip", FEED_ZIP)})
    catalog = read_calendars("gs://transit-bucket/feeds/latest.zip", client=client)

    assert client.requested == ["transit-bucket"]
    assert catalog["S1"].dates == {date(2020, 1, d) for d in (1, 3, 6, 10)}


def test_gcs_feed_gzip_encoded():
    blob = FakeBlob("feeds/latest.zip", gzip.compress(FEED_ZIP), content_encoding="gzip")
    catalog = read_calendars("gs://transit-bucket/feeds/latest.zip", client=FakeClient({"feeds/latest.zip": blob}))

    assert list(catalog) == ["S1"]


def test_gcs_feed_not_found():
    with pytest.raises(CalendarIOError) as excinfo:
        read_calendars("gs://transit-bucket/feeds/missing.zip", client=FakeClient({}))

    assert excinfo.value.path == "gs://transit-bucket/feeds/missing.zip"
