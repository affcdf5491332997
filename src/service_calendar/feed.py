"""Access to the files of a GTFS/NTFS feed.

A feed is either a directory, a local ZIP archive or a ZIP archive cached in
Google Cloud Storage (``gs://bucket/path/feed.zip``).
"""

from __future__ import annotations

import gzip
import io
import zipfile
from pathlib import Path
from time import monotonic
from typing import IO, Dict, Optional, Union

import pandas as pd
from google.api_core.exceptions import GoogleAPIError, NotFound
from google.cloud import storage

from common.logging_utils import logger
from .errors import CalendarIOError, RowParseError

GCS_SCHEME = "gs://"


def read_csv_as_text(handle: IO[bytes], path: str) -> pd.DataFrame:
    """Read a CSV table keeping every cell as text ('' for empty cells)."""
    try:
        return pd.read_csv(handle, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    except pd.errors.EmptyDataError as exc:
        raise RowParseError(path, f"missing header: {exc}") from exc
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise RowParseError(path, exc) from exc


class FeedSource:
    """Base class; subclasses provide ``exists`` and ``_open``."""

    location: str = ""

    def exists(self, filename: str) -> bool:
        raise NotImplementedError

    def _open(self, filename: str) -> IO[bytes]:
        raise NotImplementedError

    def describe(self, filename: str) -> str:
        return f"{self.location}/{filename}"

    def read_table(self, filename: str) -> pd.DataFrame:
        path = self.describe(filename)
        read_start = monotonic()
        try:
            handle = self._open(filename)
        except (OSError, KeyError, zipfile.BadZipFile) as exc:
            raise CalendarIOError(path, exc) from exc

        with handle:
            df = read_csv_as_text(handle, path)

        logger.debug("Read %s: rows=%d read=%.2fs", path, len(df), monotonic() - read_start)
        return df


class DirectoryFeed(FeedSource):

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.location = str(self.path)

    def exists(self, filename: str) -> bool:
        return (self.path / filename).is_file()

    def _open(self, filename: str) -> IO[bytes]:
        return open(self.path / filename, "rb")

    def describe(self, filename: str) -> str:
        return str(self.path / filename)


class ZipFeed(FeedSource):
    """Feed packed in a ZIP archive; files are matched by base name at any depth."""

    def __init__(self, archive: Union[str, Path, bytes], location: Optional[str] = None):
        if isinstance(archive, bytes):
            source = io.BytesIO(archive)
            self.location = location or "<zip>"
        else:
            source = archive
            self.location = location or str(archive)

        try:
            self._zip = zipfile.ZipFile(source)
        except (OSError, zipfile.BadZipFile) as exc:
            raise CalendarIOError(self.location, exc) from exc

        self._members: Dict[str, str] = {}
        for member in self._zip.namelist():
            if member.endswith("/"):
                continue
            # first occurrence wins when several folders hold the same file name
            self._members.setdefault(member.rsplit("/", 1)[-1], member)

    def exists(self, filename: str) -> bool:
        return filename in self._members

    def _open(self, filename: str) -> IO[bytes]:
        return self._zip.open(self._members[filename])

    def describe(self, filename: str) -> str:
        member = self._members.get(filename, filename)
        return f"{self.location}!{member}"

    def close(self) -> None:
        self._zip.close()


def read_blob_bytes(blob: storage.Blob) -> bytes:
    """Download a blob, transparently decompressing gzip payloads."""

    download_start = monotonic()
    raw_payload = blob.download_as_bytes()
    download_seconds = monotonic() - download_start

    payload = raw_payload
    if blob.content_encoding == "gzip" or blob.name.endswith(".gz"):
        try:
            payload = gzip.decompress(raw_payload)
        except OSError:
            payload = raw_payload

    logger.info("Downloaded %s: bytes=%d download=%.2fs", blob.name, len(payload), download_seconds)
    return payload


def split_gcs_uri(uri: str) -> tuple[str, str]:
    """Split ``gs://bucket/object`` into (bucket, object)."""
    bucket, _, object_name = uri[len(GCS_SCHEME):].partition("/")
    if not bucket or not object_name:
        raise CalendarIOError(uri, "expected gs://<bucket>/<object>")
    return bucket, object_name


def open_gcs_feed(uri: str, client: Optional[storage.Client] = None) -> ZipFeed:
    bucket, object_name = split_gcs_uri(uri)
    client = client or storage.Client()
    blob = client.bucket(bucket).blob(object_name)
    try:
        payload = read_blob_bytes(blob)
    except NotFound as exc:
        raise CalendarIOError(uri, "object not found") from exc
    except GoogleAPIError as exc:
        raise CalendarIOError(uri, exc) from exc
    return ZipFeed(payload, location=uri)


def open_feed(location: Union[str, Path], client: Optional[storage.Client] = None) -> FeedSource:
    """Open a feed from a directory, a ZIP file or a ``gs://`` URI."""
    text = str(location)
    if text.startswith(GCS_SCHEME):
        return open_gcs_feed(text, client=client)

    path = Path(location)
    if path.is_dir():
        return DirectoryFeed(path)
    if path.is_file():
        return ZipFeed(path)
    raise CalendarIOError(text, "no such file or directory")
