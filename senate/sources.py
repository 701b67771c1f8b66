"""Open candidate and preference files from disk, zip archives or URLs."""

import io
import logging
import zipfile
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO
from urllib.parse import urlparse

import httpx

from senate import config

logger = logging.getLogger(__name__)


class SourceError(Exception):
    """A candidate or preferences source could not be opened or fetched."""
    pass


@contextmanager
def open_source(source: str) -> Iterator[Iterator[str]]:
    """Open a source as an iterator of text lines.

    Sources may be a local CSV file, a local zip archive holding a single
    CSV file (the AEC publishes preferences this way), or an http(s) URL to
    either. Plain CSV over HTTP is streamed rather than downloaded whole.

    Raises:
        SourceError: For unsupported URL schemes, bad archives or HTTP errors
        OSError: If a local file can't be opened
    """
    parsed = urlparse(source)
    if parsed.scheme in ("http", "https"):
        with _open_url(source) as lines:
            yield lines
    elif len(parsed.scheme) > 1:
        # Single letters are Windows drive letters, not schemes
        raise SourceError(f"Invalid URL scheme: {parsed.scheme}")
    elif source.lower().endswith(".zip"):
        with _open_zip(source, source) as lines:
            yield lines
    else:
        with open(source, encoding="utf-8-sig", errors="surrogateescape", newline="") as f:
            yield f


@contextmanager
def _open_url(url: str) -> Iterator[Iterator[str]]:
    logger.info("Fetching %s", url)
    try:
        with httpx.Client(follow_redirects=True, timeout=config.HTTP_TIMEOUT) as client:
            if urlparse(url).path.lower().endswith(".zip"):
                # Zip archives need random access, so this one is held in memory
                response = client.get(url)
                response.raise_for_status()
                with _open_zip(io.BytesIO(response.content), url) as lines:
                    yield lines
            else:
                with client.stream("GET", url) as response:
                    response.raise_for_status()
                    yield response.iter_lines()
    except httpx.HTTPStatusError as e:
        raise SourceError(f"HTTP error fetching {url}: {e.response.status_code}") from e
    except httpx.RequestError as e:
        raise SourceError(f"Error fetching {url}: {e}") from e


@contextmanager
def _open_zip(file: str | IO[bytes], name: str) -> Iterator[Iterator[str]]:
    try:
        archive = zipfile.ZipFile(file)
    except zipfile.BadZipFile as e:
        raise SourceError(f"{name} is not a valid zip archive") from e

    with archive:
        members = [m for m in archive.namelist() if m.lower().endswith(".csv")]
        if len(members) != 1:
            raise SourceError(
                f"Expected exactly one CSV file in {name}, found {len(members)}"
            )
        logger.info("Reading %s from %s", members[0], name)
        with archive.open(members[0]) as raw:
            yield io.TextIOWrapper(raw, encoding="utf-8-sig", errors="surrogateescape", newline="")
