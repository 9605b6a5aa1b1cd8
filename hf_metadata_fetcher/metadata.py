"""Derive file metadata from hub HEAD responses."""

import httpx

from .models import FileMetadata


def normalize_etag(etag: str | None) -> str | None:
    """Strip the weak validator prefix and quotes: W/"abc" -> abc."""
    if etag is None:
        return None
    if etag.startswith("W/"):
        etag = etag[2:]
    return etag.strip('"')


def parse_size(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def file_metadata_from_response(response: httpx.Response, url: str) -> FileMetadata:
    """Build FileMetadata from the final response of a HEAD probe.

    A 302 is the hub pointing at the CDN copy of an LFS file, so its Location
    header is the download location. Any other status uses the URL the
    response was actually served from.
    """
    headers = response.headers
    if response.status_code == 302:
        location = headers.get("Location")
    else:
        location = str(response.url)

    return FileMetadata(
        commit_hash=headers.get("X-Repo-Commit"),
        etag=normalize_etag(headers.get("X-Linked-Etag", headers.get("ETag"))),
        location=location or url,
        size=parse_size(headers.get("X-Linked-Size", headers.get("Content-Length"))),
    )
