"""
Audio retrieval and segmentation utilities.

The service does not decode audio.  It downloads the raw bytes of the
source file over HTTP and slices them into fixed-size byte ranges which are
submitted to the speech recogniser one at a time.  Splitting is purely by
byte offset, so a segment boundary may fall in the middle of an audio frame.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse

import requests

from .exceptions import FetchError, InputError

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = {"http", "https"}


@dataclass(frozen=True)
class Segment:
    """A contiguous byte range of the source audio."""

    ordinal: int
    data: bytes

    def __len__(self) -> int:
        return len(self.data)


def validate_audio_url(url: Optional[str]) -> str:
    """Check that ``url`` is an absolute HTTP(S) URL and return it stripped.

    Raises:
        InputError: If the URL is missing or malformed.
    """
    if url is None or not url.strip():
        raise InputError("Missing 'url' query parameter")
    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme.lower() not in SUPPORTED_SCHEMES or not parsed.netloc:
        raise InputError("Invalid 'url' query parameter")
    return url


def fetch_audio(url: str, *, timeout: Optional[float] = None) -> bytes:
    """Download the audio file at ``url``, following redirects.

    Args:
        url: Location of the audio file.
        timeout: Optional timeout in seconds for the request.

    Returns:
        The raw bytes of the response body.

    Raises:
        FetchError: If the request fails or returns a non-success status.
    """
    logger.info("Fetching audio from %s", url)
    try:
        response = requests.get(url, allow_redirects=True, timeout=timeout)
    except requests.RequestException as exc:
        raise FetchError(url, cause=exc) from exc
    if not response.ok:
        raise FetchError(url, status=response.status_code)
    content = response.content
    logger.info("Fetched %d bytes from %s", len(content), url)
    return content


def split_into_segments(data: bytes, chunk_size: int) -> List[Segment]:
    """Split ``data`` into consecutive segments of ``chunk_size`` bytes.

    The last segment may be shorter than ``chunk_size``.  An empty buffer
    produces no segments.

    Raises:
        ValueError: If ``chunk_size`` is not positive.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return [
        Segment(ordinal=ordinal, data=bytes(data[offset:offset + chunk_size]))
        for ordinal, offset in enumerate(range(0, len(data), chunk_size))
    ]
