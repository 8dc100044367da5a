"""Optional upload of finished transcripts to Cloud Storage."""

import logging
import os
from urllib.parse import unquote, urlparse

from google.cloud import storage

from .exceptions import StorageUploadError

logger = logging.getLogger(__name__)


def derive_transcript_name(audio_url: str, prefix: str) -> str:
    """Build the blob name for the transcript of ``audio_url``.

    ``https://host/calls/2024-01-02_ACME.mp3`` becomes
    ``<prefix>2024-01-02_ACME.txt``.
    """
    base = os.path.basename(unquote(urlparse(audio_url).path))
    base = os.path.splitext(base)[0] or "transcript"
    return f"{prefix}{base}.txt"


def save_transcript(transcript: str, audio_url: str, bucket_name: str, prefix: str) -> str:
    """Upload ``transcript`` to ``bucket_name`` and return the blob path.

    Raises:
        StorageUploadError: If the upload fails.
    """
    blob_path = derive_transcript_name(audio_url, prefix)
    try:
        bucket = storage.Client().bucket(bucket_name)
        bucket.blob(blob_path).upload_from_string(transcript, content_type="text/plain")
    except Exception as exc:
        raise StorageUploadError(f"{bucket_name}/{blob_path}", exc) from exc
    logger.info("Saved transcript to %s/%s", bucket_name, blob_path)
    return blob_path
