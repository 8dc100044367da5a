"""
Workers AI speech-to-text wrapper.

This module defines the interface the pipeline uses to reach a speech
recogniser, a concrete implementation that calls the Workers AI REST API,
and :func:`transcribe_segment`, which submits one segment and always
returns a :class:`TranscriptionResult` instead of raising.

Usage::

    from chunkscribe.config import TaskOptions
    from chunkscribe.stt_service import WorkersAIService, transcribe_segment

    service = WorkersAIService(account_id, api_token)
    result = transcribe_segment(service, segment, TaskOptions(task="translate"))
    print(result.text)
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

import requests

from .audio_processor import Segment
from .config import DEFAULT_API_BASE, DEFAULT_MODEL, TaskOptions
from .encoding import encode_audio
from .exceptions import InferenceError, SegmentTranscriptionError
from .transcript_formatter import PLACEHOLDER

logger = logging.getLogger(__name__)


class TranscriptionService(ABC):
    """Abstract speech recogniser that accepts base64 encoded audio."""

    @abstractmethod
    def run(self, encoded_audio: str, options: TaskOptions) -> Any:
        """Run the model once on ``encoded_audio``.

        Returns:
            The model's result structure.  It is expected to contain a
            ``text`` field but nothing else is guaranteed.

        Raises:
            InferenceError: If the call fails.
        """


class WorkersAIService(TranscriptionService):
    """Calls a Whisper model through the Workers AI REST API."""

    def __init__(
        self,
        account_id: str,
        api_token: str,
        *,
        model: str = DEFAULT_MODEL,
        api_base: str = DEFAULT_API_BASE,
        timeout: Optional[float] = None,
    ):
        self.endpoint = f"{api_base}/accounts/{account_id}/ai/run/{model}"
        self._api_token = api_token
        self.timeout = timeout

    def run(self, encoded_audio: str, options: TaskOptions) -> Any:
        payload = {"audio": encoded_audio, **options.to_payload()}
        try:
            response = requests.post(
                self.endpoint,
                headers={
                    "Authorization": f"Bearer {self._api_token}",
                    "Content-Type": "application/json",
                },
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise InferenceError(f"Inference endpoint unreachable: {exc}") from exc

        if not response.ok:
            raise InferenceError(
                f"Inference failed with status {response.status_code}: {response.text}"
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise InferenceError("Inference returned a non-JSON body") from exc
        if not isinstance(body, dict) or not body.get("success", False):
            errors = body.get("errors") if isinstance(body, dict) else body
            raise InferenceError(f"Inference reported failure: {errors}")
        if "result" not in body:
            raise InferenceError("Inference response has no 'result' field")
        return body["result"]


@dataclass(frozen=True)
class TranscriptionResult:
    """Outcome for one segment: recognised text or the failure placeholder."""

    ordinal: int
    text: str
    error: Optional[SegmentTranscriptionError] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def extract_text(result: Any) -> str:
    """Pull the recognised text out of a model result.

    Falls back to a JSON dump of the whole structure when there is no string
    ``text`` field.

    Raises:
        InferenceError: If the result is empty or cannot be serialised.
    """
    if result is None:
        raise InferenceError("Inference returned no result")
    if isinstance(result, str):
        return result
    if isinstance(result, dict) and isinstance(result.get("text"), str):
        return result["text"]
    try:
        return json.dumps(result)
    except (TypeError, ValueError) as exc:
        raise InferenceError("Inference result is not serialisable") from exc


def transcribe_segment(
    service: TranscriptionService, segment: Segment, options: TaskOptions
) -> TranscriptionResult:
    """Submit a single segment and capture the outcome.

    The service is called exactly once.  Any error it raises is recorded on
    the returned result together with the placeholder text.
    """
    try:
        text = extract_text(service.run(encode_audio(segment.data), options))
    except Exception as exc:
        error = SegmentTranscriptionError(segment.ordinal, cause=exc)
        logger.warning("%s (%d bytes): %s", error, len(segment), exc)
        return TranscriptionResult(segment.ordinal, PLACEHOLDER, error=error)
    return TranscriptionResult(segment.ordinal, text)
