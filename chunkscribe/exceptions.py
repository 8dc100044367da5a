"""Custom exceptions for the transcription service."""

from typing import Optional


class ChunkscribeError(Exception):
    """Base class for errors raised by this package."""


class InputError(ChunkscribeError):
    """Raised when the audio source reference is missing or malformed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class FetchError(ChunkscribeError):
    """Raised when the source audio cannot be retrieved."""

    def __init__(
        self,
        url: str,
        status: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        self.url = url
        self.status = status
        self.cause = cause
        detail = status if status is not None else (cause or "unknown error")
        super().__init__(f"Failed to fetch audio: {detail}")


class SegmentTranscriptionError(ChunkscribeError):
    """Raised when the inference service fails for a single segment."""

    def __init__(self, ordinal: int, cause: Optional[Exception] = None):
        self.ordinal = ordinal
        self.cause = cause
        super().__init__(f"Failed to transcribe segment {ordinal}")


class ConfigurationError(ChunkscribeError):
    """Raised when a required setting is missing."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"Missing required setting '{setting}'")


class StorageUploadError(ChunkscribeError):
    """Raised when uploading a transcript to storage fails."""

    def __init__(self, object_name: str, cause: Optional[Exception] = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to upload '{object_name}' to storage")


class InferenceError(ChunkscribeError):
    """Raised by an inference backend when a single call fails."""
