"""
Runtime configuration for the transcription service.

All settings come from environment variables and are read each time
:func:`load_settings` is called, so a deployment can be reconfigured by
changing its environment without touching code.

* ``CHUNK_SIZE_BYTES`` – Segment size in bytes (default: 1 MiB).
* ``STT_TASK`` – ``transcribe`` or ``translate``.
* ``STT_LANGUAGE``, ``STT_INITIAL_PROMPT``, ``STT_PREFIX`` – Optional hints
  forwarded to the model.
* ``STT_VAD_FILTER`` – ``true`` or ``false``; omitted when unset.
* ``CF_ACCOUNT_ID`` / ``CF_API_TOKEN`` – Credentials for Workers AI.
* ``STT_MODEL`` – Model identifier (default: Whisper large v3 turbo).
* ``FETCH_TIMEOUT`` / ``INFERENCE_TIMEOUT`` – Optional per-call timeouts in
  seconds.  No timeout is applied when unset.
* ``OUTPUT_BUCKET`` / ``OUTPUT_PREFIX`` – Optional Cloud Storage location
  for finished transcripts.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

DEFAULT_CHUNK_SIZE = 1024 * 1024
DEFAULT_MODEL = "@cf/openai/whisper-large-v3-turbo"
DEFAULT_API_BASE = "https://api.cloudflare.com/client/v4"
DEFAULT_OUTPUT_PREFIX = "transcripts/"

TASK_MODES = ("transcribe", "translate")


@dataclass(frozen=True)
class TaskOptions:
    """Task mode and optional hints sent with every segment."""

    task: str = "transcribe"
    language: Optional[str] = None
    vad_filter: Optional[bool] = None
    initial_prompt: Optional[str] = None
    prefix: Optional[str] = None

    def __post_init__(self) -> None:
        if self.task not in TASK_MODES:
            raise ValueError(f"Unsupported task mode: {self.task}")

    def to_payload(self) -> Dict[str, Any]:
        """Render the options as request fields, skipping unset hints."""
        payload: Dict[str, Any] = {"task": self.task}
        for key in ("language", "vad_filter", "initial_prompt", "prefix"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        return payload


@dataclass(frozen=True)
class Settings:
    chunk_size: int = DEFAULT_CHUNK_SIZE
    task_options: TaskOptions = field(default_factory=TaskOptions)
    account_id: Optional[str] = None
    api_token: Optional[str] = None
    model: str = DEFAULT_MODEL
    api_base: str = DEFAULT_API_BASE
    fetch_timeout: Optional[float] = None
    inference_timeout: Optional[float] = None
    output_bucket: Optional[str] = None
    output_prefix: str = DEFAULT_OUTPUT_PREFIX


def _optional(name: str) -> Optional[str]:
    value = os.environ.get(name, "").strip()
    return value or None


def _optional_bool(name: str) -> Optional[bool]:
    value = _optional(name)
    if value is None:
        return None
    if value.lower() in ("true", "1", "yes"):
        return True
    if value.lower() in ("false", "0", "no"):
        return False
    raise ValueError(f"{name} must be true or false, got {value!r}")


def _optional_float(name: str) -> Optional[float]:
    value = _optional(name)
    return float(value) if value is not None else None


def _chunk_size() -> int:
    raw = os.environ.get("CHUNK_SIZE_BYTES", str(DEFAULT_CHUNK_SIZE))
    chunk_size = int(raw)
    if chunk_size <= 0:
        raise ValueError(f"CHUNK_SIZE_BYTES must be positive, got {chunk_size}")
    return chunk_size


def load_settings() -> Settings:
    """Build :class:`Settings` from the current environment.

    Raises:
        ValueError: If a setting is present but cannot be parsed.
    """
    task_options = TaskOptions(
        task=os.environ.get("STT_TASK", "transcribe").strip().lower(),
        language=_optional("STT_LANGUAGE"),
        vad_filter=_optional_bool("STT_VAD_FILTER"),
        initial_prompt=_optional("STT_INITIAL_PROMPT"),
        prefix=_optional("STT_PREFIX"),
    )
    return Settings(
        chunk_size=_chunk_size(),
        task_options=task_options,
        account_id=_optional("CF_ACCOUNT_ID"),
        api_token=_optional("CF_API_TOKEN"),
        model=os.environ.get("STT_MODEL", DEFAULT_MODEL),
        api_base=os.environ.get("AI_API_BASE", DEFAULT_API_BASE).rstrip("/"),
        fetch_timeout=_optional_float("FETCH_TIMEOUT"),
        inference_timeout=_optional_float("INFERENCE_TIMEOUT"),
        output_bucket=_optional("OUTPUT_BUCKET"),
        output_prefix=os.environ.get("OUTPUT_PREFIX", DEFAULT_OUTPUT_PREFIX),
    )
