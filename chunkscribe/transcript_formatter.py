"""
Transcript assembly.

Each segment contributes exactly one line to the final transcript: its
recognised text, or :data:`PLACEHOLDER` when the segment could not be
transcribed.  Every line is terminated by :data:`SEPARATOR`, so a
transcript built from ``n`` segments always ends with a separator and an
empty recording yields an empty string.
"""

from typing import TYPE_CHECKING, Iterable, List

if TYPE_CHECKING:
    from .stt_service import TranscriptionResult

SEPARATOR = "\n"
PLACEHOLDER = "[Error transcribing chunk]"


def assemble_transcript(results: Iterable["TranscriptionResult"]) -> str:
    """Join per-segment results in ordinal order.

    Args:
        results: Per-segment outcomes as returned by
            :func:`chunkscribe.stt_service.transcribe_segment`.

    Returns:
        The full transcript text.
    """
    ordered: List["TranscriptionResult"] = sorted(results, key=lambda result: result.ordinal)
    return "".join(result.text + SEPARATOR for result in ordered)
