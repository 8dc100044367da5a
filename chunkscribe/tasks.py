"""
Orchestration layer for the transcription pipeline.

:class:`TranscriptionPipeline` drives one request through a fixed sequence
of states:

* **Fetching** – download the source audio.  Any failure here moves the
  pipeline to **Failed** and raises :class:`~chunkscribe.exceptions.FetchError`.
* **Segmenting** – split the audio into fixed-size byte segments.
* **Transcribing** – submit each segment in order, one at a time.  A failed
  segment is recorded as a placeholder and the loop moves on.
* **Assembling** – join the per-segment results into the transcript.
* **Done** – the transcript is returned to the caller.
"""

import logging
from enum import Enum
from typing import List, Optional

from . import audio_processor, stt_service, transcript_formatter
from .config import TaskOptions
from .exceptions import FetchError

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    SEGMENTING = "segmenting"
    TRANSCRIBING = "transcribing"
    ASSEMBLING = "assembling"
    DONE = "done"
    FAILED = "failed"


class TranscriptionPipeline:
    """Fetch, segment, transcribe and assemble a single audio file.

    A pipeline instance handles one request; create a new one per request.
    """

    def __init__(
        self,
        service: stt_service.TranscriptionService,
        *,
        chunk_size: int,
        task_options: Optional[TaskOptions] = None,
        fetch_timeout: Optional[float] = None,
    ):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.service = service
        self.chunk_size = chunk_size
        self.task_options = task_options or TaskOptions()
        self.fetch_timeout = fetch_timeout
        self.state = PipelineState.IDLE
        self.results: List[stt_service.TranscriptionResult] = []

    def _transition(self, state: PipelineState) -> None:
        logger.info("Pipeline %s -> %s", self.state.value, state.value)
        self.state = state

    def run(self, audio_url: str) -> str:
        """Run the full pipeline for ``audio_url`` and return the transcript.

        Raises:
            RuntimeError: If the pipeline has already been run.
            FetchError: If the audio cannot be downloaded.
        """
        if self.state is not PipelineState.IDLE:
            raise RuntimeError(f"Pipeline already used (state: {self.state.value})")

        self._transition(PipelineState.FETCHING)
        try:
            audio = audio_processor.fetch_audio(audio_url, timeout=self.fetch_timeout)
        except FetchError:
            self._transition(PipelineState.FAILED)
            raise

        self._transition(PipelineState.SEGMENTING)
        segments = audio_processor.split_into_segments(audio, self.chunk_size)
        del audio
        logger.info("Split audio into %d segment(s) of up to %d bytes",
                    len(segments), self.chunk_size)

        self._transition(PipelineState.TRANSCRIBING)
        for ordinal in range(len(segments)):
            result = stt_service.transcribe_segment(
                self.service, segments[ordinal], self.task_options
            )
            self.results.append(result)

        failed = sum(1 for result in self.results if result.failed)
        if failed:
            logger.warning("%d of %d segment(s) failed to transcribe",
                           failed, len(self.results))

        self._transition(PipelineState.ASSEMBLING)
        transcript = transcript_formatter.assemble_transcript(self.results)

        self._transition(PipelineState.DONE)
        return transcript


def transcribe_url(
    audio_url: str,
    service: stt_service.TranscriptionService,
    *,
    chunk_size: int,
    task_options: Optional[TaskOptions] = None,
    fetch_timeout: Optional[float] = None,
) -> str:
    """Convenience wrapper that runs a fresh :class:`TranscriptionPipeline`."""
    pipeline = TranscriptionPipeline(
        service,
        chunk_size=chunk_size,
        task_options=task_options,
        fetch_timeout=fetch_timeout,
    )
    return pipeline.run(audio_url)
