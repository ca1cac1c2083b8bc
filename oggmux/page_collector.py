"""
Collects Ogg pages streamed by an external Opus encoder worker

The worker hands over one data page at a time together with its sample
position. When encoding is done the collected pages are re-stamped into a
complete Ogg/Opus file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from config.constants import DEFAULT_SAMPLE_RATE, DEFAULT_CHANNELS, OPUS_GRANULE_RATE
from .errors import InvalidSessionState
from .ogg_opus_restamper import OggOpusRestamper
from .ogg_opus_writer import OggOpusBlob

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageProgress:
    sample_position: int
    estimated_duration: float
    page_count: int


@dataclass(frozen=True)
class RecordingResult:
    blob: OggOpusBlob
    duration: float
    page_count: int


class OpusPageCollector:
    """
    Accumulates foreign pages and the number of PCM samples fed to the encoder.

    Not thread-safe: pages must be delivered one at a time, and finish()
    must not run concurrently with add_page().
    """

    def __init__(
        self,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
        channels: int = DEFAULT_CHANNELS,
        *,
        encoder_sample_rate: int = OPUS_GRANULE_RATE,
        on_progress: Optional[Callable[[PageProgress], None]] = None,
        restamper: Optional[OggOpusRestamper] = None,
    ):
        """
        Args:
            sample_rate: Original input sample rate in Hz
            channels: Number of channels
            encoder_sample_rate: Rate the encoder's sample positions count in
            on_progress: Called after every page with the current progress
            restamper: Re-stamper to use (one is built from the stream
                parameters if omitted)
        """
        self.sample_rate = sample_rate
        self.channels = channels
        self.encoder_sample_rate = encoder_sample_rate
        self.on_progress = on_progress
        self.restamper = restamper or OggOpusRestamper(sample_rate, channels)

        self.pages: list[bytes] = []
        self.total_samples = 0
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    def _check_open(self, operation: str) -> None:
        if self._finished:
            raise InvalidSessionState(f"Cannot {operation}: collector already finished")

    def add_samples(self, count: int) -> None:
        """Record PCM samples (per channel) handed to the encoder"""
        self._check_open('add samples')
        if count < 0:
            raise ValueError(f"Sample count must be non-negative, got {count}")
        self.total_samples += count

    def add_page(self, page: bytes, sample_position: int = 0) -> None:
        """Store one page from the encoder and report progress"""
        self._check_open('add page')
        self.pages.append(bytes(page))

        if self.on_progress is not None:
            self.on_progress(PageProgress(
                sample_position=sample_position,
                estimated_duration=sample_position / self.encoder_sample_rate,
                page_count=len(self.pages),
            ))

    def finish(self) -> RecordingResult:
        """
        Re-stamp the collected pages and build the final stream

        Raises:
            InvalidSessionState: if called more than once
            MalformedPage: if a collected page is unreadable
        """
        self._check_open('finish')

        fixed_pages = self.restamper.normalize(self.pages)
        self._finished = True

        blob = OggOpusBlob(b''.join(fixed_pages))
        duration = self.total_samples / self.sample_rate if self.sample_rate else 0.0

        logger.info(
            f"Recording finished: {len(self.pages)} encoder pages, "
            f"{duration:.2f}s, {blob.size} bytes"
        )
        return RecordingResult(blob=blob, duration=duration, page_count=len(self.pages))
