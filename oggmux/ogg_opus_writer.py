"""
Ogg/Opus writer for recorded microphone audio
Based on RFC 7845 (Ogg Encapsulation for Opus) and RFC 3533 (Ogg Bitstream)

Each Opus frame goes into its own Ogg page. Packing several frames per page
would save a few bytes of overhead per frame, but one frame per page is the
output format existing consumers of these recordings expect.
"""

from __future__ import annotations

import logging
import operator
import os
import struct
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from config.constants import (
    DEFAULT_PRE_SKIP,
    DEFAULT_FRAME_SAMPLES,
    DEFAULT_SAMPLE_RATE,
    DEFAULT_CHANNELS,
    HEADER_PAGE_COUNT,
    OGG_OPUS_MIME_TYPE,
)
from config.settings import OGG_VENDOR_STRING, OGG_SERIAL_NUMBER
from .errors import InvalidSessionState
from .ogg_page import build_page, restamp_page
from .opus_headers import build_header_pages

logger = logging.getLogger(__name__)

SerialSource = Callable[[], int]

_U64_MAX = 0xFFFFFFFFFFFFFFFF


def random_serial_number() -> int:
    """Random 32-bit stream serial number"""
    return struct.unpack('<I', os.urandom(4))[0]


def resolve_serial_number(
    serial_number: Optional[int] = None,
    random_source: Optional[SerialSource] = None,
) -> int:
    """
    Pick the serial number for a new stream.

    An explicit value wins, then an injected random source, then
    OGG_SERIAL_NUMBER from the environment, then os.urandom.
    """
    if serial_number is None:
        if random_source is not None:
            serial_number = random_source()
        elif OGG_SERIAL_NUMBER is not None:
            serial_number = OGG_SERIAL_NUMBER
        else:
            serial_number = random_serial_number()
    serial_number = int(serial_number)
    if not 0 <= serial_number <= 0xFFFFFFFF:
        raise ValueError(f"Serial number {serial_number} does not fit in 32 bits")
    return serial_number


@dataclass
class OggStreamState:
    """
    Counters for one logical Ogg stream.

    serial_number is fixed for the stream's lifetime, sequence_number goes
    up by exactly one per emitted page and granule_position counts 48kHz
    samples, independent of the input sample rate.
    """
    serial_number: int
    sequence_number: int = 0
    granule_position: int = 0

    def next_sequence(self) -> int:
        """Return the sequence number for the next page and advance it"""
        sequence = self.sequence_number
        self.sequence_number += 1
        return sequence

    def granule_after(self, samples: int) -> int:
        """Granule position after adding `samples`, without committing it"""
        try:
            samples = operator.index(samples)
        except TypeError as e:
            raise ValueError(f"Sample count must be an integer, got {samples!r}") from e
        if samples < 0:
            raise ValueError(f"Sample count must be non-negative, got {samples}")
        granule = self.granule_position + samples
        if granule > _U64_MAX:
            raise ValueError(f"Granule position {granule} exceeds 64 bits")
        return granule


@dataclass(frozen=True)
class OggOpusBlob:
    """Finished Ogg/Opus stream tagged with its media type."""
    data: bytes = field(repr=False)
    mime_type: str = OGG_OPUS_MIME_TYPE

    @property
    def size(self) -> int:
        return len(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return self.data

    def save(self, path) -> str:
        """Write the stream to `path` and return the path"""
        with open(path, 'wb') as f:
            f.write(self.data)
        return str(path)


class OggOpusWriter:
    """
    Writes Opus packets into an Ogg container, one page per packet.

    Header pages (OpusHead, OpusTags) are emitted on construction, so a
    fresh writer already holds pages 0 and 1. Call finish() exactly once
    to mark the end of stream and collect the bytes.
    """

    def __init__(
        self,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
        channels: int = DEFAULT_CHANNELS,
        *,
        serial_number: Optional[int] = None,
        random_source: Optional[SerialSource] = None,
        pre_skip: int = DEFAULT_PRE_SKIP,
        vendor: Optional[str] = None,
    ):
        """
        Initialize Ogg/Opus writer

        Args:
            sample_rate: Original input sample rate in Hz (stored in OpusHead)
            channels: Number of channels (1 for mono, 2 for stereo)
            serial_number: Fixed stream serial number
            random_source: Callable returning a serial number when none is fixed
            pre_skip: Encoder delay in 48kHz samples
            vendor: Vendor string for OpusTags (defaults to OGG_VENDOR_STRING)
        """
        self.sample_rate = sample_rate
        self.channels = channels
        self.pre_skip = pre_skip
        self.vendor = vendor if vendor is not None else OGG_VENDOR_STRING

        self.state = OggStreamState(resolve_serial_number(serial_number, random_source))
        self._pages: list[bytes] = []
        self._finished = False

        for page in build_header_pages(
            sample_rate, channels, pre_skip, self.vendor, self.state.serial_number
        ):
            self.state.next_sequence()
            self._pages.append(page)

        logger.debug(
            f"Ogg/Opus stream {self.state.serial_number:#010x} started "
            f"({sample_rate}Hz, {channels}ch, pre-skip {pre_skip})"
        )

    @property
    def serial_number(self) -> int:
        return self.state.serial_number

    @property
    def granule_position(self) -> int:
        return self.state.granule_position

    @property
    def page_sequence(self) -> int:
        """Sequence number the next page will get"""
        return self.state.sequence_number

    @property
    def pages(self) -> tuple[bytes, ...]:
        return tuple(self._pages)

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def data_page_count(self) -> int:
        return len(self._pages) - HEADER_PAGE_COUNT

    def get_headers(self) -> list[bytes]:
        """
        Get the header pages of this stream

        Returns:
            List of [OpusHead page, OpusTags page]
        """
        return self._pages[:HEADER_PAGE_COUNT]

    def _check_open(self, operation: str) -> None:
        if self._finished:
            raise InvalidSessionState(f"Cannot {operation}: stream already finished")

    def write_frame(self, opus_frame: bytes, samples: int = DEFAULT_FRAME_SAMPLES) -> bytes:
        """
        Wrap an Opus frame in an Ogg page

        Args:
            opus_frame: Raw Opus packet bytes
            samples: Number of samples in the frame at 48kHz (default 960 = 20ms)

        Returns:
            Ogg page containing the frame

        Raises:
            InvalidSessionState: if finish() was already called
            PageOverflow: if the frame needs more than 255 lacing values
        """
        self._check_open('write frame')

        # Opus granule positions always count 48kHz samples
        granule = self.state.granule_after(samples)
        page = build_page(
            [opus_frame],
            granule,
            serial_number=self.state.serial_number,
            sequence_number=self.state.sequence_number,
        )

        self.state.granule_position = granule
        self.state.next_sequence()
        self._pages.append(page)
        return page

    def write_frames(self, opus_frames: Iterable[bytes],
                     samples_per_frame: int = DEFAULT_FRAME_SAMPLES) -> None:
        """Write several frames, one page each"""
        for frame in opus_frames:
            self.write_frame(frame, samples_per_frame)

    def finish(self) -> OggOpusBlob:
        """
        Mark the end of stream and return the whole Ogg/Opus file

        If no audio was written an empty EOS page is appended, otherwise the
        last audio page is re-stamped with the EOS flag.

        Raises:
            InvalidSessionState: if called more than once
        """
        self._check_open('finish')

        if len(self._pages) == HEADER_PAGE_COUNT:
            eos_page = build_page(
                [],
                self.state.granule_position,
                eos=True,
                serial_number=self.state.serial_number,
                sequence_number=self.state.sequence_number,
            )
            self.state.next_sequence()
            self._pages.append(eos_page)
        else:
            self._pages[-1] = restamp_page(self._pages[-1], eos=True)

        self._finished = True
        data = b''.join(self._pages)

        logger.info(
            f"Ogg/Opus stream {self.state.serial_number:#010x} finished: "
            f"{len(self._pages)} pages, granule {self.state.granule_position}, {len(data)} bytes"
        )
        return OggOpusBlob(data)


# Quick test
if __name__ == '__main__':
    writer = OggOpusWriter(48000, 1)

    for i, h in enumerate(writer.get_headers()):
        print(f"  Page {i}: {len(h)} bytes, hex: {h[:30].hex()}")

    # Fake Opus packet (silence marker)
    fake_opus = bytes([0xF8, 0xFF, 0xFE])
    page = writer.write_frame(fake_opus, samples=960)
    print(f"Audio page: {len(page)} bytes, hex: {page[:30].hex()}")

    blob = writer.finish()
    print(f"Stream: {blob.size} bytes ({blob.mime_type})")
