"""
Re-stamp Ogg pages produced by an external Opus encoder

The encoder worker streams audio-data pages only, with its own serial
number, and cannot know which page will be the last one. Once the full page
list is known this module synthesizes the OpusHead/OpusTags pages, unifies
the serial number, renumbers pages from 2 and moves EOS to the last page,
clearing it anywhere else.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from config.constants import (
    DEFAULT_PRE_SKIP,
    DEFAULT_SAMPLE_RATE,
    DEFAULT_CHANNELS,
    HEADER_PAGE_COUNT,
)
from config.settings import OGG_VENDOR_STRING
from .errors import MalformedPage
from .ogg_opus_writer import SerialSource, resolve_serial_number
from .ogg_page import (
    parse_page_header,
    read_serial_number,
    restamp_page,
    verify_page_checksum,
)
from .opus_headers import build_header_pages, build_opus_head

logger = logging.getLogger(__name__)


class OggOpusRestamper:
    """
    Turns a list of foreign Ogg/Opus data pages into one consistent stream.
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
        self.sample_rate = sample_rate
        self.channels = channels
        self.pre_skip = pre_skip
        self.vendor = vendor if vendor is not None else OGG_VENDOR_STRING
        self.serial_number = resolve_serial_number(serial_number, random_source)

        # Fail here rather than after a whole recording was collected
        build_opus_head(sample_rate, channels, pre_skip)

    def header_pages(self, serial_number: Optional[int] = None) -> list[bytes]:
        if serial_number is None:
            serial_number = self.serial_number
        return build_header_pages(
            self.sample_rate, self.channels, self.pre_skip, self.vendor, serial_number
        )

    def normalize(self, foreign_pages: Sequence[bytes], *, strict: bool = False) -> list[bytes]:
        """
        Build a complete Ogg/Opus page list from foreign data pages

        Args:
            foreign_pages: Audio-data pages in stream order, one page per buffer
            strict: Reject pages whose stored CRC does not match their contents

        Returns:
            [OpusHead page, OpusTags page, *re-stamped data pages]

        Raises:
            MalformedPage: if any page is unreadable, truncated, carries
                trailing bytes (or fails its CRC in strict mode); nothing is
                modified in that case
        """
        if not foreign_pages:
            logger.debug("No foreign pages, emitting header pages only")
            return self.header_pages()

        for index, page in enumerate(foreign_pages):
            try:
                header = parse_page_header(page)
            except MalformedPage as e:
                raise MalformedPage(f"Foreign page {index}: {e}") from e
            if len(page) != header.page_size:
                raise MalformedPage(
                    f"Foreign page {index}: {len(page)} bytes, header describes {header.page_size}"
                )
            if strict and not verify_page_checksum(page):
                raise MalformedPage(f"Foreign page {index}: CRC mismatch")

        foreign_serial = read_serial_number(foreign_pages[0])

        last = len(foreign_pages) - 1
        data_pages = [
            restamp_page(
                page,
                serial_number=foreign_serial,
                sequence_number=index + HEADER_PAGE_COUNT,
                eos=index == last,
            )
            for index, page in enumerate(foreign_pages)
        ]
        pages = self.header_pages(foreign_serial) + data_pages

        if foreign_serial != self.serial_number:
            logger.debug(
                f"Adopting foreign serial number {foreign_serial:#010x} "
                f"(was {self.serial_number:#010x})"
            )
        self.serial_number = foreign_serial

        logger.info(
            f"Re-stamped {len(data_pages)} foreign pages into stream {self.serial_number:#010x}"
        )
        return pages
