"""
Ogg page building and inspection
Based on RFC 3533 (Ogg Bitstream)

Page layout:
    0   4  capture pattern "OggS"
    4   1  version (0)
    5   1  header type (0x01 continued, 0x02 BOS, 0x04 EOS)
    6   8  granule position (u64, little-endian)
    14  4  bitstream serial number (u32, little-endian)
    18  4  page sequence number (u32, little-endian)
    22  4  CRC32 (u32, little-endian)
    26  1  number of segments
    27  N  segment table (lacing values)
    27+N   payload

Every page is finalized as immutable bytes. Changing any field goes through
restamp_page(), which recomputes the checksum.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import Iterable, Optional

from config.constants import (
    OGG_CAPTURE_PATTERN,
    OGG_VERSION,
    OGG_HEADER_SIZE,
    OGG_HEADER_TYPE_OFFSET,
    OGG_SERIAL_OFFSET,
    OGG_SEQUENCE_OFFSET,
    OGG_CRC_OFFSET,
    OGG_SEGMENT_COUNT_OFFSET,
    OGG_FLAG_CONTINUED,
    OGG_FLAG_BOS,
    OGG_FLAG_EOS,
    OGG_MAX_LACING_VALUES,
    OGG_MAX_SEGMENT_SIZE,
)
from .errors import MalformedPage, PageOverflow
from .ogg_crc import ogg_crc32

logger = logging.getLogger(__name__)

# Header without the segment count byte
_HEADER_STRUCT = struct.Struct('<4sBBQIII')

_U32_MAX = 0xFFFFFFFF
_U64_MAX = 0xFFFFFFFFFFFFFFFF


def _check_range(name: str, value: int, maximum: int) -> None:
    if not 0 <= value <= maximum:
        raise ValueError(f"{name} {value} out of range 0..{maximum}")


# -------------------------
# Segment table
# -------------------------

@dataclass(frozen=True)
class SegmentTable:
    """
    Lacing values for one page plus the payload chunks they describe.

    `data` runs parallel to `table`: one chunk per lacing value, so an
    explicit 0 terminator has an empty chunk.
    """
    table: bytes
    data: tuple[bytes, ...]

    @property
    def payload(self) -> bytes:
        return b''.join(self.data)


def build_lacing(segments: Iterable[bytes]) -> SegmentTable:
    """
    Build the segment table for a list of packets.

    Each packet becomes a run of 255 values for every full 255-byte chunk,
    terminated by the remainder (0-254). A packet whose length is an exact
    multiple of 255 gets an explicit 0 so decoders know it ends here.

    Raises:
        PageOverflow: if the page would need more than 255 lacing values
    """
    table = bytearray()
    data: list[bytes] = []

    for seg in segments:
        seg = bytes(seg)
        offset = 0
        remaining = len(seg)
        while remaining >= OGG_MAX_SEGMENT_SIZE:
            table.append(OGG_MAX_SEGMENT_SIZE)
            data.append(seg[offset:offset + OGG_MAX_SEGMENT_SIZE])
            offset += OGG_MAX_SEGMENT_SIZE
            remaining -= OGG_MAX_SEGMENT_SIZE
        table.append(remaining)
        data.append(seg[offset:])

        if len(table) > OGG_MAX_LACING_VALUES:
            raise PageOverflow(
                f"Segment table needs {len(table)} lacing values "
                f"(max {OGG_MAX_LACING_VALUES})"
            )

    return SegmentTable(table=bytes(table), data=tuple(data))


# -------------------------
# Page builder
# -------------------------

def build_page(
    segments: Iterable[bytes],
    granule_position: int,
    *,
    bos: bool = False,
    eos: bool = False,
    serial_number: int,
    sequence_number: int,
    continued: bool = False,
) -> bytes:
    """
    Create an Ogg page containing the given packets

    Args:
        segments: Packets to lace into this page (may be empty)
        granule_position: Granule position (u64)
        bos: Beginning of stream flag
        eos: End of stream flag
        serial_number: Bitstream serial number (u32)
        sequence_number: Page sequence number (u32)
        continued: First packet continues one from the previous page

    Returns:
        Complete Ogg page bytes with the CRC filled in
    """
    _check_range('granule position', granule_position, _U64_MAX)
    _check_range('serial number', serial_number, _U32_MAX)
    _check_range('sequence number', sequence_number, _U32_MAX)

    lacing = build_lacing(segments)

    header_type = 0
    if continued:
        header_type |= OGG_FLAG_CONTINUED
    if bos:
        header_type |= OGG_FLAG_BOS
    if eos:
        header_type |= OGG_FLAG_EOS

    page = bytearray(_HEADER_STRUCT.pack(
        OGG_CAPTURE_PATTERN,        # Capture pattern
        OGG_VERSION,                # Version
        header_type,                # Header type
        granule_position,           # Granule position
        serial_number,              # Bitstream serial number
        sequence_number,            # Page sequence number
        0,                          # CRC placeholder
    ))
    page.append(len(lacing.table))
    page += lacing.table
    page += lacing.payload

    struct.pack_into('<I', page, OGG_CRC_OFFSET, ogg_crc32(page))
    return bytes(page)


# -------------------------
# Page inspection
# -------------------------

@dataclass(frozen=True)
class OggPageHeader:
    """Decoded fixed header and segment table of one Ogg page."""
    version: int
    header_type: int
    granule_position: int
    serial_number: int
    sequence_number: int
    checksum: int
    segment_table: bytes

    @property
    def continued(self) -> bool:
        return bool(self.header_type & OGG_FLAG_CONTINUED)

    @property
    def bos(self) -> bool:
        return bool(self.header_type & OGG_FLAG_BOS)

    @property
    def eos(self) -> bool:
        return bool(self.header_type & OGG_FLAG_EOS)

    @property
    def header_size(self) -> int:
        return OGG_HEADER_SIZE + len(self.segment_table)

    @property
    def body_size(self) -> int:
        return sum(self.segment_table)

    @property
    def page_size(self) -> int:
        return self.header_size + self.body_size

    def packet_lengths(self) -> list[int]:
        """
        Re-assemble lacing values into packet sizes.

        A value below 255 ends a packet. A trailing run of 255s belongs to
        a packet that continues on the next page and is reported as is.
        """
        lengths = []
        current = 0
        pending = False
        for value in self.segment_table:
            current += value
            pending = True
            if value < OGG_MAX_SEGMENT_SIZE:
                lengths.append(current)
                current = 0
                pending = False
        if pending:
            lengths.append(current)
        return lengths


def parse_page_header(page: bytes) -> OggPageHeader:
    """
    Decode the header of the Ogg page at the start of `page`.

    Raises:
        MalformedPage: if the buffer is too short, lacks the capture
            pattern or its segment table runs past the end
    """
    if len(page) < OGG_HEADER_SIZE:
        raise MalformedPage(
            f"Page is {len(page)} bytes, shorter than the {OGG_HEADER_SIZE}-byte header"
        )

    capture, version, header_type, granule, serial, sequence, checksum = \
        _HEADER_STRUCT.unpack_from(page, 0)
    if capture != OGG_CAPTURE_PATTERN:
        raise MalformedPage(f"Bad capture pattern {bytes(capture)!r}")

    num_segments = page[OGG_SEGMENT_COUNT_OFFSET]
    table_end = OGG_HEADER_SIZE + num_segments
    if table_end > len(page):
        raise MalformedPage(
            f"Segment table needs {table_end} bytes, page has {len(page)}"
        )

    return OggPageHeader(
        version=version,
        header_type=header_type,
        granule_position=granule,
        serial_number=serial,
        sequence_number=sequence,
        checksum=checksum,
        segment_table=bytes(page[OGG_HEADER_SIZE:table_end]),
    )


def page_payload(page: bytes) -> bytes:
    """Return the body of a single page"""
    header = parse_page_header(page)
    return bytes(page[header.header_size:header.page_size])


def compute_page_checksum(page: bytes) -> int:
    """CRC32 of a page with its checksum field treated as zero"""
    scratch = bytearray(page)
    scratch[OGG_CRC_OFFSET:OGG_CRC_OFFSET + 4] = b'\x00\x00\x00\x00'
    return ogg_crc32(scratch)


def verify_page_checksum(page: bytes) -> bool:
    """Check the stored CRC of a page against a fresh computation"""
    header = parse_page_header(page)
    return header.checksum == compute_page_checksum(page)


def restamp_page(
    page: bytes,
    *,
    serial_number: Optional[int] = None,
    sequence_number: Optional[int] = None,
    eos: Optional[bool] = None,
) -> bytes:
    """
    Return a copy of `page` with fields overwritten and the CRC recomputed.

    Args:
        page: An existing Ogg page
        serial_number: New bitstream serial number, or None to keep
        sequence_number: New page sequence number, or None to keep
        eos: True to set the EOS flag, False to clear it, None to keep

    Raises:
        MalformedPage: if `page` is not a readable Ogg page
    """
    parse_page_header(page)
    if serial_number is not None:
        _check_range('serial number', serial_number, _U32_MAX)
    if sequence_number is not None:
        _check_range('sequence number', sequence_number, _U32_MAX)

    new_page = bytearray(page)
    if serial_number is not None:
        struct.pack_into('<I', new_page, OGG_SERIAL_OFFSET, serial_number)
    if sequence_number is not None:
        struct.pack_into('<I', new_page, OGG_SEQUENCE_OFFSET, sequence_number)
    if eos is True:
        new_page[OGG_HEADER_TYPE_OFFSET] |= OGG_FLAG_EOS
    elif eos is False:
        new_page[OGG_HEADER_TYPE_OFFSET] &= ~OGG_FLAG_EOS & 0xFF

    new_page[OGG_CRC_OFFSET:OGG_CRC_OFFSET + 4] = b'\x00\x00\x00\x00'
    struct.pack_into('<I', new_page, OGG_CRC_OFFSET, ogg_crc32(new_page))
    return bytes(new_page)


def read_serial_number(page: bytes) -> int:
    """Read the bitstream serial number (offset 14-17)"""
    if len(page) < OGG_HEADER_SIZE:
        raise MalformedPage(
            f"Page is {len(page)} bytes, shorter than the {OGG_HEADER_SIZE}-byte header"
        )
    return struct.unpack_from('<I', page, OGG_SERIAL_OFFSET)[0]
