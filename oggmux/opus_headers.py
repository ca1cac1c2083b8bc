"""
Opus header packets and pages (RFC 7845 Section 5)

Both header pages carry granule position 0. The identification page is
always page 0 with BOS set, the comment page is always page 1.
"""

import struct

from config.constants import (
    OPUS_HEAD_MAGIC,
    OPUS_TAGS_MAGIC,
    OPUS_HEAD_VERSION,
    DEFAULT_PRE_SKIP,
)
from .ogg_page import build_page

IDENTIFICATION_PAGE_SEQUENCE = 0
COMMENT_PAGE_SEQUENCE = 1


def build_opus_head(sample_rate: int, channels: int, pre_skip: int = DEFAULT_PRE_SKIP) -> bytes:
    """
    Create the 19-byte OpusHead identification packet

    Args:
        sample_rate: Original input sample rate in Hz (informational)
        channels: Channel count, 1 or 2 for mapping family 0
        pre_skip: Samples at 48kHz to drop from the decoder output
    """
    if channels not in (1, 2):
        raise ValueError(f"Channel mapping family 0 supports 1 or 2 channels, got {channels}")
    if not 0 <= pre_skip <= 0xFFFF:
        raise ValueError(f"Pre-skip {pre_skip} does not fit in 16 bits")
    if not 0 <= sample_rate <= 0xFFFFFFFF:
        raise ValueError(f"Sample rate {sample_rate} does not fit in 32 bits")

    return struct.pack(
        '<8sBBHIhB',
        OPUS_HEAD_MAGIC,       # Magic signature
        OPUS_HEAD_VERSION,     # Version
        channels,              # Channel count
        pre_skip,              # Pre-skip (encoder delay)
        sample_rate,           # Input sample rate
        0,                     # Output gain (dB, Q7.8)
        0                      # Channel mapping family
    )


def build_opus_tags(vendor: str) -> bytes:
    """Create the OpusTags comment packet with no user comments"""
    vendor_bytes = vendor.encode('utf-8')
    opus_tags = struct.pack('<8sI', OPUS_TAGS_MAGIC, len(vendor_bytes))
    opus_tags += vendor_bytes
    opus_tags += struct.pack('<I', 0)  # No user comments
    return opus_tags


def build_identification_page(
    sample_rate: int,
    channels: int,
    pre_skip: int,
    serial_number: int,
) -> bytes:
    """OpusHead page: sequence 0, BOS, granule 0"""
    return build_page(
        [build_opus_head(sample_rate, channels, pre_skip)],
        0,
        bos=True,
        serial_number=serial_number,
        sequence_number=IDENTIFICATION_PAGE_SEQUENCE,
    )


def build_comment_page(vendor: str, serial_number: int) -> bytes:
    """OpusTags page: sequence 1, granule 0"""
    return build_page(
        [build_opus_tags(vendor)],
        0,
        serial_number=serial_number,
        sequence_number=COMMENT_PAGE_SEQUENCE,
    )


def build_header_pages(
    sample_rate: int,
    channels: int,
    pre_skip: int,
    vendor: str,
    serial_number: int,
) -> list[bytes]:
    """
    Get the required header pages for a new Ogg/Opus stream

    Returns:
        List of [OpusHead page, OpusTags page]
    """
    return [
        build_identification_page(sample_rate, channels, pre_skip, serial_number),
        build_comment_page(vendor, serial_number),
    ]
