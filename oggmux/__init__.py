"""
oggmux package initialization.
Exports the Ogg/Opus muxer, re-stamper and page helpers for easy importing.
"""

from .errors import (
    OggMuxError,
    PageOverflow,
    InvalidSessionState,
    MalformedPage,
)

from .ogg_crc import OggCRC32, ogg_crc32

from .ogg_page import (
    SegmentTable,
    OggPageHeader,
    build_lacing,
    build_page,
    parse_page_header,
    page_payload,
    compute_page_checksum,
    verify_page_checksum,
    restamp_page,
    read_serial_number,
)

from .opus_headers import (
    build_opus_head,
    build_opus_tags,
    build_identification_page,
    build_comment_page,
    build_header_pages,
)

from .ogg_opus_writer import (
    OggStreamState,
    OggOpusBlob,
    OggOpusWriter,
    random_serial_number,
)

from .ogg_opus_restamper import OggOpusRestamper

from .ogg_opus_parser import split_pages, extract_opus_packets

from .page_collector import OpusPageCollector, PageProgress, RecordingResult

from .logging_config import setup_logging, log_effective_config

__all__ = [
    # Errors
    'OggMuxError',
    'PageOverflow',
    'InvalidSessionState',
    'MalformedPage',

    # CRC
    'OggCRC32',
    'ogg_crc32',

    # Pages
    'SegmentTable',
    'OggPageHeader',
    'build_lacing',
    'build_page',
    'parse_page_header',
    'page_payload',
    'compute_page_checksum',
    'verify_page_checksum',
    'restamp_page',
    'read_serial_number',

    # Opus headers
    'build_opus_head',
    'build_opus_tags',
    'build_identification_page',
    'build_comment_page',
    'build_header_pages',

    # Writer
    'OggStreamState',
    'OggOpusBlob',
    'OggOpusWriter',
    'random_serial_number',

    # Re-stamper
    'OggOpusRestamper',

    # Parser
    'split_pages',
    'extract_opus_packets',

    # Encoder page collection
    'OpusPageCollector',
    'PageProgress',
    'RecordingResult',

    # Logging
    'setup_logging',
    'log_effective_config',
]
