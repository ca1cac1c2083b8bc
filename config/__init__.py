"""
Config package initialization.
Exports all settings and constants for easy importing.
"""

from .settings import (
    # Ogg / Opus
    OGG_VENDOR_STRING,
    OGG_SERIAL_NUMBER,

    # Logging
    DEBUG_LEVEL,

    # File Paths
    LOG_DIR,
)

from .constants import (
    # Ogg page layout
    OGG_CAPTURE_PATTERN,
    OGG_VERSION,
    OGG_HEADER_SIZE,
    OGG_HEADER_TYPE_OFFSET,
    OGG_GRANULE_OFFSET,
    OGG_SERIAL_OFFSET,
    OGG_SEQUENCE_OFFSET,
    OGG_CRC_OFFSET,
    OGG_SEGMENT_COUNT_OFFSET,
    OGG_FLAG_CONTINUED,
    OGG_FLAG_BOS,
    OGG_FLAG_EOS,
    OGG_MAX_LACING_VALUES,
    OGG_MAX_SEGMENT_SIZE,
    OGG_CRC_POLYNOMIAL,

    # Opus encapsulation
    OPUS_HEAD_MAGIC,
    OPUS_TAGS_MAGIC,
    OPUS_HEAD_VERSION,
    OPUS_GRANULE_RATE,
    DEFAULT_PRE_SKIP,
    DEFAULT_FRAME_SAMPLES,
    DEFAULT_SAMPLE_RATE,
    DEFAULT_CHANNELS,
    HEADER_PAGE_COUNT,
    OGG_OPUS_MIME_TYPE,

    # Logging
    LOG_MAX_BYTES,
    LOG_BACKUP_COUNT,
)

__all__ = [
    # Settings
    'OGG_VENDOR_STRING',
    'OGG_SERIAL_NUMBER',
    'DEBUG_LEVEL',
    'LOG_DIR',

    # Constants
    'OGG_CAPTURE_PATTERN',
    'OGG_VERSION',
    'OGG_HEADER_SIZE',
    'OGG_HEADER_TYPE_OFFSET',
    'OGG_GRANULE_OFFSET',
    'OGG_SERIAL_OFFSET',
    'OGG_SEQUENCE_OFFSET',
    'OGG_CRC_OFFSET',
    'OGG_SEGMENT_COUNT_OFFSET',
    'OGG_FLAG_CONTINUED',
    'OGG_FLAG_BOS',
    'OGG_FLAG_EOS',
    'OGG_MAX_LACING_VALUES',
    'OGG_MAX_SEGMENT_SIZE',
    'OGG_CRC_POLYNOMIAL',
    'OPUS_HEAD_MAGIC',
    'OPUS_TAGS_MAGIC',
    'OPUS_HEAD_VERSION',
    'OPUS_GRANULE_RATE',
    'DEFAULT_PRE_SKIP',
    'DEFAULT_FRAME_SAMPLES',
    'DEFAULT_SAMPLE_RATE',
    'DEFAULT_CHANNELS',
    'HEADER_PAGE_COUNT',
    'OGG_OPUS_MIME_TYPE',
    'LOG_MAX_BYTES',
    'LOG_BACKUP_COUNT',
]
