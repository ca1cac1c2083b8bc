"""
Constants used throughout the application.
These are hardcoded values that don't come from environment variables.
"""

# ============================================================================
# OGG PAGE LAYOUT (RFC 3533)
# ============================================================================

OGG_CAPTURE_PATTERN = b'OggS'
OGG_VERSION = 0

# Fixed header size before the segment table
OGG_HEADER_SIZE = 27

# Field offsets inside the page header
OGG_HEADER_TYPE_OFFSET = 5
OGG_GRANULE_OFFSET = 6
OGG_SERIAL_OFFSET = 14
OGG_SEQUENCE_OFFSET = 18
OGG_CRC_OFFSET = 22
OGG_SEGMENT_COUNT_OFFSET = 26

# Header type flag bits
OGG_FLAG_CONTINUED = 0x01
OGG_FLAG_BOS = 0x02
OGG_FLAG_EOS = 0x04

# Segment table limits
OGG_MAX_LACING_VALUES = 255
OGG_MAX_SEGMENT_SIZE = 255

# Ogg CRC32 polynomial (MSB-first, no reflection)
OGG_CRC_POLYNOMIAL = 0x04C11DB7

# ============================================================================
# OPUS ENCAPSULATION (RFC 7845)
# ============================================================================

OPUS_HEAD_MAGIC = b'OpusHead'
OPUS_TAGS_MAGIC = b'OpusTags'
OPUS_HEAD_VERSION = 1

# Granule positions always count 48kHz samples
OPUS_GRANULE_RATE = 48000

# Standard Opus encoder delay at 48kHz (~6.5ms)
DEFAULT_PRE_SKIP = 312

# 20ms at 48kHz
DEFAULT_FRAME_SAMPLES = 960

DEFAULT_SAMPLE_RATE = 48000
DEFAULT_CHANNELS = 1

# Header pages always take sequence numbers 0 and 1
HEADER_PAGE_COUNT = 2

OGG_OPUS_MIME_TYPE = 'audio/ogg; codecs=opus'

# ============================================================================
# LOGGING
# ============================================================================

LOG_MAX_BYTES = 5 * 1024 * 1024  # 5 MB per log file
LOG_BACKUP_COUNT = 3
