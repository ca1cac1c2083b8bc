"""
Configuration settings loaded from environment variables.
All environment variable parsing and validation happens here.
"""
import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _parse_serial_number(raw: Optional[str]) -> Optional[int]:
    """
    Parse a fixed Ogg serial number from the environment.

    Accepts decimal or 0x-prefixed hex. Returns None when unset or invalid,
    in which case streams fall back to a random serial number.
    """
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw.strip(), 0)
    except ValueError:
        print("ERROR: OGG_SERIAL_NUMBER must be an integer")
        return None
    if not 0 <= value <= 0xFFFFFFFF:
        print("ERROR: OGG_SERIAL_NUMBER must fit in 32 bits")
        return None
    return value


# ============================================================================
# OGG / OPUS STREAM SETTINGS
# ============================================================================

# Written into the OpusTags comment header
OGG_VENDOR_STRING = os.getenv('OGG_VENDOR_STRING', 'MicProbe WASM Opus')

# Pin the stream serial number for reproducible output (unset = random)
OGG_SERIAL_NUMBER = _parse_serial_number(os.getenv('OGG_SERIAL_NUMBER'))

# ============================================================================
# LOGGING
# ============================================================================

DEBUG_LEVEL = os.getenv('DEBUG_LEVEL', 'info').lower()

# ============================================================================
# FILE PATHS
# ============================================================================

LOG_DIR = os.getenv('LOG_DIR', 'Logs')
