"""
Exceptions raised by the Ogg/Opus muxer.
"""


class OggMuxError(Exception):
    """Base class for Ogg/Opus muxing errors."""


class PageOverflow(OggMuxError):
    """
    Raised when the segments of one page need more than 255 lacing values.

    The segment count field is a single byte, so a single Opus frame must
    stay under roughly 64KB. Callers must pre-chunk larger payloads.
    """


class InvalidSessionState(OggMuxError):
    """
    Raised when a finished session is written to or finished again.

    Recovering silently would corrupt page sequence numbering.
    """


class MalformedPage(OggMuxError):
    """
    Raised when a page buffer cannot be read as an Ogg page.

    Covers buffers shorter than the fixed 27-byte header, a missing
    capture pattern, truncated segment tables and (in strict mode)
    checksum mismatches.
    """
