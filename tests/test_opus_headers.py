# pylint: disable=missing-module-docstring,missing-function-docstring

import pytest

from oggmux.ogg_page import page_payload, parse_page_header, verify_page_checksum
from oggmux.opus_headers import (
    build_comment_page,
    build_header_pages,
    build_identification_page,
    build_opus_head,
    build_opus_tags,
)

SERIAL = 0xDEADBEEF


# ---------------------------------------------------------------------
# Header packets
# ---------------------------------------------------------------------

def test_opus_head_bytes_mono_48k():
    expected = (
        b"OpusHead"
        + bytes([1, 1])              # version, channels
        + bytes([0x38, 0x01])        # pre-skip 312
        + bytes([0x80, 0xBB, 0, 0])  # 48000 Hz
        + bytes([0, 0])              # output gain
        + bytes([0])                 # mapping family
    )
    assert build_opus_head(48000, 1, 312) == expected


def test_opus_head_stereo_44k1():
    head = build_opus_head(44100, 2, 312)

    assert len(head) == 19
    assert head[9] == 2
    assert head[12:16] == (44100).to_bytes(4, "little")


def test_opus_head_rejects_unsupported_channels():
    with pytest.raises(ValueError):
        build_opus_head(48000, 3)
    with pytest.raises(ValueError):
        build_opus_head(48000, 0)


def test_opus_tags_bytes():
    expected = b"OpusTags" + (4).to_bytes(4, "little") + b"test" + b"\x00" * 4
    assert build_opus_tags("test") == expected


def test_opus_tags_vendor_is_utf8():
    tags = build_opus_tags("Mikrofon Testi ç")
    assert int.from_bytes(tags[8:12], "little") == len("Mikrofon Testi ç".encode("utf-8"))


# ---------------------------------------------------------------------
# Header pages
# ---------------------------------------------------------------------

def test_identification_page():
    page = build_identification_page(48000, 1, 312, SERIAL)
    header = parse_page_header(page)

    assert header.sequence_number == 0
    assert header.bos is True
    assert header.eos is False
    assert header.granule_position == 0
    assert header.serial_number == SERIAL
    assert page_payload(page) == build_opus_head(48000, 1, 312)
    assert verify_page_checksum(page)


def test_comment_page():
    page = build_comment_page("MicProbe WASM Opus", SERIAL)
    header = parse_page_header(page)

    assert header.sequence_number == 1
    assert header.bos is False
    assert header.eos is False
    assert header.granule_position == 0
    assert page_payload(page) == build_opus_tags("MicProbe WASM Opus")


def test_header_pages_share_serial():
    pages = build_header_pages(16000, 1, 312, "vendor", SERIAL)

    assert len(pages) == 2
    assert [parse_page_header(p).serial_number for p in pages] == [SERIAL, SERIAL]
