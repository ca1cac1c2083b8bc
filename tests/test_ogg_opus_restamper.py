# pylint: disable=missing-module-docstring,missing-function-docstring

import pytest

from oggmux.errors import MalformedPage
from oggmux.ogg_opus_restamper import OggOpusRestamper
from oggmux.ogg_page import (
    build_page,
    page_payload,
    parse_page_header,
    verify_page_checksum,
)
from oggmux.opus_headers import build_comment_page, build_identification_page

VENDOR = "MicProbe WASM Opus"


def foreign_page(serial, sequence, granule, payload=b"\x10" * 12, eos=False) -> bytes:
    return build_page([payload], granule, eos=eos,
                      serial_number=serial, sequence_number=sequence)


def make_restamper(**kwargs) -> OggOpusRestamper:
    kwargs.setdefault("serial_number", 0x11111111)
    kwargs.setdefault("vendor", VENDOR)
    return OggOpusRestamper(48000, 1, **kwargs)


# ---------------------------------------------------------------------
# Empty input
# ---------------------------------------------------------------------

def test_empty_input_returns_header_pages_only():
    pages = make_restamper().normalize([])
    headers = [parse_page_header(p) for p in pages]

    assert len(pages) == 2
    assert [h.granule_position for h in headers] == [0, 0]
    assert [h.sequence_number for h in headers] == [0, 1]
    assert pages[0] == build_identification_page(48000, 1, 312, 0x11111111)
    assert pages[1] == build_comment_page(VENDOR, 0x11111111)


# ---------------------------------------------------------------------
# Re-stamping
# ---------------------------------------------------------------------

def test_three_foreign_pages():
    foreign = [
        foreign_page(0xAAAA0001, 0, 960),
        foreign_page(0xBBBB0002, 1, 1920),
        foreign_page(0xCCCC0003, 2, 2880),
    ]
    pages = make_restamper().normalize(foreign)
    headers = [parse_page_header(p) for p in pages]

    assert len(pages) == 5
    assert {h.serial_number for h in headers} == {0xAAAA0001}
    assert [h.sequence_number for h in headers] == [0, 1, 2, 3, 4]
    assert [h.eos for h in headers] == [False, False, False, False, True]
    assert headers[0].bos is True
    assert all(verify_page_checksum(p) for p in pages)


def test_adopts_foreign_serial_number():
    restamper = make_restamper()
    restamper.normalize([foreign_page(0x5EED5EED, 0, 960)])

    assert restamper.serial_number == 0x5EED5EED


def test_payload_and_granule_preserved():
    foreign = [foreign_page(9, 0, 960, b"abc"), foreign_page(9, 1, 1920, b"x" * 600)]
    pages = make_restamper().normalize(foreign)

    assert page_payload(pages[2]) == b"abc"
    assert page_payload(pages[3]) == b"x" * 600
    assert parse_page_header(pages[3]).granule_position == 1920


def test_stray_eos_moved_to_last_page():
    foreign = [foreign_page(9, 0, 960, eos=True), foreign_page(9, 1, 1920)]
    headers = [parse_page_header(p) for p in make_restamper().normalize(foreign)]

    assert [h.eos for h in headers] == [False, False, False, True]


def test_foreign_sequence_numbers_ignored():
    foreign = [foreign_page(9, 50, 960), foreign_page(9, 3, 1920)]
    headers = [parse_page_header(p) for p in make_restamper().normalize(foreign)]

    assert [h.sequence_number for h in headers] == [0, 1, 2, 3]


def test_input_pages_not_mutated():
    foreign = [foreign_page(9, 0, 960), foreign_page(9, 1, 1920)]
    snapshot = [bytes(p) for p in foreign]
    make_restamper().normalize(foreign)

    assert foreign == snapshot


def test_corrupt_crc_is_overwritten_by_default():
    page = bytearray(foreign_page(9, 0, 960))
    page[22] ^= 0xFF
    pages = make_restamper().normalize([bytes(page)])

    assert verify_page_checksum(pages[2])


# ---------------------------------------------------------------------
# Malformed input
# ---------------------------------------------------------------------

def test_short_page_rejected():
    with pytest.raises(MalformedPage):
        make_restamper().normalize([b"OggS\x00\x00"])


def test_short_page_rejected_before_any_change():
    restamper = make_restamper()
    good = foreign_page(0x77777777, 0, 960)

    with pytest.raises(MalformedPage):
        restamper.normalize([good, b"\x00" * 26])

    assert restamper.serial_number == 0x11111111


def test_strict_mode_rejects_crc_mismatch():
    page = bytearray(foreign_page(9, 0, 960))
    page[-1] ^= 0x01

    with pytest.raises(MalformedPage):
        make_restamper().normalize([bytes(page)], strict=True)


def test_strict_mode_accepts_valid_pages():
    pages = make_restamper().normalize([foreign_page(9, 0, 960)], strict=True)
    assert len(pages) == 3


def test_truncated_page_rejected():
    page = foreign_page(9, 0, 960, payload=b"\x10" * 100)

    with pytest.raises(MalformedPage):
        make_restamper().normalize([page[:-30], page[:-30]])


def test_page_with_trailing_bytes_rejected():
    first = foreign_page(9, 0, 960)
    second = foreign_page(9, 1, 1920)

    with pytest.raises(MalformedPage):
        make_restamper().normalize([first + second])


# ---------------------------------------------------------------------
# Stream parameters
# ---------------------------------------------------------------------

def test_unsupported_channel_count_rejected_at_construction():
    with pytest.raises(ValueError):
        OggOpusRestamper(48000, 3, serial_number=1)


def test_header_failure_keeps_serial_number():
    restamper = make_restamper()
    restamper.channels = 3

    with pytest.raises(ValueError):
        restamper.normalize([foreign_page(0x22222222, 0, 960)])

    assert restamper.serial_number == 0x11111111
