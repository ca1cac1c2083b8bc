# pylint: disable=missing-module-docstring,missing-function-docstring

import pytest

from oggmux.errors import MalformedPage
from oggmux.ogg_opus_parser import extract_opus_packets, split_pages
from oggmux.ogg_opus_writer import OggOpusWriter
from oggmux.ogg_page import build_page


def make_stream(frames) -> bytes:
    writer = OggOpusWriter(48000, 1, serial_number=3, vendor="test")
    writer.write_frames(frames)
    return writer.finish().data


def test_split_pages_counts():
    data = make_stream([b"\x01" * 5, b"\x02" * 700])
    pages = split_pages(data)

    assert len(pages) == 4
    assert b"".join(pages) == data


def test_split_pages_empty_input():
    assert split_pages(b"") == []


def test_split_pages_rejects_garbage():
    with pytest.raises(MalformedPage):
        split_pages(make_stream([b"\x01"]) + b"junk" * 10)


def test_split_pages_rejects_truncated_payload():
    data = make_stream([b"\x01" * 100])
    with pytest.raises(MalformedPage):
        split_pages(data[:-10])


def test_extract_skips_header_pages():
    frames = [b"\x01" * 5, b"\x02" * 510, b"\x03" * 255]
    assert extract_opus_packets(make_stream(frames)) == frames


def test_extract_packet_spanning_pages():
    first = build_page([b"a" * 255], 0, serial_number=1, sequence_number=2)
    # Lacing a 255-byte packet ends in 0; drop it so the packet continues
    first = first[:26] + bytes([1]) + first[27:28] + first[29:]
    second = build_page([b"b" * 10], 960, continued=True, serial_number=1, sequence_number=3)

    assert extract_opus_packets(first + second) == [b"a" * 255 + b"b" * 10]
