"""
Ogg/Opus parser to split a stream into pages and extract Opus packets
"""

import logging

from config.constants import OPUS_HEAD_MAGIC, OPUS_TAGS_MAGIC, OGG_MAX_SEGMENT_SIZE
from .errors import MalformedPage
from .ogg_page import parse_page_header

logger = logging.getLogger(__name__)


def split_pages(ogg_data: bytes) -> list[bytes]:
    """
    Split a concatenated Ogg stream into its pages

    Raises:
        MalformedPage: on a missing capture pattern or a truncated page
    """
    pages = []
    offset = 0

    while offset < len(ogg_data):
        try:
            header = parse_page_header(ogg_data[offset:])
        except MalformedPage as e:
            raise MalformedPage(f"Page {len(pages)} at offset {offset}: {e}") from e

        end = offset + header.page_size
        if end > len(ogg_data):
            raise MalformedPage(
                f"Page {len(pages)}: payload extends beyond data "
                f"(need {end}, have {len(ogg_data)})"
            )

        pages.append(bytes(ogg_data[offset:end]))
        offset = end

    return pages


def extract_opus_packets(ogg_data: bytes) -> list[bytes]:
    """
    Extract Opus packets from Ogg container

    Segments in the segment table represent packet boundaries:
    - Segments < 255 bytes end a packet
    - Segments == 255 bytes continue the packet, possibly onto the next page

    Args:
        ogg_data: Ogg container bytes

    Returns:
        List of Opus packet bytes (OpusHead/OpusTags skipped)
    """
    packets = []
    current_packet = bytearray()
    in_packet = False
    pages = split_pages(ogg_data)

    for page_num, page in enumerate(pages):
        header = parse_page_header(page)
        payload = page[header.header_size:header.page_size]

        # Skip Opus header/tag pages
        if not header.continued and (payload.startswith(OPUS_HEAD_MAGIC)
                                     or payload.startswith(OPUS_TAGS_MAGIC)):
            logger.debug(f"Page {page_num}: {payload[:8].decode('ascii')} (skipping)")
            continue

        segment_offset = 0
        for segment_size in header.segment_table:
            current_packet.extend(payload[segment_offset:segment_offset + segment_size])
            segment_offset += segment_size
            in_packet = True

            # If segment < 255 bytes, packet is complete
            if segment_size < OGG_MAX_SEGMENT_SIZE:
                packets.append(bytes(current_packet))
                current_packet = bytearray()
                in_packet = False

    # Stream ended inside a packet
    if in_packet:
        packets.append(bytes(current_packet))

    logger.debug(f"Extracted {len(packets)} Opus packets from {len(pages)} Ogg pages")
    return packets
