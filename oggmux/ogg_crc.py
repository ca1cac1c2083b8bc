"""
Ogg CRC32 (RFC 3533): polynomial 0x04C11DB7, MSB-first, no reflection,
zero initial value and no final XOR.
"""

from config.constants import OGG_CRC_POLYNOMIAL


class OggCRC32:
    """
    Table-driven Ogg checksum.

    The 256-entry lookup table is built once per instance and kept as a
    tuple, so a shared instance can be used from any number of writers.
    """

    def __init__(self, polynomial: int = OGG_CRC_POLYNOMIAL):
        self.polynomial = polynomial
        self._table = self._build_table(polynomial)

    @staticmethod
    def _build_table(polynomial: int) -> tuple[int, ...]:
        table = []
        for i in range(256):
            crc = i << 24
            for _ in range(8):
                if crc & 0x80000000:
                    crc = (crc << 1) ^ polynomial
                else:
                    crc <<= 1
            table.append(crc & 0xFFFFFFFF)
        return tuple(table)

    @property
    def table(self) -> tuple[int, ...]:
        return self._table

    def checksum(self, data: bytes) -> int:
        """Calculate the Ogg CRC32 of data as an unsigned 32-bit value"""
        table = self._table
        crc = 0
        for byte in data:
            crc = ((crc << 8) ^ table[((crc >> 24) ^ byte) & 0xFF]) & 0xFFFFFFFF
        return crc


# Built eagerly at import
OGG_CRC = OggCRC32()


def ogg_crc32(data: bytes) -> int:
    """Ogg CRC32 using the module-wide engine"""
    return OGG_CRC.checksum(data)
