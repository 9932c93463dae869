"""16-bit CRC (polynomial 0x1021, initial value 0xFFFF) used to protect packets."""

from __future__ import annotations

from collections.abc import Iterable

INITIAL_CRC = 0xFFFF


def byte_update_crc(crc: int, byte: int) -> int:
    """Fold one byte into a running CRC value."""
    x = ((crc >> 8) ^ byte) & 0xFF
    x ^= x >> 4
    return ((crc << 8) ^ (x << 12) ^ (x << 5) ^ x) & 0xFFFF


def array_update_crc(crc: int, data: Iterable[int]) -> int:
    """Fold a sequence of bytes into a running CRC value."""
    for byte in data:
        crc = byte_update_crc(crc, byte)
    return crc


def make_crc(data: Iterable[int]) -> int:
    """Compute the CRC of a byte string."""
    return array_update_crc(INITIAL_CRC, data)