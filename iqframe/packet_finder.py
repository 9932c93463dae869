"""Framing of packets and a streaming parser that finds them in a byte stream.

A frame on the wire is::

    0x55, length, type, data[length], crc_low, crc_high

where the CRC covers the length, type and data bytes.
"""

from __future__ import annotations

from contextlib import suppress
from enum import Enum, auto

from .byte_queue import ByteQueue
from .crc import byte_update_crc, make_crc

START_BYTE = 0x55


class BufferOverflowError(Exception):
    """Raised when bytes do not fit a buffer and some of them are lost."""


class _State(Enum):
    START = auto()
    LENGTH = auto()
    TYPE = auto()
    DATA = auto()
    CRC_LOW = auto()
    CRC_HIGH = auto()


def form_packet(msg_type: int, data: bytes = b"") -> bytes:
    """Build a complete frame carrying ``data`` with the given message type."""
    payload = bytes(data)
    if not 0 <= msg_type <= 0xFF:
        raise ValueError(f"message type out of range: {msg_type}")
    if len(payload) > 0xFF:
        raise ValueError(f"payload too long for one packet: {len(payload)} bytes")
    body = bytes((len(payload), msg_type)) + payload
    return bytes((START_BYTE,)) + body + make_crc(body).to_bytes(2, "little")


class PacketFinder:
    """Collects incoming bytes in a circular buffer and extracts valid packets.

    Found packets are returned as the type byte followed by the data bytes.
    """

    def __init__(
        self,
        buffer_size: int = 256,
        max_data_size: int = 64,
        index_queue_size: int = 16,
    ) -> None:
        if not 1 <= buffer_size <= 256:
            raise ValueError(f"buffer size must be between 1 and 256, got {buffer_size}")
        if not 0 <= max_data_size <= 0xFF:
            raise ValueError(f"max data size must be between 0 and 255, got {max_data_size}")
        self._size = buffer_size
        self._max_data_size = max_data_size
        self._buffer = bytearray(buffer_size)
        self._indices = ByteQueue(index_queue_size)

        self._state = _State.START
        self._parse_index = 0
        self._packet_start = 0  # index of the length byte of the working packet
        self._received_length = 0
        self._data_bytes = 0
        self._expected_crc = 0
        self._received_crc = 0

        self._start = 0  # first occupied byte
        self._end = 0  # byte following the last occupied byte

    def put_bytes(self, data: bytes) -> None:
        """Store incoming bytes and parse them.

        Bytes that do not fit are dropped; the parser still runs over the
        ones that were stored, then BufferOverflowError is raised.
        """
        incoming = bytes(data)
        self._flush_unused()
        stored = self._store(incoming)
        self._parse()
        if stored < len(incoming):
            raise BufferOverflowError(
                f"receive buffer full: dropped {len(incoming) - stored} of {len(incoming)} bytes"
            )

    def peek_packet(self) -> bytes | None:
        """Return the oldest found packet without removing it, or None."""
        if self._indices.is_empty():
            return None
        start = self._indices.peek()
        return self._read((start + 1) % self._size, self._buffer[start] + 1)

    def drop_packet(self) -> bool:
        """Discard the oldest found packet; return False if there was none."""
        if self._indices.is_empty():
            return False
        prev_start = self._indices.get()
        prev_return = (prev_start + 1) % self._size
        prev_length = self._buffer[prev_start] + 1

        if not self._indices.is_empty():
            self._start = self._indices.peek()
        elif prev_return + prev_length <= self._size:
            self._start = (prev_return + prev_length) % self._size
        else:
            self._start = prev_length - (self._size - prev_return)
        return True

    def get_packet(self) -> bytes | None:
        """Remove and return the oldest found packet, or None."""
        packet = self.peek_packet()
        if packet is not None:
            self.drop_packet()
        return packet

    def _read(self, index: int, length: int) -> bytes:
        chunk = bytes(self._buffer[index:index + length])
        if len(chunk) < length:
            chunk += bytes(self._buffer[:length - len(chunk)])
        return chunk

    def _flush_unused(self) -> None:
        if self._indices.is_empty():
            self._start = self._packet_start
        else:
            self._start = self._indices.peek()

    def _store(self, data: bytes) -> int:
        count = len(data)
        buf = self._buffer
        if self._end < self._start:
            copy = min(self._start - self._end - 1, count)
            buf[self._end:self._end + copy] = data[:copy]
            self._end += copy
            return copy

        # Free space may be split between the tail and the head of the buffer.
        current_end = self._size - 1 if self._start == 0 else self._size
        end_space = current_end - self._end
        start_space = 0 if self._start == 0 else self._start - 1
        first = min(end_space, count)
        second = min(start_space, count - first)

        buf[self._end:self._end + first] = data[:first]
        if second == 0:
            self._end += first
            if self._end > self._size - 1:
                self._end = 0
        else:
            buf[:second] = data[first:first + second]
            self._end = second
        return first + second

    def _advance(self) -> None:
        self._parse_index = (self._parse_index + 1) % self._size

    def _parse(self) -> None:
        buf = self._buffer
        while self._parse_index != self._end:
            byte = buf[self._parse_index]
            state = self._state

            if state is _State.START:
                if byte == START_BYTE:
                    self._state = _State.LENGTH
                self._advance()
                self._packet_start = self._parse_index

            elif state is _State.LENGTH:
                self._packet_start = self._parse_index
                if byte <= self._max_data_size:
                    self._received_length = byte
                    self._expected_crc = make_crc((byte,))
                    self._state = _State.TYPE
                    self._advance()
                else:
                    self._state = _State.START

            elif state is _State.TYPE:
                self._expected_crc = byte_update_crc(self._expected_crc, byte)
                self._state = _State.DATA if self._received_length > 0 else _State.CRC_LOW
                self._data_bytes = 0
                self._advance()

            elif state is _State.DATA:
                self._expected_crc = byte_update_crc(self._expected_crc, byte)
                self._data_bytes += 1
                if self._data_bytes >= self._received_length:
                    self._state = _State.CRC_LOW
                self._advance()

            elif state is _State.CRC_LOW:
                self._received_crc = byte
                self._state = _State.CRC_HIGH
                self._advance()

            else:
                self._received_crc += 256 * byte
                if self._expected_crc == self._received_crc:
                    # A full index queue loses the packet silently.
                    with suppress(OverflowError):
                        self._indices.put(self._packet_start)
                    self._advance()
                else:
                    # Resume the search just after the presumed start byte.
                    self._parse_index = self._packet_start
                self._state = _State.START