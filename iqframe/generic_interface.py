"""Hardware-free communication interface: packets in, packets out, as bytes."""

from __future__ import annotations

from .packet_finder import BufferOverflowError, PacketFinder, form_packet


class GenericInterface:
    """Queues outgoing frames and parses incoming bytes into packets.

    The caller moves bytes to and from the actual link: outgoing data is
    collected with get_tx_bytes and received data is handed in with
    set_rx_bytes.
    """

    def __init__(
        self,
        tx_buffer_size: int = 256,
        rx_buffer_size: int = 256,
        max_data_size: int = 64,
        index_queue_size: int = 16,
    ) -> None:
        if tx_buffer_size < 0:
            raise ValueError(f"transmit buffer size must not be negative, got {tx_buffer_size}")
        self._finder = PacketFinder(rx_buffer_size, max_data_size, index_queue_size)
        self._tx_capacity = tx_buffer_size
        self._tx = bytearray()

    def set_rx_bytes(self, data: bytes) -> None:
        """Hand received bytes to the packet parser."""
        received = bytes(data)
        if received:
            self._finder.put_bytes(received)

    def peek_packet(self) -> bytes | None:
        """Return the oldest received packet (type byte then data), or None."""
        return self._finder.peek_packet()

    def drop_packet(self) -> bool:
        """Discard the oldest received packet; return False if there was none."""
        return self._finder.drop_packet()

    def send_packet(self, msg_type: int, data: bytes = b"") -> None:
        """Frame ``data`` and queue the whole frame for transmission."""
        self.send_bytes(form_packet(msg_type, data))

    def send_bytes(self, data: bytes) -> None:
        """Queue raw bytes; nothing is queued if they do not all fit."""
        chunk = bytes(data)
        free = self._tx_capacity - len(self._tx)
        if len(chunk) > free:
            raise BufferOverflowError(
                f"transmit buffer full: {len(chunk)} bytes requested, {free} free"
            )
        self._tx += chunk

    def get_tx_bytes(self) -> bytes:
        """Return and remove every queued outgoing byte."""
        pending = bytes(self._tx)
        self._tx.clear()
        return pending