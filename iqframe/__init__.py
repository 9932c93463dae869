"""Packet framing, CRC checking and packet extraction for a serial motor-control link."""

__version__ = "0.1.0"
__all__ = ["byte_queue", "crc", "packet_finder", "generic_interface"]