import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from iqframe.generic_interface import GenericInterface
from iqframe.packet_finder import BufferOverflowError, form_packet


def test_send_packet_queues_a_frame():
    com = GenericInterface()
    com.send_packet(5, b"\x01\x02")
    assert com.get_tx_bytes() == form_packet(5, b"\x01\x02")


def test_get_tx_bytes_drains_buffer():
    com = GenericInterface()
    assert com.get_tx_bytes() == b""
    com.send_bytes(b"abc")
    com.send_bytes(b"de")
    assert com.get_tx_bytes() == b"abcde"
    assert com.get_tx_bytes() == b""


def test_send_bytes_overflow_leaves_buffer_unchanged():
    com = GenericInterface(tx_buffer_size=8)
    com.send_bytes(bytes(6))
    with pytest.raises(BufferOverflowError):
        com.send_bytes(bytes(3))
    assert com.get_tx_bytes() == bytes(6)


def test_send_packet_is_all_or_nothing():
    com = GenericInterface(tx_buffer_size=6)
    with pytest.raises(BufferOverflowError):
        com.send_packet(1, b"xy")
    assert com.get_tx_bytes() == b""


def test_send_packet_rejects_oversized_payload():
    com = GenericInterface(tx_buffer_size=1024)
    with pytest.raises(ValueError):
        com.send_packet(1, bytes(300))
    assert com.get_tx_bytes() == b""


def test_loopback_receives_sent_packet():
    com = GenericInterface()
    com.send_packet(12, b"volts")
    com.set_rx_bytes(com.get_tx_bytes())
    assert com.peek_packet() == b"\x0cvolts"
    assert com.drop_packet() is True
    assert com.peek_packet() is None
    assert com.drop_packet() is False


def test_empty_rx_is_ignored():
    com = GenericInterface()
    com.set_rx_bytes(b"")
    assert com.peek_packet() is None


def test_rx_overflow_is_reported():
    com = GenericInterface(rx_buffer_size=16)
    with pytest.raises(BufferOverflowError):
        com.set_rx_bytes(bytes(40))


@settings(max_examples=50)
@given(
    packets=st.lists(
        st.tuples(st.integers(min_value=0, max_value=255), st.binary(max_size=32)),
        min_size=1,
        max_size=5,
    )
)
def test_loopback_of_several_packets(packets):
    com = GenericInterface(tx_buffer_size=1024)
    for msg_type, data in packets:
        com.send_packet(msg_type, data)
    com.set_rx_bytes(com.get_tx_bytes())
    received = []
    while (packet := com.peek_packet()) is not None:
        received.append(packet)
        com.drop_packet()
    assert received == [bytes([msg_type]) + data for msg_type, data in packets]