# iqframe

A small library with no dependencies for the byte framing used on a serial
link to a motor controller. It builds outgoing packets and keeps them in a
bounded transmit buffer. It also finds complete, CRC-checked packets in a
stream of received bytes.

## Packet format

Every packet on the wire looks like this:

| byte          | meaning                                          |
|---------------|--------------------------------------------------|
| `0x55`        | start byte                                       |
| length        | number of data bytes                             |
| type          | message type                                     |
| data...       | `length` bytes                                   |
| CRC low, high | CRC-16 over length, type and data, little-endian |

The CRC uses the polynomial 0x1021 and starts from `0xFFFF`. It is computed
one byte at a time.

## Installation

```
pip install iqframe
```

## Building packets

```python
from iqframe.packet_finder import form_packet

frame = form_packet(5, b"\x01\x02")
# b'\x55\x02\x05\x01\x02' followed by two CRC bytes
```

`form_packet` raises `ValueError` in two cases: the message type is outside
0–255, or the payload is longer than 255 bytes.

## Finding packets in received bytes

```python
from iqframe.packet_finder import PacketFinder, form_packet

finder = PacketFinder(buffer_size=256, max_data_size=64, index_queue_size=16)
finder.put_bytes(b"noise" + form_packet(5, b"\x01\x02"))

packet = finder.get_packet()   # type byte followed by data: b'\x05\x01\x02'
```

- `peek_packet()` returns the oldest complete packet without removing it, or
  `None` when no packet is waiting.
- `drop_packet()` removes the oldest packet. It returns `False` when there is
  none.
- `get_packet()` does both and returns the packet, or `None`.

Receiving works with these limits:

- The receive buffer is circular and holds at most 256 bytes.
- If `put_bytes()` cannot store every byte it was given, it drops the rest
  and raises `BufferOverflowError`. The bytes that were stored are still
  parsed.
- Frames whose length byte is larger than `max_data_size` are not accepted.
  A frame that fails the CRC check is not accepted either. In both cases the
  search for a start byte carries on just after the rejected one.
- At most `index_queue_size - 1` found packets can be waiting. Packets found
  while that many are waiting are discarded without notice.

## Talking to a device

`GenericInterface` combines a transmit buffer with a `PacketFinder`. It does
no I/O of its own, so you move bytes to and from your serial port yourself:

```python
from iqframe.generic_interface import GenericInterface
from iqframe.packet_finder import form_packet

com = GenericInterface(
    tx_buffer_size=256, rx_buffer_size=256, max_data_size=64, index_queue_size=16
)

com.send_packet(5, b"\x01\x02")   # queue a framed packet for transmission
outgoing = com.get_tx_bytes()     # all queued bytes, to write to the port

com.set_rx_bytes(form_packet(7, b"\x2a"))   # bytes read from the port
while (packet := com.peek_packet()) is not None:
    print(packet)                 # b'\x07\x2a'
    com.drop_packet()
```

`send_bytes()` queues raw bytes, and `send_packet()` queues a whole frame.
Either one raises `BufferOverflowError` if its bytes do not all fit in the
transmit buffer, and nothing is queued in that case. `get_tx_bytes()` returns
every pending byte and empties the buffer.

## Lower-level pieces

- `iqframe.crc` provides `make_crc(data)`, `byte_update_crc(crc, byte)` and
  `array_update_crc(crc, data)`.
- `iqframe.byte_queue.ByteQueue(size)` is a FIFO of byte values. It holds at
  most `size - 1` items. `put()` raises `OverflowError` when the queue is
  full and `ValueError` for a value outside 0–255. `get()` and `peek()` raise
  `IndexError` when the queue is empty.

## What this package does not do

- It does not open or configure serial ports.
- It has no command-line tool.
- It does not interpret message types or payloads. Mapping a packet to a
  particular controller setting, and decoding the reply, is left to your
  code.

## Running the tests

```
pip install -e ".[test]"
pytest
```