"""Fixed-capacity FIFO queue of byte values."""

from __future__ import annotations

from collections import deque


class ByteQueue:
    """FIFO of byte values (0-255) holding at most ``size - 1`` items.

    The capacity matches a circular buffer of ``size`` slots in which one
    slot always stays free to tell a full buffer from an empty one.
    """

    def __init__(self, size: int = 256) -> None:
        if size < 1:
            raise ValueError(f"queue size must be at least 1, got {size}")
        self._capacity = size - 1
        self._items: deque[int] = deque()

    @property
    def capacity(self) -> int:
        """Largest number of items the queue can hold."""
        return self._capacity

    def is_full(self) -> bool:
        """Return True when no further item can be added."""
        return len(self._items) >= self._capacity

    def is_empty(self) -> bool:
        """Return True when the queue holds no items."""
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def get(self) -> int:
        """Remove and return the oldest item."""
        if not self._items:
            raise IndexError("get from an empty ByteQueue")
        return self._items.popleft()

    def peek(self) -> int:
        """Return the oldest item without removing it."""
        if not self._items:
            raise IndexError("peek into an empty ByteQueue")
        return self._items[0]

    def put(self, item: int) -> None:
        """Append a byte value; raise OverflowError when the queue is full."""
        if not 0 <= item <= 0xFF:
            raise ValueError(f"byte value out of range: {item}")
        if self.is_full():
            raise OverflowError("ByteQueue is full")
        self._items.append(item)