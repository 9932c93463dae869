from collections import deque

import pytest
from hypothesis import given
from hypothesis import strategies as st

from iqframe.byte_queue import ByteQueue


def test_fifo_order():
    q = ByteQueue(8)
    for value in (5, 6, 7):
        q.put(value)
    assert [q.get(), q.get(), q.get()] == [5, 6, 7]
    assert q.is_empty()


def test_capacity_is_one_less_than_size():
    q = ByteQueue(4)
    q.put(1)
    q.put(2)
    q.put(3)
    assert q.is_full()
    assert len(q) == q.capacity == 3
    with pytest.raises(OverflowError):
        q.put(4)
    assert len(q) == 3


def test_space_frees_after_get_and_wraps():
    q = ByteQueue(4)
    for value in (1, 2, 3):
        q.put(value)
    assert q.get() == 1
    q.put(4)
    assert [q.get(), q.get(), q.get()] == [2, 3, 4]


def test_get_and_peek_on_empty_raise():
    q = ByteQueue(4)
    with pytest.raises(IndexError):
        q.get()
    with pytest.raises(IndexError):
        q.peek()


def test_peek_does_not_remove():
    q = ByteQueue(4)
    q.put(9)
    assert q.peek() == 9
    assert q.peek() == 9
    assert len(q) == 1
    assert q.get() == 9


def test_put_rejects_non_byte_values():
    q = ByteQueue(4)
    with pytest.raises(ValueError):
        q.put(256)
    with pytest.raises(ValueError):
        q.put(-1)
    assert q.is_empty()


def test_size_one_is_both_full_and_empty():
    q = ByteQueue(1)
    assert q.is_empty()
    assert q.is_full()
    with pytest.raises(OverflowError):
        q.put(0)


def test_invalid_size():
    with pytest.raises(ValueError):
        ByteQueue(0)


@given(
    size=st.integers(min_value=1, max_value=10),
    ops=st.lists(st.one_of(st.integers(min_value=0, max_value=255), st.none()), max_size=60),
)
def test_behaves_like_bounded_fifo(size, ops):
    q = ByteQueue(size)
    model: deque[int] = deque()
    for op in ops:
        if op is None:
            if model:
                assert q.get() == model.popleft()
            else:
                with pytest.raises(IndexError):
                    q.get()
        elif len(model) < size - 1:
            q.put(op)
            model.append(op)
        else:
            with pytest.raises(OverflowError):
                q.put(op)
        assert len(q) == len(model)
        assert q.is_empty() == (not model)
        assert q.is_full() == (len(model) == size - 1)