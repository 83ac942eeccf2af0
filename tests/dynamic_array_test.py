import os
import sys

import pytest

# Ensure we can import from the project
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sequences.dynamic_array import DynamicArray
from sequences.errors import IndexOutOfRange


def test_capacity_doubles_only_on_overflow():
    a = DynamicArray()
    assert a.capacity() == 1
    seen = []
    for i in range(9):
        a.push_back(i)
        seen.append(a.capacity())
    assert seen == [1, 2, 4, 4, 8, 8, 8, 8, 16]
    assert a.to_py() == list(range(9))


def test_insert_grows_and_shifts_right():
    a = DynamicArray([1, 2, 3, 4])
    assert a.capacity() == 4
    a.insert(0, 0)
    assert a.capacity() == 8
    assert a.to_py() == [0, 1, 2, 3, 4]
    a.insert(9, 2)
    assert a.to_py() == [0, 1, 9, 2, 3, 4]


def test_erase_shifts_left_and_drops_stale_slot():
    a = DynamicArray(["a", "b", "c", "d"])
    a.erase(1)
    assert a.to_py() == ["a", "c", "d"]
    assert a.capacity() == 4
    assert a._buf[3] is None


def test_failed_insert_does_not_grow():
    a = DynamicArray([1, 2])
    with pytest.raises(IndexOutOfRange):
        a.insert(3, 5)
    assert a.capacity() == 2
    assert a.to_py() == [1, 2]


def test_moved_from_array_has_no_buffer_and_recovers():
    a = DynamicArray([1, 2, 3])
    buf = a._buf
    b = DynamicArray.moved(a)
    assert b._buf is buf
    assert b.capacity() == 4
    assert a.capacity() == 0
    assert a._buf is None
    assert a.to_py() == []

    a.push_back(7)
    assert a.capacity() == 1
    assert a.to_py() == [7]


def test_copy_from_allocates_fresh_buffer_of_source_capacity():
    src = DynamicArray(range(5))
    dst = DynamicArray()
    dst.copy_from(src)
    assert dst._buf is not src._buf
    assert dst.capacity() == src.capacity() == 8
    assert dst.to_py() == [0, 1, 2, 3, 4]


def test_copy_from_moved_from_source():
    src = DynamicArray([1])
    DynamicArray.moved(src)
    dst = DynamicArray([5, 6])
    dst.copy_from(src)
    assert dst.size() == 0
    assert dst.capacity() == 1
    dst.push_back(1)
    assert dst.to_py() == [1]


def test_cursor_walks_live_slots_only():
    a = DynamicArray()
    for i in range(3):
        a.push_back(i)
    # capacity is 4 here; the cursor must stop at length, not capacity
    out = []
    it = a.begin()
    while it != a.end():
        out.append(it.get())
        it.advance()
    assert out == [0, 1, 2]


def test_clear_keeps_capacity():
    a = DynamicArray(range(6))
    a.clear()
    assert a.size() == 0
    assert a.capacity() == 8
    a.push_back(1)
    assert a.to_py() == [1]


def test_resize_refuses_to_drop_elements():
    a = DynamicArray(range(4))
    with pytest.raises(ValueError):
        a._resize(2)
