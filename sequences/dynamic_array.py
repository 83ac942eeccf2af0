from __future__ import annotations
import ctypes
import logging
import sys
from copy import deepcopy
from typing import Generic, Iterable, Iterator, List, Optional, TextIO, TypeVar

from .errors import IndexOutOfRange

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ArrayCursor(Generic[T]):
    """Forward cursor over a :class:`DynamicArray` buffer.

    The cursor remembers a buffer and a slot index; it does not own the
    array. Any growth, insert, erase or reassignment of the array
    invalidates it, and using it afterwards is a precondition violation
    that is not detected.
    """

    __slots__ = ("_buf", "_pos", "_end")

    def __init__(self, buf, pos: int, end: int) -> None:
        self._buf = buf
        self._pos = pos
        self._end = end

    def get(self) -> T:
        if self._pos >= self._end:
            raise IndexOutOfRange(self._pos, self._end, "dereference")
        return self._buf[self._pos]  # type: ignore[index]

    def set(self, value: T) -> None:
        if self._pos >= self._end:
            raise IndexOutOfRange(self._pos, self._end, "dereference")
        self._buf[self._pos] = value  # type: ignore[index]

    def advance(self) -> "ArrayCursor[T]":
        """Step to the next slot (no-op at the end sentinel)."""
        if self._pos < self._end:
            self._pos += 1
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArrayCursor):
            return NotImplemented
        return self._buf is other._buf and self._pos == other._pos

    def __ne__(self, other: object) -> bool:
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    __hash__ = None  # type: ignore[assignment]


class DynamicArray(Generic[T]):
    """Growable array over an exclusively owned contiguous buffer.

    Implementation notes
    --------------------
    • Storage is a ctypes array of `py_object` that only this instance
      references; moving hands the buffer over, copying builds a new one.
    • Capacity doubles lazily, on the write that would overflow.
    • Indices are never normalized: ``-1`` is out of range, not "last".
    • Not thread-safe. Concurrent mutation of one instance is a data race.
    """

    __slots__ = ("_buf", "_size", "_capacity")

    # Capacity of a freshly constructed array.
    _INITIAL_CAPACITY = 1
    _GROWTH_FACTOR = 2

    def __init__(self, it: Optional[Iterable[T]] = None) -> None:
        self._capacity = self._INITIAL_CAPACITY
        self._buf = self._make_array(self._capacity)
        self._size = 0

        if it is not None:
            for v in it:
                self.push_back(v)

    @classmethod
    def moved(cls, other: "DynamicArray[T]") -> "DynamicArray[T]":
        """Build a new array that takes over `other`'s buffer in O(1)."""
        out: DynamicArray[T] = cls()
        out.move_from(other)
        return out

    # ------------------------------- internals -------------------------------

    @staticmethod
    def _make_array(capacity: int):
        """Allocate a raw ctypes array of length `capacity` to hold py_object."""
        if capacity <= 0:
            capacity = 1  # never allow a zero-length buffer
        return (capacity * ctypes.py_object)()

    def _resize(self, new_capacity: int) -> None:
        """Move the live slots into a fresh buffer of `new_capacity` slots.

        The old buffer is dropped only after every element has been copied.
        """
        if new_capacity < self._size:
            raise ValueError("new capacity must be >= size")

        new_buf = self._make_array(new_capacity)
        for i in range(self._size):
            new_buf[i] = self._buf[i]

        logger.debug("DynamicArray grow %d -> %d (length %d)", self._capacity, new_capacity, self._size)
        self._buf = new_buf
        self._capacity = new_capacity

    def _grow_if_full(self) -> None:
        if self._size >= self._capacity:
            if self._capacity > 0:
                self._resize(self._capacity * self._GROWTH_FACTOR)
            else:
                # moved-from instance: no buffer at all
                self._resize(self._INITIAL_CAPACITY)

    def _release(self) -> None:
        self._buf = None
        self._capacity = 0
        self._size = 0

    @staticmethod
    def _check_index(idx: int, size: int, operation: str) -> None:
        if idx < 0 or idx >= size:
            raise IndexOutOfRange(idx, size, operation)

    # --------------------------------- API -----------------------------------

    def size(self) -> int:
        """Number of stored elements. O(1)."""
        return self._size

    def capacity(self) -> int:
        """Allocated slot count (0 only for a moved-from array)."""
        return self._capacity

    def push_back(self, value: T, *, copy: bool = False) -> None:
        """Append `value` to the end. Amortized O(1).

        By default the caller's object is handed over as-is; pass
        ``copy=True`` to store an independent deep copy instead.
        """
        if copy:
            value = deepcopy(value)
        self._grow_if_full()
        self._buf[self._size] = value
        self._size += 1

    def insert(self, value: T, position: int, *, copy: bool = False) -> None:
        """Insert `value` so that it ends up at `position`. O(n).

        Raises:
            IndexOutOfRange: unless ``0 <= position <= size()``.
        """
        if position < 0 or position > self._size:
            raise IndexOutOfRange(position, self._size, "insert")
        if copy:
            value = deepcopy(value)

        self._grow_if_full()

        # Walk from the tail so no slot is overwritten before it moves.
        for i in range(self._size, position, -1):
            self._buf[i] = self._buf[i - 1]

        self._buf[position] = value
        self._size += 1

    def erase(self, position: int) -> None:
        """Remove the element at `position`. O(n - position).

        Raises:
            IndexOutOfRange: unless ``0 <= position < size()``.
        """
        self._check_index(position, self._size, "erase")

        for i in range(position, self._size - 1):
            self._buf[i] = self._buf[i + 1]

        # The vacated tail slot is unreachable; drop its reference anyway.
        self._buf[self._size - 1] = None
        self._size -= 1

    def clear(self) -> None:
        """Remove all items. Keeps capacity."""
        for i in range(self._size):
            self._buf[i] = None
        self._size = 0

    def copy_from(self, other: "DynamicArray[T]", memo: Optional[dict] = None) -> "DynamicArray[T]":
        """Copy-assignment: replace contents with deep copies of `other`'s.

        Elements shared within `other` stay shared in the copy; `memo` is the
        `copy.deepcopy` memo when called from `__deepcopy__`.

        The current buffer is released before the new one is adopted.
        Assigning an array to itself does nothing.
        """
        if other is self:
            return self

        self._release()
        if memo is None:
            memo = {}
        capacity = other._capacity if other._capacity > 0 else self._INITIAL_CAPACITY
        new_buf = self._make_array(capacity)
        for i in range(other._size):
            new_buf[i] = deepcopy(other._buf[i], memo)

        self._buf = new_buf
        self._capacity = capacity
        self._size = other._size
        logger.debug("DynamicArray copy-assigned %d elements", self._size)
        return self

    def move_from(self, other: "DynamicArray[T]") -> "DynamicArray[T]":
        """Move-assignment: take `other`'s buffer in O(1) and leave it empty.

        Moving an array into itself does nothing.
        """
        if other is self:
            return self

        self._buf = other._buf
        self._capacity = other._capacity
        self._size = other._size
        other._release()
        logger.debug("DynamicArray move-assigned %d elements", self._size)
        return self

    def begin(self) -> ArrayCursor[T]:
        return ArrayCursor(self._buf, 0, self._size)

    def end(self) -> ArrayCursor[T]:
        return ArrayCursor(self._buf, self._size, self._size)

    def print(self, file: Optional[TextIO] = None) -> None:
        """Write the elements space-separated, then a newline (stdout by default)."""
        out = sys.stdout if file is None else file
        out.write(" ".join(str(v) for v in self) + "\n")

    def to_py(self) -> List[T]:
        """Convert to a plain Python `list`."""
        return [self._buf[i] for i in range(self._size)]

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        """Yield items from left to right."""
        for i in range(self._size):
            yield self._buf[i]  # type: ignore[misc]

    def __getitem__(self, idx: int) -> T:
        self._check_index(idx, self._size, "access")
        return self._buf[idx]  # type: ignore[return-value]

    def __setitem__(self, idx: int, value: T) -> None:
        self._check_index(idx, self._size, "access")
        self._buf[idx] = value

    def __copy__(self) -> "DynamicArray[T]":
        return type(self)().copy_from(self)

    def __deepcopy__(self, memo) -> "DynamicArray[T]":
        out = type(self)()
        memo[id(self)] = out
        return out.copy_from(self, memo)

    def __bool__(self) -> bool:  # pragma: no cover - trivial
        return self._size != 0

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"DynamicArray({self.to_py()!r})"
