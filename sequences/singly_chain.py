from __future__ import annotations
import logging
import sys
from copy import deepcopy
from typing import Generic, Iterable, Iterator, List, Optional, TextIO, TypeVar

from .errors import IndexOutOfRange

T = TypeVar("T")

logger = logging.getLogger(__name__)


class _SNode(Generic[T]):
    """A node that owns its successor; exactly one owner per node."""

    __slots__ = ("value", "next", "__weakref__")

    def __init__(self, value: T, next: Optional["_SNode[T]"] = None) -> None:
        self.value = value
        self.next = next


class ChainCursor(Generic[T]):
    """Forward cursor over a :class:`SinglyChain`.

    Holds the current node without owning the chain; ``None`` is the end
    sentinel. The position and the chain length at creation are kept only
    for error reports. Inserting, erasing or reassigning the chain
    invalidates it.
    """

    __slots__ = ("_node", "_pos", "_length")

    def __init__(self, node: Optional[_SNode[T]], pos: int, length: int) -> None:
        self._node = node
        self._pos = pos
        self._length = length

    def get(self) -> T:
        if self._node is None:
            raise IndexOutOfRange(self._pos, self._length, "dereference")
        return self._node.value

    def set(self, value: T) -> None:
        if self._node is None:
            raise IndexOutOfRange(self._pos, self._length, "dereference")
        self._node.value = value

    def advance(self) -> "ChainCursor[T]":
        if self._node is not None:
            self._node = self._node.next
            self._pos += 1
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChainCursor):
            return NotImplemented
        return self._node is other._node

    def __ne__(self, other: object) -> bool:
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    __hash__ = None  # type: ignore[assignment]


class SinglyChain(Generic[T]):
    """Singly-linked list where every node is owned by its predecessor.

    The chain holds the only reference to the head; each node holds the
    only reference to its successor, so the ownership graph is a simple
    path. Traversal inside an operation uses local references that never
    outlive the operation. Teardown walks the chain and unlinks nodes one
    at a time, so long chains never recurse during destruction.

    Not thread-safe.
    """

    __slots__ = ("_head", "_size")

    def __init__(self, it: Optional[Iterable[T]] = None) -> None:
        self._head: Optional[_SNode[T]] = None
        self._size = 0

        if it is not None:
            tail: Optional[_SNode[T]] = None
            for v in it:
                node = _SNode(v)
                if tail is None:
                    self._head = node
                else:
                    tail.next = node
                tail = node
                self._size += 1

    @classmethod
    def moved(cls, other: "SinglyChain[T]") -> "SinglyChain[T]":
        """Build a new chain that takes over `other`'s nodes in O(1)."""
        out: SinglyChain[T] = cls()
        out.move_from(other)
        return out

    def __del__(self) -> None:
        # May run on a half-built instance if __init__ raised.
        if getattr(self, "_head", None) is not None:
            self._release()

    # ------------------------------- internals -------------------------------

    def _release(self) -> None:
        """Drop every node iteratively, cutting each link before moving on."""
        released = self._size
        cur = self._head
        self._head = None
        self._size = 0
        while cur is not None:
            cur.next, cur = None, cur.next
        if released:
            logger.debug("SinglyChain released %d nodes", released)

    def _node_at(self, idx: int) -> _SNode[T]:
        """Return the node at `idx`; caller has already bounds-checked."""
        cur = self._head
        for _ in range(idx):
            cur = cur.next  # type: ignore[union-attr]
        return cur  # type: ignore[return-value]

    @staticmethod
    def _check_index(idx: int, size: int, operation: str) -> None:
        if idx < 0 or idx >= size:
            raise IndexOutOfRange(idx, size, operation)

    # --------------------------------- API -----------------------------------

    def size(self) -> int:
        return self._size

    def push_back(self, value: T, *, copy: bool = False) -> None:
        """Append `value` after the last node. O(n) walk to the tail.

        ``copy=True`` stores a deep copy; otherwise the object is handed over.
        """
        node = _SNode(deepcopy(value) if copy else value)
        if self._head is None:
            self._head = node
        else:
            self._node_at(self._size - 1).next = node
        self._size += 1

    def insert(self, value: T, position: int, *, copy: bool = False) -> None:
        """Splice a new node in so it sits at `position`.

        Raises:
            IndexOutOfRange: unless ``0 <= position <= size()``.
        """
        if position < 0 or position > self._size:
            raise IndexOutOfRange(position, self._size, "insert")

        node = _SNode(deepcopy(value) if copy else value)
        if position == 0:
            # New node takes over the old head.
            node.next = self._head
            self._head = node
        else:
            prev = self._node_at(position - 1)
            node.next = prev.next
            prev.next = node
        self._size += 1

    def erase(self, position: int) -> None:
        """Unlink and release the node at `position`.

        Raises:
            IndexOutOfRange: unless ``0 <= position < size()``.
        """
        self._check_index(position, self._size, "erase")

        if position == 0:
            doomed = self._head
            self._head = doomed.next  # type: ignore[union-attr]
        else:
            prev = self._node_at(position - 1)
            doomed = prev.next
            prev.next = doomed.next  # type: ignore[union-attr]
        doomed.next = None  # type: ignore[union-attr]
        self._size -= 1

    def clear(self) -> None:
        self._release()

    def copy_from(self, other: "SinglyChain[T]", memo: Optional[dict] = None) -> "SinglyChain[T]":
        """Copy-assignment: release current nodes, then deep-copy `other`'s.

        Elements shared within `other` stay shared in the copy; `memo` is the
        `copy.deepcopy` memo when called from `__deepcopy__`.

        Assigning a chain to itself does nothing.
        """
        if other is self:
            return self

        self._release()
        if memo is None:
            memo = {}
        tail: Optional[_SNode[T]] = None
        cur = other._head
        while cur is not None:
            node = _SNode(deepcopy(cur.value, memo))
            if tail is None:
                self._head = node
            else:
                tail.next = node
            tail = node
            self._size += 1
            cur = cur.next
        logger.debug("SinglyChain copy-assigned %d nodes", self._size)
        return self

    def move_from(self, other: "SinglyChain[T]") -> "SinglyChain[T]":
        """Move-assignment: adopt `other`'s head in O(1) and leave it empty.

        Moving a chain into itself does nothing.
        """
        if other is self:
            return self

        self._release()
        self._head, other._head = other._head, None
        self._size, other._size = other._size, 0
        logger.debug("SinglyChain move-assigned %d nodes", self._size)
        return self

    def begin(self) -> ChainCursor[T]:
        return ChainCursor(self._head, 0, self._size)

    def end(self) -> ChainCursor[T]:
        return ChainCursor(None, self._size, self._size)

    def print(self, file: Optional[TextIO] = None) -> None:
        """Write the values space-separated, then a newline."""
        out = sys.stdout if file is None else file
        out.write(" ".join(str(v) for v in self) + "\n")

    def to_py(self) -> List[T]:
        return list(self)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        n = self._head
        while n is not None:
            yield n.value
            n = n.next

    def __getitem__(self, idx: int) -> T:
        self._check_index(idx, self._size, "access")
        return self._node_at(idx).value

    def __setitem__(self, idx: int, value: T) -> None:
        self._check_index(idx, self._size, "access")
        self._node_at(idx).value = value

    def __copy__(self) -> "SinglyChain[T]":
        return type(self)().copy_from(self)

    def __deepcopy__(self, memo) -> "SinglyChain[T]":
        out = type(self)()
        memo[id(self)] = out
        return out.copy_from(self, memo)

    def __bool__(self) -> bool:  # pragma: no cover - trivial
        return self._size != 0

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"SinglyChain({self.to_py()!r})"
