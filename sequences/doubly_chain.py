from __future__ import annotations
import logging
import sys
import weakref
from copy import deepcopy
from typing import Generic, Iterable, Iterator, List, Optional, TextIO, TypeVar

from .errors import IndexOutOfRange

T = TypeVar("T")

logger = logging.getLogger(__name__)


class _DNode(Generic[T]):
    """Node owning its successor and weakly referencing its predecessor.

    The back link is a ``weakref.ref``: it cannot extend the predecessor's
    lifetime, so forward ownership stays a simple path and dropping the
    head frees the whole chain without the cycle collector.
    """

    __slots__ = ("value", "next", "_prev", "__weakref__")

    def __init__(self, value: T) -> None:
        self.value = value
        self.next: Optional[_DNode[T]] = None
        self._prev: Optional[weakref.ref] = None

    @property
    def prev(self) -> Optional["_DNode[T]"]:
        """The predecessor, or None at the head (or if it is already gone)."""
        return self._prev() if self._prev is not None else None

    @prev.setter
    def prev(self, node: Optional["_DNode[T]"]) -> None:
        self._prev = weakref.ref(node) if node is not None else None

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"_DNode({self.value!r})"


class DoublyCursor(Generic[T]):
    """Cursor over a :class:`DoublyChain`; ``None`` marks the end.

    Iteration is forward-only. The cursor does not own the chain, and any
    insert, erase or reassignment invalidates it.
    """

    __slots__ = ("_node", "_pos", "_length")

    def __init__(self, node: Optional[_DNode[T]], pos: int, length: int) -> None:
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

    def advance(self) -> "DoublyCursor[T]":
        if self._node is not None:
            self._node = self._node.next
            self._pos += 1
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DoublyCursor):
            return NotImplemented
        return self._node is other._node

    def __ne__(self, other: object) -> bool:
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    __hash__ = None  # type: ignore[assignment]


class DoublyChain(Generic[T]):
    """Doubly-linked list with forward ownership and weak back links.

    Every splice updates the back link of the node on the "next" side in
    the same call, so callers never observe a half-linked chain. Teardown
    is iterative, as in :class:`~sequences.singly_chain.SinglyChain`.

    Not thread-safe.
    """

    __slots__ = ("_head", "_size")

    def __init__(self, it: Optional[Iterable[T]] = None) -> None:
        self._head: Optional[_DNode[T]] = None
        self._size = 0

        if it is not None:
            tail: Optional[_DNode[T]] = None
            for v in it:
                tail = self._link_after(tail, _DNode(v))

    @classmethod
    def moved(cls, other: "DoublyChain[T]") -> "DoublyChain[T]":
        """Build a new chain that takes over `other`'s nodes in O(1)."""
        out: DoublyChain[T] = cls()
        out.move_from(other)
        return out

    def __del__(self) -> None:
        if getattr(self, "_head", None) is not None:
            self._release()

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _link_after(self, tail: Optional[_DNode[T]], node: _DNode[T]) -> _DNode[T]:
        """Attach `node` after `tail` (or as head) and return it as the new tail."""
        if tail is None:
            self._head = node
        else:
            node.prev = tail
            tail.next = node
        self._size += 1
        return node

    def _release(self) -> None:
        released = self._size
        cur = self._head
        self._head = None
        self._size = 0
        while cur is not None:
            nxt = cur.next
            cur.next = None
            cur._prev = None
            cur = nxt
        if released:
            logger.debug("DoublyChain released %d nodes", released)

    def _node_at(self, idx: int) -> _DNode[T]:
        cur = self._head
        for _ in range(idx):
            cur = cur.next  # type: ignore[union-attr]
        return cur  # type: ignore[return-value]

    @staticmethod
    def _check_index(idx: int, size: int, operation: str) -> None:
        if idx < 0 or idx >= size:
            raise IndexOutOfRange(idx, size, operation)

    # -----------------------------
    # Core operations
    # -----------------------------
    def size(self) -> int:
        return self._size

    def push_back(self, value: T, *, copy: bool = False) -> None:
        """Append `value`; ``copy=True`` stores a deep copy."""
        node = _DNode(deepcopy(value) if copy else value)
        tail = self._node_at(self._size - 1) if self._head is not None else None
        self._link_after(tail, node)

    def insert(self, value: T, position: int, *, copy: bool = False) -> None:
        """Splice a new node in at `position`, fixing the successor's back link.

        Raises:
            IndexOutOfRange: unless ``0 <= position <= size()``.
        """
        if position < 0 or position > self._size:
            raise IndexOutOfRange(position, self._size, "insert")

        node = _DNode(deepcopy(value) if copy else value)
        if position == 0:
            if self._head is not None:
                self._head.prev = node
                node.next = self._head
            self._head = node
        else:
            prev = self._node_at(position - 1)
            node.next = prev.next
            if node.next is not None:
                node.next.prev = node
            node.prev = prev
            prev.next = node
        self._size += 1

    def erase(self, position: int) -> None:
        """Unlink the node at `position`, re-pointing its successor's back link.

        Raises:
            IndexOutOfRange: unless ``0 <= position < size()``.
        """
        self._check_index(position, self._size, "erase")

        if position == 0:
            doomed = self._head
            new_head = doomed.next  # type: ignore[union-attr]
            if new_head is not None:
                new_head.prev = None
            self._head = new_head
        else:
            prev = self._node_at(position - 1)
            doomed = prev.next
            prev.next = doomed.next  # type: ignore[union-attr]
            if prev.next is not None:
                prev.next.prev = prev
        doomed.next = None  # type: ignore[union-attr]
        doomed._prev = None  # type: ignore[union-attr]
        self._size -= 1

    def clear(self) -> None:
        self._release()

    def copy_from(self, other: "DoublyChain[T]", memo: Optional[dict] = None) -> "DoublyChain[T]":
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
        tail: Optional[_DNode[T]] = None
        cur = other._head
        while cur is not None:
            tail = self._link_after(tail, _DNode(deepcopy(cur.value, memo)))
            cur = cur.next
        logger.debug("DoublyChain copy-assigned %d nodes", self._size)
        return self

    def move_from(self, other: "DoublyChain[T]") -> "DoublyChain[T]":
        """Move-assignment: adopt `other`'s head in O(1) and leave it empty.

        Moving a chain into itself does nothing.
        """
        if other is self:
            return self

        self._release()
        self._head, other._head = other._head, None
        self._size, other._size = other._size, 0
        logger.debug("DoublyChain move-assigned %d nodes", self._size)
        return self

    def check_links(self) -> None:
        """Verify every successor's back link denotes its predecessor.

        Raises:
            AssertionError: naming the first position whose back link is wrong.
        """
        cur = self._head
        if cur is not None and cur.prev is not None:
            raise AssertionError("head has a back link")
        pos = 0
        while cur is not None and cur.next is not None:
            if cur.next.prev is not cur:
                raise AssertionError(f"back link of node {pos + 1} does not denote node {pos}")
            cur = cur.next
            pos += 1

    # -----------------------------
    # Iteration helpers
    # -----------------------------
    def begin(self) -> DoublyCursor[T]:
        return DoublyCursor(self._head, 0, self._size)

    def end(self) -> DoublyCursor[T]:
        return DoublyCursor(None, self._size, self._size)

    def print(self, file: Optional[TextIO] = None) -> None:
        """Write the values space-separated, then a newline."""
        out = sys.stdout if file is None else file
        out.write(" ".join(str(v) for v in self) + "\n")

    def to_py(self) -> List[T]:
        return list(self)

    # -----------------------------
    # Standard magic methods
    # -----------------------------
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

    def __copy__(self) -> "DoublyChain[T]":
        return type(self)().copy_from(self)

    def __deepcopy__(self, memo) -> "DoublyChain[T]":
        out = type(self)()
        memo[id(self)] = out
        return out.copy_from(self, memo)

    def __bool__(self) -> bool:  # pragma: no cover - trivial
        return self._size != 0

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"DoublyChain({self.to_py()!r})"
