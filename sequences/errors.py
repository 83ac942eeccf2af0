"""Error types shared by the sequence containers."""

from __future__ import annotations


class IndexOutOfRange(IndexError):
    """Raised when a position falls outside an operation's valid range.

    Access and erase accept ``[0, length)``; insert accepts ``[0, length]``.
    The container is left untouched when this is raised.
    """

    def __init__(self, index: int, length: int, operation: str = "access") -> None:
        self.index = index
        self.length = length
        self.operation = operation
        super().__init__(f"{operation} index {index} out of range for length {length}")
