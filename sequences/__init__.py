from .errors import IndexOutOfRange
from .dynamic_array import DynamicArray
from .singly_chain import SinglyChain
from .doubly_chain import DoublyChain

__all__ = [
    "IndexOutOfRange",
    "DynamicArray",
    "SinglyChain",
    "DoublyChain",
]
