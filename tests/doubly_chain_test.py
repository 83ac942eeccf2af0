import gc
import os
import random
import sys
import weakref

import pytest

# Ensure we can import from the project
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sequences.doubly_chain import DoublyChain
from sequences.errors import IndexOutOfRange


def node_refs(chain):
    refs = []
    n = chain._head
    while n is not None:
        refs.append(weakref.ref(n))
        n = n.next
    return refs


def back_values(chain):
    """Walk to the tail, then follow back links to the head."""
    n = chain._head
    if n is None:
        return []
    while n.next is not None:
        n = n.next
    out = []
    while n is not None:
        out.append(n.value)
        n = n.prev
    return out


def test_back_links_are_weak_references():
    d = DoublyChain([1, 2])
    second = d._head.next
    assert isinstance(second._prev, weakref.ref)
    assert second.prev is d._head
    assert d._head.prev is None


def test_back_links_mirror_forward_order():
    d = DoublyChain(range(6))
    d.erase(0)
    d.insert(-1, 0)
    d.insert(99, 3)
    d.erase(d.size() - 1)
    d.check_links()
    assert back_values(d) == list(reversed(d.to_py()))


def test_head_insert_and_erase_fix_back_links():
    d = DoublyChain([2])
    d.insert(1, 0)
    assert d._head.next.prev is d._head
    d.erase(0)
    assert d._head.value == 2
    assert d._head.prev is None
    d.check_links()


def test_links_stay_consistent_under_random_ops():
    rng = random.Random(7)
    d = DoublyChain()
    for step in range(300):
        if d.size() and rng.random() < 0.45:
            d.erase(rng.randrange(d.size()))
        else:
            d.insert(step, rng.randint(0, d.size()))
        d.check_links()
    assert back_values(d) == list(reversed(d.to_py()))


def test_dropping_chain_frees_nodes_without_collector():
    gc.disable()
    try:
        d = DoublyChain(range(100))
        refs = node_refs(d)
        del d
        assert all(r() is None for r in refs)
    finally:
        gc.enable()


def test_erased_node_is_released():
    d = DoublyChain(["a", "b", "c"])
    refs = node_refs(d)
    d.erase(1)
    assert refs[1]() is None
    assert d._head.next.prev is d._head


def test_check_links_reports_broken_back_link():
    d = DoublyChain([1, 2, 3])
    d._head.next.next.prev = d._head
    with pytest.raises(AssertionError, match="node 2"):
        d.check_links()


def test_copy_from_rebuilds_back_links():
    src = DoublyChain([1, 2, 3])
    dst = DoublyChain([0])
    dst.copy_from(src)
    dst.check_links()
    assert back_values(dst) == [3, 2, 1]
    assert dst._head is not src._head


def test_moved_chain_keeps_links():
    src = DoublyChain([1, 2, 3])
    dst = DoublyChain.moved(src)
    dst.check_links()
    assert src.size() == 0
    assert dst.to_py() == [1, 2, 3]


def test_long_chain_teardown_is_iterative():
    d = DoublyChain(range(200000))
    d.clear()
    assert d.size() == 0
    d = DoublyChain(range(200000))
    del d


def test_out_of_range_does_not_touch_links():
    d = DoublyChain([1, 2])
    with pytest.raises(IndexOutOfRange):
        d.insert(3, 3)
    with pytest.raises(IndexOutOfRange):
        d.erase(2)
    d.check_links()
    assert d.to_py() == [1, 2]
