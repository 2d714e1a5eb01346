import pytest

from fmmnet.heap import Heap, HeapNode


def _drain(heap):
    out = []
    while len(heap):
        out.append(heap.pop())
    return out


def test_pops_in_value_order():
    heap = Heap()
    for index, value in [(1, 3.0), (2, 1.0), (3, 2.0), (4, 0.5)]:
        heap.push(index, value)
    values = [node.value for node in _drain(heap)]
    assert values == sorted(values)
    assert len(heap) == 0


def test_ties_broken_by_index():
    heap = Heap()
    heap.push(5, 1.0)
    heap.push(2, 1.0)
    heap.push(9, 1.0)
    assert [node.index for node in _drain(heap)] == [2, 5, 9]


def test_decrease_key_moves_node_to_top():
    heap = Heap()
    heap.push(1, 5.0)
    heap.push(2, 3.0)
    heap.decrease_key(1, 1.0)
    assert heap.top() == HeapNode(1, 1.0)
    assert len(heap) == 2
    assert [n.index for n in _drain(heap)] == [1, 2]


def test_contains_tracks_push_and_pop():
    heap = Heap()
    heap.push(7, 2.0)
    assert 7 in heap
    node = heap.pop()
    assert node.index == 7
    assert 7 not in heap


def test_top_does_not_remove():
    heap = Heap()
    heap.push(3, 4.0)
    assert heap.top() == heap.top()
    assert len(heap) == 1


def test_empty_heap_errors():
    heap = Heap()
    with pytest.raises(IndexError):
        heap.top()
    with pytest.raises(IndexError):
        heap.pop()


def test_decrease_key_unknown_node():
    heap = Heap()
    with pytest.raises(KeyError):
        heap.decrease_key(1, 0.0)


def test_heap_node_ordering():
    assert HeapNode(9, 1.0) < HeapNode(1, 2.0)
    assert HeapNode(1, 2.0) < HeapNode(2, 2.0)
    assert not HeapNode(2, 2.0) < HeapNode(1, 2.0)