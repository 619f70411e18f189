"""Tests for MinHeap and MaxHeap.

Covers the array layout after inserts, removal from arbitrary positions,
the peek/pop surface and the node views computed from indices.
"""

import random

import pytest

from sortedtreelib import EmptyContainerError, MaxHeap, MinHeap
from sortedtreelib.testing import check_heap, check_invariants


def build(cls, values):
    heap = cls()
    for value in values:
        heap.insert(value)
        check_invariants(heap)
    return heap


class TestHeapLayout:
    """Backing array order after inserts."""

    def test_max_heap_array_order(self):
        heap = build(MaxHeap, [5, 3, 8, 1, 9])

        assert heap.to_array() == [9, 8, 5, 1, 3]
        assert heap.traverse() == [1, 3, 5, 8, 9]
        assert heap.peek() == 9

    def test_min_heap_array_order(self):
        heap = build(MinHeap, [5, 3, 8, 1, 9])

        assert heap.to_array() == [1, 3, 8, 5, 9]
        assert heap.traverse() == [1, 3, 5, 8, 9]
        assert heap.peek() == 1

    def test_duplicate_insert_is_ignored(self):
        heap = build(MaxHeap, [4, 7, 4, 7])

        assert heap.size() == 2
        assert heap.to_array() == [7, 4]

    def test_to_array_returns_copy(self):
        heap = build(MinHeap, [2, 1])
        array = heap.to_array()
        array.append(99)

        assert heap.size() == 2
        assert 99 not in heap


class TestHeapDelete:
    """Removing elements from the top and from the middle."""

    def test_delete_restores_order_when_moved_element_outranks_parent(self):
        heap = build(MaxHeap, [10, 5, 9, 1, 2, 8, 7])
        assert heap.to_array() == [10, 5, 9, 1, 2, 8, 7]

        # 7 moves into 1's slot under parent 5 and must sift up
        assert heap.delete(1) is True

        assert heap.to_array() == [10, 7, 9, 5, 2, 8]
        check_heap(heap)

    def test_delete_root(self):
        heap = build(MinHeap, [4, 2, 6, 1, 3])

        assert heap.delete(1) is True
        assert heap.peek() == 2
        check_invariants(heap)

    def test_delete_last_slot(self):
        heap = build(MinHeap, [1, 2, 3])

        assert heap.delete(3) is True
        assert heap.to_array() == [1, 2]

    def test_delete_missing_returns_false(self):
        heap = build(MaxHeap, [1, 2, 3])

        assert heap.delete(42) is False
        assert heap.delete(None) is False
        assert heap.size() == 3

    def test_delete_from_empty_returns_false(self):
        assert MinHeap().delete(1) is False


class TestPeekPop:
    """The priority-queue surface."""

    def test_pop_max_heap_yields_descending(self):
        values = [15, 3, 22, 8, 1, 19, 11]
        heap = build(MaxHeap, values)

        popped = []
        while heap:
            popped.append(heap.pop())
            check_invariants(heap)

        assert popped == sorted(values, reverse=True)

    def test_pop_min_heap_yields_ascending(self):
        values = [15, 3, 22, 8, 1, 19, 11]
        heap = build(MinHeap, values)

        popped = [heap.pop() for _ in range(len(values))]

        assert popped == sorted(values)
        assert heap.is_empty()

    def test_peek_empty_raises(self):
        with pytest.raises(EmptyContainerError):
            MaxHeap().peek()

    def test_pop_empty_raises_index_error(self):
        # EmptyContainerError is also an IndexError, like list.pop()
        with pytest.raises(IndexError):
            MinHeap().pop()


class TestHeapViews:
    """Views computed from backing list indices."""

    def test_root_view_matches_array(self):
        heap = build(MaxHeap, [5, 3, 8, 1, 9])
        root = heap.root_view()

        assert root.index == 0
        assert root.value() == 9
        assert root.left().value() == 8
        assert root.right().value() == 5
        assert root.left().left().value() == 1
        assert root.left().right().value() == 3
        assert root.right().left() is None
        assert root.color() == "null"

    def test_view_past_the_end_after_pop(self):
        heap = build(MinHeap, [1, 2, 3])
        last = heap.root_view().right()
        assert last.value() == 3

        heap.pop()

        with pytest.raises(IndexError):
            last.value()

    def test_empty_heap_has_no_view(self):
        assert MinHeap().root_view() is None

    def test_type_tags(self):
        assert MinHeap().type_name() == "MinHeap"
        assert MaxHeap().type_name() == "MaxHeap"
        assert MinHeap().display_color() == "lightblue"
        assert MaxHeap().display_color() == "lightcoral"


@pytest.mark.slow
@pytest.mark.parametrize("cls", [MinHeap, MaxHeap])
def test_random_operations_keep_heap_order(cls):
    """Random inserts and deletes against a set model."""
    rng = random.Random(1234)
    heap = cls()
    model = set()

    for _ in range(2000):
        value = rng.randrange(300)
        if rng.random() < 0.6:
            heap.insert(value)
            model.add(value)
        else:
            assert heap.delete(value) == (value in model)
            model.discard(value)
        check_invariants(heap)

    assert heap.traverse() == sorted(model)
