"""Binary heaps for SortedTreeLib.

A heap is a complete binary tree stored densely in a list: the node at
index i has children at 2i+1 and 2i+2 and its parent at (i-1)//2. Every
node outranks its children, where "outranks" means ">=" in a max-heap
and "<=" in a min-heap.

Heaps only order along root-to-leaf paths, so searching is a linear scan
and ``traverse`` sorts a copy of the storage.
"""

from abc import abstractmethod
from typing import Any, List, Optional

from ..config import StructureKind, TreeConfig
from ..core.container import OrderedContainer
from ..core.errors import EmptyContainerError
from ..core.view import NodeView


class HeapNodeView(NodeView):
    """NodeView over one slot of a heap's backing list.

    Heaps have no linked nodes, so views are computed from indices on
    demand. A view reads the live backing list, so mutating the heap
    invalidates views taken before it. A stale view may return a
    different value or raise IndexError.
    """

    def __init__(self, storage: List[Any], index: int):
        self._storage = storage
        self._index = index

    @property
    def index(self) -> int:
        """Position of this node in the backing list."""
        return self._index

    def value(self) -> Any:
        return self._storage[self._index]

    def left(self) -> Optional['HeapNodeView']:
        child = 2 * self._index + 1
        return HeapNodeView(self._storage, child) if child < len(self._storage) else None

    def right(self) -> Optional['HeapNodeView']:
        child = 2 * self._index + 2
        return HeapNodeView(self._storage, child) if child < len(self._storage) else None

    def color(self) -> str:
        return "null"


class Heap(OrderedContainer):
    """Array-backed binary heap.

    Subclasses decide the ordering by implementing ``_outranks``.
    """

    def __init__(self, config: Optional[TreeConfig] = None):
        super().__init__(config)
        self._heap: List[Any] = []

    @abstractmethod
    def _outranks(self, a: Any, b: Any) -> bool:
        """Return True if ``a`` must sit above ``b``."""
        pass

    # Contract operations

    def insert(self, value: Any) -> None:
        self._require_value(value)
        if value in self._heap:
            return

        self._heap.append(value)
        self._sift_up(len(self._heap) - 1)
        self._after_mutation()

    def delete(self, value: Any) -> bool:
        if not self._heap or value is None:
            return False

        try:
            index = self._heap.index(value)
        except ValueError:
            return False

        self._remove_at(index)
        self._after_mutation()
        return True

    def contains(self, value: Any) -> bool:
        if value is None:
            return False
        return value in self._heap

    def clear(self) -> None:
        self._heap.clear()

    def size(self) -> int:
        return len(self._heap)

    def traverse(self) -> List[Any]:
        return sorted(self._heap)

    def root_view(self) -> Optional[HeapNodeView]:
        """View of the top element, valid until the heap is next mutated."""
        if not self._heap:
            return None
        return HeapNodeView(self._heap, 0)

    # Heap-specific operations

    def peek(self) -> Any:
        """Return the top element without removing it.

        Raises:
            EmptyContainerError: If the heap is empty
        """
        if not self._heap:
            raise EmptyContainerError(f"peek from empty {self.type_name()}")
        return self._heap[0]

    def pop(self) -> Any:
        """Remove and return the top element.

        Raises:
            EmptyContainerError: If the heap is empty
        """
        if not self._heap:
            raise EmptyContainerError(f"pop from empty {self.type_name()}")
        top = self._heap[0]
        self._remove_at(0)
        self._after_mutation()
        return top

    def to_array(self) -> List[Any]:
        """Return a copy of the backing list in storage order."""
        return list(self._heap)

    # Reheaping

    def _remove_at(self, index: int) -> None:
        last = len(self._heap) - 1
        self._swap(index, last)
        self._heap.pop()

        if index < len(self._heap):
            # An element taken from another subtree can outrank its new parent
            if self._sift_down(index) == index:
                self._sift_up(index)

    def _sift_up(self, index: int) -> int:
        while index > 0:
            parent = (index - 1) // 2
            if not self._outranks(self._heap[index], self._heap[parent]):
                break
            self._swap(index, parent)
            index = parent
        return index

    def _sift_down(self, index: int) -> int:
        size = len(self._heap)
        while True:
            left = 2 * index + 1
            right = 2 * index + 2
            top = index

            if left < size and self._outranks(self._heap[left], self._heap[top]):
                top = left
            if right < size and self._outranks(self._heap[right], self._heap[top]):
                top = right

            if top == index:
                return index
            self._swap(index, top)
            index = top

    def _swap(self, i: int, j: int) -> None:
        self._heap[i], self._heap[j] = self._heap[j], self._heap[i]


class MinHeap(Heap):
    """Heap with the smallest element at the root."""

    kind = StructureKind.MIN_HEAP
    color_name = "lightblue"

    def _outranks(self, a: Any, b: Any) -> bool:
        return a < b


class MaxHeap(Heap):
    """Heap with the largest element at the root."""

    kind = StructureKind.MAX_HEAP
    color_name = "lightcoral"

    def _outranks(self, a: Any, b: Any) -> bool:
        return a > b
