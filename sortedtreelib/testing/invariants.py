"""Structural invariant checkers for SortedTreeLib containers.

These checkers read a container's internal nodes directly and raise
StructuralCorruptionError on the first violated invariant. They are a
test and debugging aid: test suites call them after every operation,
and containers call them automatically when created with
``TreeConfig(check_invariants=True)``.

Example:
    tree = AVLTree()
    for value in values:
        tree.insert(value)
        check_invariants(tree)
"""

from typing import Any, List, Optional, Set

from ..core.container import LockedContainer, OrderedContainer
from ..core.errors import StructuralCorruptionError
from ..structures.avl import AVLTree
from ..structures.heap import Heap
from ..structures.red_black import BLACK, RED, RedBlackTree
from ..structures.tree24 import MAX_KEYS, Tree24


def check_invariants(container: OrderedContainer) -> None:
    """Check every invariant that applies to ``container``.

    Always checks that ``traverse()`` is strictly ascending and agrees
    with ``size()``; then runs the structure-specific checker.

    Raises:
        StructuralCorruptionError: On the first violation found
    """
    if isinstance(container, LockedContainer):
        container = container.inner

    check_contents(container)

    if isinstance(container, AVLTree):
        check_avl(container)
    elif isinstance(container, RedBlackTree):
        check_red_black(container)
    elif isinstance(container, Tree24):
        check_tree24(container)
    elif isinstance(container, Heap):
        check_heap(container)


def check_contents(container: OrderedContainer) -> List[Any]:
    """Check sorted order and count consistency.

    Returns:
        The traversal that was checked
    """
    items = container.traverse()

    if len(items) != container.size():
        raise StructuralCorruptionError(
            f"{container.type_name()}: size() is {container.size()} "
            f"but traverse() yields {len(items)} elements"
        )

    for previous, current in zip(items, items[1:]):
        if not previous < current:
            raise StructuralCorruptionError(
                f"{container.type_name()}: traversal not strictly ascending "
                f"at {previous!r}, {current!r}"
            )

    return items


def _check_bounds(type_name: str, value: Any, low: Any, high: Any) -> None:
    if low is not None and not low < value:
        raise StructuralCorruptionError(f"{type_name}: {value!r} not above {low!r}")
    if high is not None and not value < high:
        raise StructuralCorruptionError(f"{type_name}: {value!r} not below {high!r}")


def check_avl(tree: AVLTree) -> int:
    """Check search order, stored heights and balance factors.

    Returns:
        Height of the tree
    """
    def _walk(node, low, high) -> int:
        if node is None:
            return 0

        _check_bounds("AVL Tree", node.value, low, high)
        left_height = _walk(node.left, low, node.value)
        right_height = _walk(node.right, node.value, high)

        if node.height != 1 + max(left_height, right_height):
            raise StructuralCorruptionError(
                f"AVL Tree: node {node.value!r} stores height {node.height}, "
                f"actual {1 + max(left_height, right_height)}"
            )
        if abs(left_height - right_height) > 1:
            raise StructuralCorruptionError(
                f"AVL Tree: node {node.value!r} has balance factor "
                f"{left_height - right_height}"
            )
        return node.height

    return _walk(tree._root, None, None)


def check_red_black(tree: RedBlackTree) -> int:
    """Check search order, colors, parent links and black-heights.

    Returns:
        Black-height of the root (0 for an empty tree)
    """
    root = tree._root
    if root is None:
        return 0

    if root.color is not BLACK:
        raise StructuralCorruptionError("RBT: root is not black")
    if root.parent is not None:
        raise StructuralCorruptionError("RBT: root has a parent")

    def _walk(node, low, high) -> int:
        if node is None:
            return 0

        _check_bounds("RBT", node.value, low, high)

        for child in (node.left, node.right):
            if child is None:
                continue
            if child.parent is not node:
                raise StructuralCorruptionError(
                    f"RBT: child {child.value!r} does not link back to {node.value!r}"
                )
            if node.color is RED and child.color is RED:
                raise StructuralCorruptionError(
                    f"RBT: red node {node.value!r} has red child {child.value!r}"
                )

        left_black = _walk(node.left, low, node.value)
        right_black = _walk(node.right, node.value, high)
        if left_black != right_black:
            raise StructuralCorruptionError(
                f"RBT: black-height differs under {node.value!r} "
                f"({left_black} left, {right_black} right)"
            )
        return left_black + (1 if node.color is BLACK else 0)

    return _walk(root, None, None)


def check_tree24(tree: Tree24) -> int:
    """Check key counts, child counts, key separation and leaf depth.

    Returns:
        Number of levels (0 for an empty tree)
    """
    root = tree._root
    if root is None:
        return 0

    leaf_depths: Set[int] = set()

    def _walk(node, depth: int, low: Optional[Any], high: Optional[Any]) -> None:
        key_count = len(node.keys)
        if not 1 <= key_count <= MAX_KEYS:
            raise StructuralCorruptionError(
                f"2-4 Tree: node {node.keys!r} has {key_count} keys"
            )

        for i, key in enumerate(node.keys):
            _check_bounds("2-4 Tree", key, node.keys[i - 1] if i > 0 else low, high)

        if node.is_leaf:
            leaf_depths.add(depth)
            return

        if len(node.children) != key_count + 1:
            raise StructuralCorruptionError(
                f"2-4 Tree: node {node.keys!r} has {len(node.children)} children"
            )

        for i, child in enumerate(node.children):
            child_low = node.keys[i - 1] if i > 0 else low
            child_high = node.keys[i] if i < key_count else high
            _walk(child, depth + 1, child_low, child_high)

    _walk(root, 0, None, None)

    if len(leaf_depths) != 1:
        raise StructuralCorruptionError(
            f"2-4 Tree: leaves found at depths {sorted(leaf_depths)}"
        )
    return leaf_depths.pop() + 1


def check_heap(heap: Heap) -> int:
    """Check heap order at every index.

    Returns:
        Number of elements
    """
    storage = heap._heap

    for index in range(1, len(storage)):
        parent = (index - 1) // 2
        if heap._outranks(storage[index], storage[parent]):
            raise StructuralCorruptionError(
                f"{heap.type_name()}: {storage[index]!r} at index {index} "
                f"outranks its parent {storage[parent]!r}"
            )

    return len(storage)
