"""AVL tree for SortedTreeLib.

A self-balancing binary search tree where the heights of the two child
subtrees of any node differ by at most one.

Properties:
1. Binary search tree order (left < node < right)
2. Balance factor = height(left subtree) - height(right subtree)
3. Balance factor of every node is -1, 0 or 1 after each operation

Insert and delete are recursive: the recursion unwinds along the search
path, recomputing heights and rotating wherever a node went out of
balance.
"""

from typing import Any, List, Optional

from ..config import StructureKind, TreeConfig
from ..core.container import OrderedContainer
from ..core.errors import EmptyContainerError
from ..core.view import LinkedNodeView


class _AVLNode:
    """A tree node owning its children; no parent link."""

    def __init__(self, value: Any):
        self.value = value
        self.left: Optional['_AVLNode'] = None
        self.right: Optional['_AVLNode'] = None
        self.height = 1

    def __repr__(self) -> str:
        return f"_AVLNode({self.value!r}, height={self.height})"


def _height(node: Optional[_AVLNode]) -> int:
    return node.height if node is not None else 0


def _balance(node: Optional[_AVLNode]) -> int:
    if node is None:
        return 0
    return _height(node.left) - _height(node.right)


def _update_height(node: _AVLNode) -> None:
    node.height = 1 + max(_height(node.left), _height(node.right))


def _balance_tag(node: _AVLNode) -> str:
    # Only reachable as "UNBALANCED" if a rotation bug slipped through
    return "UNBALANCED" if abs(_balance(node)) > 1 else "BALANCED"


class AVLTree(OrderedContainer):
    """Height-balanced binary search tree."""

    kind = StructureKind.AVL
    color_name = "green"

    def __init__(self, config: Optional[TreeConfig] = None):
        super().__init__(config)
        self._root: Optional[_AVLNode] = None
        self._size = 0

    # Contract operations

    def insert(self, value: Any) -> None:
        self._require_value(value)
        self._root = self._insert(self._root, value)
        self._after_mutation()

    def delete(self, value: Any) -> bool:
        if self._root is None or value is None:
            return False

        size_before = self._size
        self._root = self._delete(self._root, value)
        if self._size == size_before:
            return False

        self._after_mutation()
        return True

    def contains(self, value: Any) -> bool:
        if value is None:
            return False

        node = self._root
        while node is not None:
            if value < node.value:
                node = node.left
            elif value > node.value:
                node = node.right
            else:
                return True
        return False

    def clear(self) -> None:
        self._root = None
        self._size = 0

    def size(self) -> int:
        return self._size

    def traverse(self) -> List[Any]:
        result: List[Any] = []
        self._inorder(self._root, result)
        return result

    def root_view(self) -> Optional[LinkedNodeView]:
        if self._root is None:
            return None
        return LinkedNodeView(self._root, _balance_tag)

    # AVL-specific operations

    def height(self) -> int:
        """Return the height of the tree (0 when empty)."""
        return _height(self._root)

    def is_balanced(self) -> bool:
        """Recompute every height from scratch and check the balance bound.

        Unlike the stored heights, this does not trust any cached state,
        which makes it useful for debugging rotations.
        """
        def _check(node: Optional[_AVLNode]) -> int:
            # Returns the real height, or -1 once any subtree is unbalanced
            if node is None:
                return 0
            left = _check(node.left)
            right = _check(node.right)
            if left < 0 or right < 0 or abs(left - right) > 1:
                return -1
            return 1 + max(left, right)

        return _check(self._root) >= 0

    def minimum(self) -> Any:
        """Return the smallest element.

        Raises:
            EmptyContainerError: If the tree is empty
        """
        if self._root is None:
            raise EmptyContainerError("minimum of empty AVL Tree")
        return self._leftmost(self._root).value

    def maximum(self) -> Any:
        """Return the largest element.

        Raises:
            EmptyContainerError: If the tree is empty
        """
        if self._root is None:
            raise EmptyContainerError("maximum of empty AVL Tree")
        node = self._root
        while node.right is not None:
            node = node.right
        return node.value

    # Recursive mutation

    def _insert(self, node: Optional[_AVLNode], value: Any) -> _AVLNode:
        if node is None:
            self._size += 1
            return _AVLNode(value)

        if value < node.value:
            node.left = self._insert(node.left, value)
        elif value > node.value:
            node.right = self._insert(node.right, value)
        else:
            return node

        _update_height(node)
        balance = _balance(node)

        # The new value sits in the heavy child's subtree; which side of
        # that child it went to picks single or double rotation.
        if balance > 1:
            if value > node.left.value:
                node.left = self._rotate_left(node.left)
            return self._rotate_right(node)

        if balance < -1:
            if value < node.right.value:
                node.right = self._rotate_right(node.right)
            return self._rotate_left(node)

        return node

    def _delete(self, node: Optional[_AVLNode], value: Any) -> Optional[_AVLNode]:
        if node is None:
            return None

        if value < node.value:
            node.left = self._delete(node.left, value)
        elif value > node.value:
            node.right = self._delete(node.right, value)
        elif node.left is None or node.right is None:
            self._size -= 1
            return node.left if node.left is not None else node.right
        else:
            successor = self._leftmost(node.right)
            node.value = successor.value
            node.right = self._delete(node.right, successor.value)

        return self._rebalance(node)

    def _rebalance(self, node: _AVLNode) -> _AVLNode:
        _update_height(node)
        balance = _balance(node)

        # After a delete the heavy child may be perfectly balanced, in
        # which case a single rotation is enough.
        if balance > 1:
            if _balance(node.left) < 0:
                node.left = self._rotate_left(node.left)
            return self._rotate_right(node)

        if balance < -1:
            if _balance(node.right) > 0:
                node.right = self._rotate_right(node.right)
            return self._rotate_left(node)

        return node

    def _rotate_right(self, y: _AVLNode) -> _AVLNode:
        x = y.left
        y.left = x.right
        x.right = y

        _update_height(y)
        _update_height(x)
        self._trace("rotate_right at %r", y.value)
        return x

    def _rotate_left(self, x: _AVLNode) -> _AVLNode:
        y = x.right
        x.right = y.left
        y.left = x

        _update_height(x)
        _update_height(y)
        self._trace("rotate_left at %r", x.value)
        return y

    # Helpers

    @staticmethod
    def _leftmost(node: _AVLNode) -> _AVLNode:
        while node.left is not None:
            node = node.left
        return node

    def _inorder(self, node: Optional[_AVLNode], result: List[Any]) -> None:
        if node is not None:
            self._inorder(node.left, result)
            result.append(node.value)
            self._inorder(node.right, result)
