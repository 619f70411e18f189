"""Red-Black tree for SortedTreeLib.

Properties:
1. Every node is either red or black
2. The root is black
3. Absent children (nil) count as black
4. A red node has no red child
5. Every path from a node to a descendant nil passes the same number of
   black nodes (the node's black-height)

Nodes keep a parent link so rotations and the fix-up loops can walk
upward without recursion. The parent link is a ``weakref.ref``: a node
is owned only by its parent's child slot (or the tree's root slot).
"""

import weakref
from enum import Enum
from typing import Any, Dict, List, Optional

from ..config import StructureKind, TreeConfig
from ..core.container import OrderedContainer
from ..core.errors import EmptyContainerError, StructuralCorruptionError
from ..core.view import LinkedNodeView


class NodeColor(Enum):
    RED = "RED"
    BLACK = "BLACK"


RED = NodeColor.RED
BLACK = NodeColor.BLACK


class _RBNode:
    """A tree node with a non-owning parent link.

    New nodes start red.
    """

    def __init__(self, value: Any, color: NodeColor = RED):
        self.value = value
        self.left: Optional['_RBNode'] = None
        self.right: Optional['_RBNode'] = None
        self.color = color
        self._parent_ref: Optional[weakref.ref] = None

    @property
    def parent(self) -> Optional['_RBNode']:
        return self._parent_ref() if self._parent_ref is not None else None

    @parent.setter
    def parent(self, node: Optional['_RBNode']) -> None:
        self._parent_ref = weakref.ref(node) if node is not None else None

    def __getstate__(self) -> Dict[str, Any]:
        # weakrefs cannot be pickled; parents are rebuilt from the children
        return {
            'value': self.value,
            'left': self.left,
            'right': self.right,
            'color': self.color,
        }

    def __setstate__(self, state: Dict[str, Any]) -> None:
        self.__dict__.update(state)
        self._parent_ref = None
        for child in (self.left, self.right):
            if child is not None:
                child.parent = self

    def __repr__(self) -> str:
        return f"_RBNode({self.value!r}, {self.color.value})"


def _is_red(node: Optional[_RBNode]) -> bool:
    return node is not None and node.color is RED


def _color_tag(node: _RBNode) -> str:
    return node.color.value


class RedBlackTree(OrderedContainer):
    """Binary search tree balanced by node colors."""

    kind = StructureKind.RED_BLACK
    color_name = "darkred"

    def __init__(self, config: Optional[TreeConfig] = None):
        super().__init__(config)
        self._root: Optional[_RBNode] = None
        self._size = 0

    # Contract operations

    def insert(self, value: Any) -> None:
        self._require_value(value)

        parent = None
        current = self._root
        while current is not None:
            parent = current
            if value < current.value:
                current = current.left
            elif value > current.value:
                current = current.right
            else:
                return

        node = _RBNode(value)
        node.parent = parent
        if parent is None:
            self._root = node
        elif value < parent.value:
            parent.left = node
        else:
            parent.right = node

        self._size += 1
        self._fix_insert(node)
        self._after_mutation()

    def delete(self, value: Any) -> bool:
        if self._root is None or value is None:
            return False

        node = self._find(value)
        if node is None:
            return False

        self._delete_node(node)
        self._size -= 1
        self._after_mutation()
        return True

    def contains(self, value: Any) -> bool:
        if value is None:
            return False
        return self._find(value) is not None

    def clear(self) -> None:
        self._root = None
        self._size = 0

    def size(self) -> int:
        return self._size

    def traverse(self) -> List[Any]:
        # Iterative in-order walk with an explicit stack
        result: List[Any] = []
        stack: List[_RBNode] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            result.append(node.value)
            node = node.right
        return result

    def root_view(self) -> Optional[LinkedNodeView]:
        if self._root is None:
            return None
        return LinkedNodeView(self._root, _color_tag)

    # Red-Black specific operations

    def black_height(self) -> int:
        """Return the number of black nodes on any root-to-nil path.

        Every path has the same count, so following the left spine is
        enough. An empty tree has black-height 0.
        """
        count = 0
        node = self._root
        while node is not None:
            if node.color is BLACK:
                count += 1
            node = node.left
        return count

    def height(self) -> int:
        """Return the number of levels in the tree (0 when empty)."""
        def _height(node: Optional[_RBNode]) -> int:
            if node is None:
                return 0
            return 1 + max(_height(node.left), _height(node.right))

        return _height(self._root)

    def minimum(self) -> Any:
        """Return the smallest element.

        Raises:
            EmptyContainerError: If the tree is empty
        """
        if self._root is None:
            raise EmptyContainerError("minimum of empty RBT")
        return self._leftmost(self._root).value

    def maximum(self) -> Any:
        """Return the largest element.

        Raises:
            EmptyContainerError: If the tree is empty
        """
        if self._root is None:
            raise EmptyContainerError("maximum of empty RBT")
        node = self._root
        while node.right is not None:
            node = node.right
        return node.value

    # Insertion fix-up

    def _fix_insert(self, node: _RBNode) -> None:
        while node is not self._root and _is_red(node.parent):
            parent = node.parent
            grandparent = parent.parent

            if parent is grandparent.left:
                uncle = grandparent.right
                if _is_red(uncle):
                    self._push_blackness_down(grandparent)
                    node = grandparent
                    continue

                if node is parent.right:
                    node = parent
                    self._rotate_left(node)
                    parent = node.parent

                parent.color = BLACK
                grandparent.color = RED
                self._rotate_right(grandparent)
            else:
                uncle = grandparent.left
                if _is_red(uncle):
                    self._push_blackness_down(grandparent)
                    node = grandparent
                    continue

                if node is parent.left:
                    node = parent
                    self._rotate_right(node)
                    parent = node.parent

                parent.color = BLACK
                grandparent.color = RED
                self._rotate_left(grandparent)

        self._root.color = BLACK

    def _push_blackness_down(self, grandparent: _RBNode) -> None:
        """Recolor a black node with two red children."""
        grandparent.left.color = BLACK
        grandparent.right.color = BLACK
        grandparent.color = RED
        self._trace("recolor at %r", grandparent.value)

    # Deletion

    def _delete_node(self, node: _RBNode) -> None:
        # Two children: take over the successor's value, then remove the
        # successor, which has at most one (right) child.
        if node.left is not None and node.right is not None:
            successor = self._leftmost(node.right)
            node.value = successor.value
            node = successor

        replacement = node.left if node.left is not None else node.right

        if replacement is not None:
            parent = node.parent
            replacement.parent = parent
            self._replace_child(parent, node, replacement)
            node.left = node.right = None
            node.parent = None

            if node.color is BLACK:
                self._fix_delete(replacement)

        elif node.parent is None:
            self._root = None

        else:
            # A black leaf leaves a double-black hole at its own position;
            # repair it while the node is still linked, then unlink.
            if node.color is BLACK:
                self._fix_delete(node)

            parent = node.parent
            if parent is not None:
                if node is parent.left:
                    parent.left = None
                else:
                    parent.right = None
                node.parent = None

    def _fix_delete(self, node: _RBNode) -> None:
        while node is not self._root and node.color is BLACK:
            parent = node.parent

            if node is parent.left:
                sibling = parent.right
                if _is_red(sibling):
                    sibling.color = BLACK
                    parent.color = RED
                    self._rotate_left(parent)
                    sibling = parent.right

                if sibling is None:
                    raise StructuralCorruptionError(
                        f"RBT: black node {node.value!r} has no sibling"
                    )

                if not _is_red(sibling.left) and not _is_red(sibling.right):
                    sibling.color = RED
                    node = parent
                    continue

                if not _is_red(sibling.right):
                    sibling.left.color = BLACK
                    sibling.color = RED
                    self._rotate_right(sibling)
                    sibling = parent.right

                sibling.color = parent.color
                parent.color = BLACK
                sibling.right.color = BLACK
                self._rotate_left(parent)
                node = self._root
            else:
                sibling = parent.left
                if _is_red(sibling):
                    sibling.color = BLACK
                    parent.color = RED
                    self._rotate_right(parent)
                    sibling = parent.left

                if sibling is None:
                    raise StructuralCorruptionError(
                        f"RBT: black node {node.value!r} has no sibling"
                    )

                if not _is_red(sibling.left) and not _is_red(sibling.right):
                    sibling.color = RED
                    node = parent
                    continue

                if not _is_red(sibling.left):
                    sibling.right.color = BLACK
                    sibling.color = RED
                    self._rotate_left(sibling)
                    sibling = parent.left

                sibling.color = parent.color
                parent.color = BLACK
                sibling.left.color = BLACK
                self._rotate_right(parent)
                node = self._root

        node.color = BLACK

    # Rotations

    def _rotate_left(self, x: _RBNode) -> None:
        y = x.right
        x.right = y.left
        if y.left is not None:
            y.left.parent = x

        self._replace_child(x.parent, x, y)
        y.parent = x.parent
        y.left = x
        x.parent = y
        self._trace("rotate_left at %r", x.value)

    def _rotate_right(self, x: _RBNode) -> None:
        y = x.left
        x.left = y.right
        if y.right is not None:
            y.right.parent = x

        self._replace_child(x.parent, x, y)
        y.parent = x.parent
        y.right = x
        x.parent = y
        self._trace("rotate_right at %r", x.value)

    # Helpers

    def _replace_child(self, parent: Optional[_RBNode], old: _RBNode, new: _RBNode) -> None:
        """Point ``parent``'s slot (or the root) at ``new`` instead of ``old``."""
        if parent is None:
            self._root = new
        elif old is parent.left:
            parent.left = new
        else:
            parent.right = new

    def _find(self, value: Any) -> Optional[_RBNode]:
        node = self._root
        while node is not None:
            if value < node.value:
                node = node.left
            elif value > node.value:
                node = node.right
            else:
                return node
        return None

    @staticmethod
    def _leftmost(node: _RBNode) -> _RBNode:
        while node.left is not None:
            node = node.left
        return node
