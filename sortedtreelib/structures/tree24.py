"""2-4 tree (B-tree of order 4) for SortedTreeLib.

Properties:
- Each node holds 1 to 3 keys in ascending order
- Each internal node has exactly one more child than keys (2 to 4)
- All leaves are at the same depth
- child[i] < key[i] < child[i+1] for every internal node

Both mutations work top-down in a single pass. Insert splits any full
node before stepping into it, so there is always room to absorb a
promoted key. Delete never steps into a node with fewer than two keys,
borrowing or merging first, so there is always a key to spare.
"""

from typing import Any, List, Optional, Tuple

from ..config import ShapeKind, StructureKind, TreeConfig
from ..core.container import OrderedContainer
from ..core.errors import EmptyContainerError
from ..core.view import NaryNodeView

MAX_KEYS = 3
MIN_KEYS_TO_DESCEND = 2


class _Tree24Node:
    """A multi-key node. Leaves have no children."""

    def __init__(self,
                 keys: Optional[List[Any]] = None,
                 children: Optional[List['_Tree24Node']] = None):
        self.keys: List[Any] = keys if keys is not None else []
        self.children: List['_Tree24Node'] = children if children is not None else []

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def is_full(self) -> bool:
        return len(self.keys) >= MAX_KEYS

    def find_key_index(self, value: Any) -> int:
        """Return the index of the first key not smaller than ``value``.

        This is where ``value`` sits among the keys if present, or the
        child to descend into if not.
        """
        i = 0
        while i < len(self.keys) and value > self.keys[i]:
            i += 1
        return i

    def __repr__(self) -> str:
        return f"_Tree24Node(keys={self.keys!r}, leaf={self.is_leaf})"


class Tree24NodeView(NaryNodeView):
    """NaryNodeView over a 2-4 tree node."""

    def __init__(self, node: _Tree24Node):
        self._node = node

    def key_count(self) -> int:
        return len(self._node.keys)

    def key_at(self, index: int) -> Any:
        if not 0 <= index < len(self._node.keys):
            raise IndexError(f"key index {index} out of range")
        return self._node.keys[index]

    def child_count(self) -> int:
        return len(self._node.children)

    def child_at(self, index: int) -> 'Tree24NodeView':
        if not 0 <= index < len(self._node.children):
            raise IndexError(f"child index {index} out of range")
        return Tree24NodeView(self._node.children[index])


class Tree24(OrderedContainer):
    """B-tree of order 4."""

    kind = StructureKind.TREE24
    shape = ShapeKind.NARY
    color_name = "blue"

    def __init__(self, config: Optional[TreeConfig] = None):
        super().__init__(config)
        self._root: Optional[_Tree24Node] = None
        self._size = 0

    # Contract operations

    def insert(self, value: Any) -> None:
        self._require_value(value)

        if self._root is None:
            self._root = _Tree24Node([value])
            self._size += 1
            self._after_mutation()
            return

        if self.contains(value):
            return

        if self._root.is_full():
            new_root = _Tree24Node(children=[self._root])
            self._split_child(new_root, 0)
            self._root = new_root

        self._insert_non_full(self._root, value)
        self._size += 1
        self._after_mutation()

    def delete(self, value: Any) -> bool:
        if self._root is None or value is None:
            return False

        if not self.contains(value):
            return False

        self._delete_from(self._root, value)

        if not self._root.keys:
            self._root = self._root.children[0] if self._root.children else None

        self._size -= 1
        self._after_mutation()
        return True

    def contains(self, value: Any) -> bool:
        if value is None:
            return False

        node = self._root
        while node is not None:
            i = node.find_key_index(value)
            if i < len(node.keys) and node.keys[i] == value:
                return True
            if node.is_leaf:
                return False
            node = node.children[i]
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

    def root_view(self) -> None:
        """2-4 nodes are not binary; use ``nary_root_view`` instead."""
        return None

    def nary_root_view(self) -> Optional[Tree24NodeView]:
        if self._root is None:
            return None
        return Tree24NodeView(self._root)

    # 2-4 specific operations

    def height(self) -> int:
        """Return the number of levels (0 when empty)."""
        levels = 0
        node = self._root
        while node is not None:
            levels += 1
            node = node.children[0] if node.children else None
        return levels

    def node_count(self) -> int:
        """Return the number of nodes (not keys) in the tree."""
        if self._root is None:
            return 0
        count = 0
        stack = [self._root]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children)
        return count

    def minimum(self) -> Any:
        """Return the smallest element.

        Raises:
            EmptyContainerError: If the tree is empty
        """
        if self._root is None:
            raise EmptyContainerError("minimum of empty 2-4 Tree")
        node = self._root
        while not node.is_leaf:
            node = node.children[0]
        return node.keys[0]

    def maximum(self) -> Any:
        """Return the largest element.

        Raises:
            EmptyContainerError: If the tree is empty
        """
        if self._root is None:
            raise EmptyContainerError("maximum of empty 2-4 Tree")
        node = self._root
        while not node.is_leaf:
            node = node.children[-1]
        return node.keys[-1]

    # Insertion

    def _insert_non_full(self, node: _Tree24Node, value: Any) -> None:
        while not node.is_leaf:
            i = node.find_key_index(value)
            if node.children[i].is_full():
                self._split_child(node, i)
                if value > node.keys[i]:
                    i += 1
            node = node.children[i]

        node.keys.insert(node.find_key_index(value), value)

    def _split_child(self, parent: _Tree24Node, index: int) -> None:
        """Split the full child at ``index`` around its middle key.

        The middle key moves up into ``parent``; the smallest key stays in
        the old node and the largest (with the last two children, for an
        internal node) moves into a new right sibling.
        """
        full = parent.children[index]
        sibling = _Tree24Node([full.keys[2]])
        if not full.is_leaf:
            sibling.children = full.children[2:]
            del full.children[2:]

        parent.keys.insert(index, full.keys[1])
        del full.keys[1:]
        parent.children.insert(index + 1, sibling)
        self._trace("split promoted %r", parent.keys[index])

    # Deletion

    def _delete_from(self, node: _Tree24Node, value: Any) -> None:
        """Remove ``value``, which must be present under ``node``."""
        while True:
            i = node.find_key_index(value)

            if i < len(node.keys) and node.keys[i] == value:
                if node.is_leaf:
                    del node.keys[i]
                    return
                node, value = self._delete_internal(node, i)
                continue

            if len(node.children[i].keys) < MIN_KEYS_TO_DESCEND:
                i = self._fill_child(node, i)
            node = node.children[i]

    def _delete_internal(self, node: _Tree24Node, index: int) -> Tuple[_Tree24Node, Any]:
        """Handle a key found in an internal node.

        Returns:
            The child to continue in and the value to delete there
        """
        key = node.keys[index]
        left = node.children[index]
        right = node.children[index + 1]

        if len(left.keys) >= MIN_KEYS_TO_DESCEND:
            predecessor = self._rightmost_key(left)
            node.keys[index] = predecessor
            return left, predecessor

        if len(right.keys) >= MIN_KEYS_TO_DESCEND:
            successor = self._leftmost_key(right)
            node.keys[index] = successor
            return right, successor

        self._merge(node, index)
        return node.children[index], key

    def _fill_child(self, node: _Tree24Node, index: int) -> int:
        """Give the child at ``index`` a second key before descending.

        Returns:
            Index of the child that now covers the requested child's range
        """
        if index > 0 and len(node.children[index - 1].keys) >= MIN_KEYS_TO_DESCEND:
            self._borrow_from_left(node, index)
            return index

        if index < len(node.keys) and len(node.children[index + 1].keys) >= MIN_KEYS_TO_DESCEND:
            self._borrow_from_right(node, index)
            return index

        if index < len(node.keys):
            self._merge(node, index)
            return index

        self._merge(node, index - 1)
        return index - 1

    def _borrow_from_left(self, node: _Tree24Node, index: int) -> None:
        child = node.children[index]
        sibling = node.children[index - 1]

        child.keys.insert(0, node.keys[index - 1])
        node.keys[index - 1] = sibling.keys.pop()
        if not sibling.is_leaf:
            child.children.insert(0, sibling.children.pop())
        self._trace("borrow from left into child %d", index)

    def _borrow_from_right(self, node: _Tree24Node, index: int) -> None:
        child = node.children[index]
        sibling = node.children[index + 1]

        child.keys.append(node.keys[index])
        node.keys[index] = sibling.keys.pop(0)
        if not sibling.is_leaf:
            child.children.append(sibling.children.pop(0))
        self._trace("borrow from right into child %d", index)

    def _merge(self, node: _Tree24Node, index: int) -> None:
        """Fold child ``index + 1`` and the key between them into child ``index``."""
        child = node.children[index]
        sibling = node.children[index + 1]

        child.keys.append(node.keys.pop(index))
        child.keys.extend(sibling.keys)
        child.children.extend(sibling.children)
        del node.children[index + 1]
        self._trace("merge children %d and %d", index, index + 1)

    # Helpers

    @staticmethod
    def _rightmost_key(node: _Tree24Node) -> Any:
        while not node.is_leaf:
            node = node.children[-1]
        return node.keys[-1]

    @staticmethod
    def _leftmost_key(node: _Tree24Node) -> Any:
        while not node.is_leaf:
            node = node.children[0]
        return node.keys[0]

    def _inorder(self, node: Optional[_Tree24Node], result: List[Any]) -> None:
        if node is None:
            return
        for i, key in enumerate(node.keys):
            if not node.is_leaf:
                self._inorder(node.children[i], result)
            result.append(key)
        if not node.is_leaf:
            self._inorder(node.children[-1], result)
