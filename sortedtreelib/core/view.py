"""Read-only node views for SortedTreeLib.

Views are how code outside a container (renderers, dumps, statistics)
looks at a structure's shape without touching its nodes. A view is a
small data container; how to walk from one view to the next is the job
of the adapters in ``sortedtreelib.core.adapter``.

Two shapes exist. Binary structures (AVL, Red-Black, heaps) expose
NodeView. The 2-4 tree has multi-key nodes and exposes NaryNodeView
instead, so it never has to pretend to be binary.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional


class TreeView(ABC):
    """Abstract base class for every node view.

    Like any node in a traversal, a view only has to say who it is,
    whether it has children, and what it looks like.
    """

    @abstractmethod
    def identifier(self) -> str:
        """Return an identifier for the viewed node.

        Elements are unique within a container, so the identifier is
        derived from the node's payload and is stable across traversals
        as long as the container is not mutated.

        Returns:
            str: Identifier for this node
        """
        pass

    @abstractmethod
    def is_leaf(self) -> bool:
        """Check if the viewed node has no children.

        Returns:
            bool: True if this node has no children, False otherwise
        """
        pass

    @abstractmethod
    def metadata(self) -> Dict[str, Any]:
        """Return display metadata about the viewed node.

        Returns:
            Dict[str, Any]: Metadata dictionary
        """
        pass

    def __str__(self) -> str:
        """String representation defaults to identifier."""
        return self.identifier()

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"{self.__class__.__name__}(id={self.identifier()!r})"

    def __eq__(self, other: object) -> bool:
        """Views are equal if they have the same identifier."""
        if not isinstance(other, TreeView):
            return NotImplemented
        return self.identifier() == other.identifier()

    def __hash__(self) -> int:
        """Hash based on identifier for use in sets and dicts."""
        return hash(self.identifier())


class NodeView(TreeView):
    """Binary-shaped view: a value, two optional children and a color tag.

    The color tag is purely cosmetic. Red-Black trees report "RED" or
    "BLACK", AVL trees report "BALANCED", heaps report "null".
    """

    @abstractmethod
    def value(self) -> Any:
        """Return the element stored at this node."""
        pass

    @abstractmethod
    def left(self) -> Optional['NodeView']:
        """Return a view of the left child, or None."""
        pass

    @abstractmethod
    def right(self) -> Optional['NodeView']:
        """Return a view of the right child, or None."""
        pass

    @abstractmethod
    def color(self) -> str:
        """Return the display color tag for this node."""
        pass

    def identifier(self) -> str:
        return repr(self.value())

    def is_leaf(self) -> bool:
        return self.left() is None and self.right() is None

    def metadata(self) -> Dict[str, Any]:
        return {
            'value': self.value(),
            'color': self.color(),
            'is_leaf': self.is_leaf(),
        }


class NaryNodeView(TreeView):
    """Multi-key view for B-tree style nodes.

    Keys are reported in ascending order. An internal node has exactly
    ``key_count() + 1`` children.
    """

    @abstractmethod
    def key_count(self) -> int:
        pass

    @abstractmethod
    def key_at(self, index: int) -> Any:
        """Return the key at ``index``.

        Raises:
            IndexError: If index is outside ``[0, key_count())``
        """
        pass

    @abstractmethod
    def child_count(self) -> int:
        pass

    @abstractmethod
    def child_at(self, index: int) -> 'NaryNodeView':
        """Return a view of the child at ``index``.

        Raises:
            IndexError: If index is outside ``[0, child_count())``
        """
        pass

    def is_leaf(self) -> bool:
        return self.child_count() == 0

    def keys(self) -> List[Any]:
        """Return all keys of this node as a new list."""
        return [self.key_at(i) for i in range(self.key_count())]

    def children(self) -> List['NaryNodeView']:
        """Return views of all children of this node."""
        return [self.child_at(i) for i in range(self.child_count())]

    def identifier(self) -> str:
        return repr(self.keys())

    def metadata(self) -> Dict[str, Any]:
        return {
            'keys': self.keys(),
            'key_count': self.key_count(),
            'child_count': self.child_count(),
            'is_leaf': self.is_leaf(),
        }


class LinkedNodeView(NodeView):
    """NodeView over a linked node with ``value``, ``left`` and ``right``.

    Shared by the AVL and Red-Black trees. The node itself is never
    handed out; each step returns a fresh view wrapping the child.
    """

    def __init__(self, node: Any, colorize: Callable[[Any], str]):
        """Wrap a linked node.

        Args:
            node: Node exposing ``value``, ``left`` and ``right`` attributes
            colorize: Function computing the color tag of a node
        """
        self._node = node
        self._colorize = colorize

    def value(self) -> Any:
        return self._node.value

    def left(self) -> Optional[NodeView]:
        child = self._node.left
        return LinkedNodeView(child, self._colorize) if child is not None else None

    def right(self) -> Optional[NodeView]:
        child = self._node.right
        return LinkedNodeView(child, self._colorize) if child is not None else None

    def color(self) -> str:
        return self._colorize(self._node)
