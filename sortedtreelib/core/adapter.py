"""ViewAdapter abstraction for SortedTreeLib.

Views are plain data containers; adapters supply the navigation logic for
a view shape. The traversers in ``sortedtreelib.core.traverser`` only ever
talk to an adapter, so the same breadth-first or depth-first walk works
over binary and n-ary structures alike.
"""

from abc import ABC, abstractmethod
from typing import Iterator, Optional, TYPE_CHECKING

from ..config import ShapeKind
from .view import NaryNodeView, NodeView, TreeView

if TYPE_CHECKING:
    from .container import OrderedContainer


class ViewAdapter(ABC):
    """Abstract adapter for navigating one shape of node views.

    This separation allows:
    - Binary and n-ary structures to be walked by the same traversers
    - Renderers to lay out any structure without knowing its type
    """

    @abstractmethod
    def get_children(self, view: TreeView) -> Iterator[TreeView]:
        """Get an iterator of child views for the given view.

        Children are yielded left to right; absent children are skipped.

        Args:
            view: The parent view

        Returns:
            Iterator yielding child views
        """
        pass

    def child_count(self, view: TreeView) -> int:
        """Count the immediate children of a view.

        Default implementation exhausts ``get_children``.
        Adapters can override for more efficient implementations.
        """
        return sum(1 for _ in self.get_children(view))

    def subtree_size(self, view: TreeView) -> int:
        """Count the views in the subtree rooted at ``view``.

        Args:
            view: Root of subtree to count

        Returns:
            Number of views, including ``view`` itself
        """
        count = 0
        stack = [view]
        while stack:
            current = stack.pop()
            count += 1
            stack.extend(self.get_children(current))
        return count

    def subtree_height(self, view: TreeView) -> int:
        """Return the number of levels in the subtree rooted at ``view``."""
        children = list(self.get_children(view))
        if not children:
            return 1
        return 1 + max(self.subtree_height(child) for child in children)


class BinaryViewAdapter(ViewAdapter):
    """Adapter for NodeView (AVL, Red-Black and heap structures)."""

    def get_children(self, view: NodeView) -> Iterator[NodeView]:
        left = view.left()
        if left is not None:
            yield left
        right = view.right()
        if right is not None:
            yield right


class NaryViewAdapter(ViewAdapter):
    """Adapter for NaryNodeView (2-4 tree)."""

    def get_children(self, view: NaryNodeView) -> Iterator[NaryNodeView]:
        for i in range(view.child_count()):
            yield view.child_at(i)

    def child_count(self, view: NaryNodeView) -> int:
        return view.child_count()


def adapter_for(container: 'OrderedContainer') -> ViewAdapter:
    """Pick the adapter matching a container's shape.

    Args:
        container: Any ordered container

    Returns:
        BinaryViewAdapter or NaryViewAdapter
    """
    if container.shape_kind() == ShapeKind.NARY:
        return NaryViewAdapter()
    return BinaryViewAdapter()


def root_view_of(container: 'OrderedContainer') -> Optional[TreeView]:
    """Return whichever root view the container's shape provides, or None."""
    if container.shape_kind() == ShapeKind.NARY:
        return container.nary_root_view()
    return container.root_view()
