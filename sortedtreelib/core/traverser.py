"""View traversal strategies for SortedTreeLib.

Traversers implement different orders for walking a structure's node
views. They work through a ViewAdapter, so every strategy applies to
binary and n-ary structures alike. These walks describe shape, not
element order: for ascending elements use ``OrderedContainer.traverse``.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Iterator, List, Optional, Tuple, Union

from ..config import TraversalStrategy
from .adapter import ViewAdapter
from .errors import InvalidArgumentError
from .view import TreeView


class ViewTraverser(ABC):
    """Abstract base class for view traversal strategies."""

    def __init__(self, adapter: ViewAdapter):
        """Initialize traverser with an adapter.

        Args:
            adapter: ViewAdapter for navigating the views
        """
        self.adapter = adapter

    @abstractmethod
    def traverse(self,
                 root: Optional[TreeView],
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple[TreeView, int]]:
        """Traverse the views starting from root.

        Args:
            root: Starting view (None yields nothing)
            max_depth: Maximum depth to traverse (None = unlimited)
            min_depth: Minimum depth before yielding views

        Yields:
            Tuples of (view, depth) where depth is relative to root
        """
        pass

    def _should_yield(self, depth: int, min_depth: int, max_depth: Optional[int]) -> bool:
        if depth < min_depth:
            return False
        if max_depth is not None and depth > max_depth:
            return False
        return True

    def _should_explore(self, depth: int, max_depth: Optional[int]) -> bool:
        if max_depth is None:
            return True
        return depth < max_depth


class BreadthFirstTraverser(ViewTraverser):
    """Breadth-first traversal strategy.

    Visits all views at depth N before visiting views at depth N+1.
    For a heap this reproduces the backing array order.
    """

    def traverse(self,
                 root: Optional[TreeView],
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple[TreeView, int]]:
        if root is None:
            return

        queue: Deque[Tuple[TreeView, int]] = deque([(root, 0)])

        while queue:
            view, depth = queue.popleft()

            if self._should_yield(depth, min_depth, max_depth):
                yield (view, depth)

            if self._should_explore(depth, max_depth) and not view.is_leaf():
                for child in self.adapter.get_children(view):
                    queue.append((child, depth + 1))


class DepthFirstPreOrderTraverser(ViewTraverser):
    """Depth-first pre-order traversal strategy.

    Visits a view before its children. Good for structural dumps.
    """

    def traverse(self,
                 root: Optional[TreeView],
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple[TreeView, int]]:
        if root is None:
            return

        def _traverse_recursive(view: TreeView, depth: int) -> Iterator[Tuple[TreeView, int]]:
            if self._should_yield(depth, min_depth, max_depth):
                yield (view, depth)

            if self._should_explore(depth, max_depth) and not view.is_leaf():
                for child in self.adapter.get_children(view):
                    yield from _traverse_recursive(child, depth + 1)

        yield from _traverse_recursive(root, 0)


class DepthFirstPostOrderTraverser(ViewTraverser):
    """Depth-first post-order traversal strategy.

    Visits children before their parent. Good for aggregating subtree
    values such as heights.
    """

    def traverse(self,
                 root: Optional[TreeView],
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple[TreeView, int]]:
        if root is None:
            return

        def _traverse_recursive(view: TreeView, depth: int) -> Iterator[Tuple[TreeView, int]]:
            if self._should_explore(depth, max_depth) and not view.is_leaf():
                for child in self.adapter.get_children(view):
                    yield from _traverse_recursive(child, depth + 1)

            if self._should_yield(depth, min_depth, max_depth):
                yield (view, depth)

        yield from _traverse_recursive(root, 0)


class LevelOrderTraverser(ViewTraverser):
    """Level-order traversal with level grouping.

    Yields the same sequence as breadth-first but completes each level
    before starting the next, which is what a renderer laying out rows
    of nodes needs.
    """

    def traverse(self,
                 root: Optional[TreeView],
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple[TreeView, int]]:
        if root is None:
            return

        current_level: List[TreeView] = [root]
        current_depth = 0

        while current_level and (max_depth is None or current_depth <= max_depth):
            next_level: List[TreeView] = []

            for view in current_level:
                if self._should_yield(current_depth, min_depth, max_depth):
                    yield (view, current_depth)

                if self._should_explore(current_depth, max_depth) and not view.is_leaf():
                    next_level.extend(self.adapter.get_children(view))

            current_level = next_level
            current_depth += 1


_STRATEGIES = {
    TraversalStrategy.BREADTH_FIRST: BreadthFirstTraverser,
    TraversalStrategy.DEPTH_FIRST_PRE: DepthFirstPreOrderTraverser,
    TraversalStrategy.DEPTH_FIRST_POST: DepthFirstPostOrderTraverser,
    TraversalStrategy.LEVEL_ORDER: LevelOrderTraverser,
}

_ALIASES = {
    'dfs': TraversalStrategy.DEPTH_FIRST_PRE,
    'breadth_first': TraversalStrategy.BREADTH_FIRST,
    'depth_first_pre': TraversalStrategy.DEPTH_FIRST_PRE,
    'depth_first_post': TraversalStrategy.DEPTH_FIRST_POST,
    'level_order': TraversalStrategy.LEVEL_ORDER,
}


def parse_strategy(strategy: Union[TraversalStrategy, str]) -> TraversalStrategy:
    """Resolve a strategy enum or name.

    Raises:
        InvalidArgumentError: If strategy name is not recognized
    """
    if isinstance(strategy, TraversalStrategy):
        return strategy

    name = str(strategy).lower()
    if name in _ALIASES:
        return _ALIASES[name]
    try:
        return TraversalStrategy(name)
    except ValueError:
        choices = [s.value for s in TraversalStrategy] + list(_ALIASES)
        raise InvalidArgumentError(
            f"Unknown traversal strategy: {strategy}. "
            f"Choose from: {', '.join(choices)}"
        ) from None


def create_traverser(strategy: Union[TraversalStrategy, str],
                     adapter: ViewAdapter) -> ViewTraverser:
    """Create a traverser instance by strategy.

    Args:
        strategy: TraversalStrategy or its name (bfs, dfs_pre, dfs_post, level)
        adapter: ViewAdapter for the structure's shape

    Returns:
        ViewTraverser instance

    Raises:
        InvalidArgumentError: If strategy name is not recognized
    """
    return _STRATEGIES[parse_strategy(strategy)](adapter)
