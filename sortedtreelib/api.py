"""High-level API for SortedTreeLib.

This module provides simple, functional interfaces for the things an
external consumer (a renderer, a report, a REPL session) usually wants:
build a structure, walk its shape, and summarize it. These functions wrap
the registry, adapters and traversers.
"""

from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .config import StructureKind, TraversalStrategy, TreeConfig
from .core.adapter import adapter_for, root_view_of
from .core.container import OrderedContainer
from .core.traverser import create_traverser
from .core.view import NaryNodeView, NodeView, TreeView
from .registry import create


def create_container(
    kind: Union[StructureKind, str],
    values: Optional[Iterable[Any]] = None,
    config: Optional[TreeConfig] = None,
) -> OrderedContainer:
    """Create a container and optionally fill it.

    Args:
        kind: StructureKind or a structure name ("AVL Tree", "rbt", ...)
        values: Values to insert, in order
        config: Optional debug configuration

    Returns:
        The new container

    Example:
        >>> tree = create_container("avl", [10, 20, 30])
        >>> tree.root_view().value()
        20
    """
    container = create(kind, config)
    if values is not None:
        container.update(values)
    return container


def walk_views(
    container: OrderedContainer,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.BREADTH_FIRST,
    max_depth: Optional[int] = None,
    min_depth: int = 0,
) -> Iterator[Tuple[TreeView, int]]:
    """Walk the node views of any container.

    Binary structures yield NodeView instances, the 2-4 tree yields
    NaryNodeView instances. Empty containers yield nothing.

    Args:
        container: Container to walk
        strategy: Traversal strategy (bfs, dfs_pre, dfs_post, level)
        max_depth: Maximum depth to walk
        min_depth: Minimum depth before yielding views

    Yields:
        Tuples of (view, depth)

    Example:
        >>> for view, depth in walk_views(tree, "dfs_pre"):
        ...     print("  " * depth + str(view))
    """
    traverser = create_traverser(strategy, adapter_for(container))
    yield from traverser.traverse(root_view_of(container), max_depth, min_depth)


def count_nodes(container: OrderedContainer, **kwargs) -> int:
    """Count node views in a container.

    For binary structures this equals ``size()``; for the 2-4 tree it
    counts nodes, which hold up to three elements each.

    Args:
        container: Container to count
        **kwargs: Walk options (see walk_views)
    """
    count = 0
    for _ in walk_views(container, **kwargs):
        count += 1
    return count


def get_levels(container: OrderedContainer) -> List[List[Any]]:
    """Group node payloads by depth, left to right.

    Binary views contribute their value, n-ary views their key list.
    This is the row layout a renderer draws.

    Example:
        >>> get_levels(create_container("2-4 tree", [10, 20, 30, 40]))
        [[[20]], [[10], [30, 40]]]
    """
    levels: List[List[Any]] = []
    for view, depth in walk_views(container, TraversalStrategy.LEVEL_ORDER):
        if depth == len(levels):
            levels.append([])
        levels[depth].append(_payload(view))
    return levels


def get_tree_stats(container: OrderedContainer) -> Dict[str, Any]:
    """Get statistics about a container's shape.

    Returns:
        Dictionary with ``type``, ``size``, ``shape``, ``height``,
        ``node_count``, ``leaf_count``, ``internal_count`` and ``depths``
        (node count per depth)

    Example:
        >>> stats = get_tree_stats(tree)
        >>> print(f"{stats['type']}: {stats['size']} elements, height {stats['height']}")
    """
    stats: Dict[str, Any] = {
        'type': container.type_name(),
        'size': container.size(),
        'shape': container.shape_kind().value,
        'height': 0,
        'node_count': 0,
        'leaf_count': 0,
        'depths': {},
    }

    for view, depth in walk_views(container):
        stats['node_count'] += 1
        if view.is_leaf():
            stats['leaf_count'] += 1
        stats['height'] = max(stats['height'], depth + 1)
        stats['depths'][depth] = stats['depths'].get(depth, 0) + 1

    stats['internal_count'] = stats['node_count'] - stats['leaf_count']
    return stats


# Helper functions

def _payload(view: TreeView) -> Any:
    if isinstance(view, NaryNodeView):
        return view.keys()
    if isinstance(view, NodeView):
        return view.value()
    return view.identifier()
