"""Core abstractions for SortedTreeLib.

This package contains the container contract, the read-only view
contracts, the adapters and traversers that walk views, and the
exception hierarchy.
"""

from .errors import (
    SortedTreeError,
    InvalidArgumentError,
    EmptyContainerError,
    StructuralCorruptionError,
    PersistenceError,
)
from .view import TreeView, NodeView, NaryNodeView, LinkedNodeView
from .container import OrderedContainer, LockedContainer
from .adapter import (
    ViewAdapter,
    BinaryViewAdapter,
    NaryViewAdapter,
    adapter_for,
    root_view_of,
)
from .traverser import (
    ViewTraverser,
    BreadthFirstTraverser,
    DepthFirstPreOrderTraverser,
    DepthFirstPostOrderTraverser,
    LevelOrderTraverser,
    create_traverser,
    parse_strategy,
)

__all__ = [
    "SortedTreeError",
    "InvalidArgumentError",
    "EmptyContainerError",
    "StructuralCorruptionError",
    "PersistenceError",
    "TreeView",
    "NodeView",
    "NaryNodeView",
    "LinkedNodeView",
    "OrderedContainer",
    "LockedContainer",
    "ViewAdapter",
    "BinaryViewAdapter",
    "NaryViewAdapter",
    "adapter_for",
    "root_view_of",
    "ViewTraverser",
    "BreadthFirstTraverser",
    "DepthFirstPreOrderTraverser",
    "DepthFirstPostOrderTraverser",
    "LevelOrderTraverser",
    "create_traverser",
    "parse_strategy",
]
