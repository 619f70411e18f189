"""SortedTreeLib - Self-balancing ordered containers.

SortedTreeLib provides four classical ordered structures behind one
contract, plus read-only views of their shape for renderers and tools.

Choose your structure:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from sortedtreelib import AVLTree, RedBlackTree, Tree24, MinHeap, MaxHeap

    tree = AVLTree()
    tree.insert(10)
    tree.traverse()        # ascending elements
    tree.root_view()       # read-only shape
━━━━━━━━━━━━━━━━━━━━━━━━━━

Every structure is an OrderedContainer, so code written against the
contract works with all of them.
"""

__version__ = "0.1.0"

from .config import StructureKind, ShapeKind, TraversalStrategy, TreeConfig
from .core import (
    SortedTreeError,
    InvalidArgumentError,
    EmptyContainerError,
    StructuralCorruptionError,
    PersistenceError,
    TreeView,
    NodeView,
    NaryNodeView,
    OrderedContainer,
    LockedContainer,
    ViewAdapter,
    BinaryViewAdapter,
    NaryViewAdapter,
    adapter_for,
    create_traverser,
)
from .structures import (
    Heap,
    MinHeap,
    MaxHeap,
    AVLTree,
    RedBlackTree,
    NodeColor,
    Tree24,
)
from .registry import available_structures, create, parse_kind
from .persistence import serialize, deserialize, save, load
from .api import (
    create_container,
    walk_views,
    count_nodes,
    get_levels,
    get_tree_stats,
)

__all__ = [
    "__version__",
    # Config
    "StructureKind",
    "ShapeKind",
    "TraversalStrategy",
    "TreeConfig",
    # Errors
    "SortedTreeError",
    "InvalidArgumentError",
    "EmptyContainerError",
    "StructuralCorruptionError",
    "PersistenceError",
    # Contracts
    "TreeView",
    "NodeView",
    "NaryNodeView",
    "OrderedContainer",
    "LockedContainer",
    "ViewAdapter",
    "BinaryViewAdapter",
    "NaryViewAdapter",
    "adapter_for",
    "create_traverser",
    # Structures
    "Heap",
    "MinHeap",
    "MaxHeap",
    "AVLTree",
    "RedBlackTree",
    "NodeColor",
    "Tree24",
    # Registry and persistence
    "available_structures",
    "create",
    "parse_kind",
    "serialize",
    "deserialize",
    "save",
    "load",
    # API
    "create_container",
    "walk_views",
    "count_nodes",
    "get_levels",
    "get_tree_stats",
]
