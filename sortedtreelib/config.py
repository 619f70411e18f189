"""Configuration system for SortedTreeLib.

This module defines the enumerations shared by every structure (which kind
of structure, which shape it exposes, how views are walked) and the
TreeConfig dataclass that controls debug-time behaviour of a container.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List


class StructureKind(Enum):
    """The ordered structures this library provides.

    Values are the human-readable type tags reported by each container.
    """
    AVL = "AVL Tree"
    RED_BLACK = "RBT"
    TREE24 = "2-4 Tree"
    MIN_HEAP = "MinHeap"
    MAX_HEAP = "MaxHeap"


class ShapeKind(Enum):
    """Shape of the node views a container exposes."""
    BINARY = "binary"   # NodeView: value, left, right, color
    NARY = "nary"       # NaryNodeView: keys and children


class TraversalStrategy(Enum):
    """How to walk a container's node views.

    Different strategies suit different consumers; renderers usually
    want level order, structural dumps want pre-order.
    """
    BREADTH_FIRST = "bfs"           # Level by level
    DEPTH_FIRST_PRE = "dfs_pre"     # Parent before children
    DEPTH_FIRST_POST = "dfs_post"   # Children before parent
    LEVEL_ORDER = "level"           # Grouped by level


@dataclass
class TreeConfig:
    """Debug-time configuration for a container.

    The defaults are what production code wants: no invariant checks
    and no per-operation log records. Tests and interactive debugging
    use ``TreeConfig.debug()``.
    """

    # Run the structural invariant checker after every mutation
    check_invariants: bool = False

    # Emit DEBUG records for rotations, recolors, splits and merges
    log_operations: bool = False

    @classmethod
    def default(cls) -> 'TreeConfig':
        """Create the production configuration.

        Returns:
            TreeConfig with all debug features off
        """
        return cls()

    @classmethod
    def debug(cls) -> 'TreeConfig':
        """Create a configuration that verifies and logs every mutation.

        Returns:
            TreeConfig with invariant checks and operation logging on
        """
        return cls(check_invariants=True, log_operations=True)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.check_invariants, bool):
            errors.append("check_invariants must be a bool")

        if not isinstance(self.log_operations, bool):
            errors.append("log_operations must be a bool")

        return errors
