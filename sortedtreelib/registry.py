"""Structure discovery for SortedTreeLib.

External tools (a structure picker, a loader that needs to rebuild a
selection list) discover the available structures here by name rather
than importing concrete classes.
"""

from typing import Dict, List, Optional, Type, Union

from .config import StructureKind, TreeConfig
from .core.container import OrderedContainer
from .core.errors import InvalidArgumentError
from .structures import AVLTree, MaxHeap, MinHeap, RedBlackTree, Tree24

STRUCTURES: Dict[StructureKind, Type[OrderedContainer]] = {
    StructureKind.AVL: AVLTree,
    StructureKind.RED_BLACK: RedBlackTree,
    StructureKind.TREE24: Tree24,
    StructureKind.MIN_HEAP: MinHeap,
    StructureKind.MAX_HEAP: MaxHeap,
}

# Display names as a structure picker would list them
DISPLAY_NAMES: Dict[StructureKind, str] = {
    StructureKind.AVL: "AVL Tree",
    StructureKind.RED_BLACK: "Red-Black Tree",
    StructureKind.TREE24: "2-4 Tree",
    StructureKind.MIN_HEAP: "Min Heap",
    StructureKind.MAX_HEAP: "Max Heap",
}


def parse_kind(kind: Union[StructureKind, str]) -> StructureKind:
    """Resolve a StructureKind from an enum, type tag, display name or enum name.

    Matching is case-insensitive, so "AVL Tree", "avl", "Red-Black Tree",
    "RBT" and "red_black" all resolve.

    Raises:
        InvalidArgumentError: If the name does not match any structure
    """
    if isinstance(kind, StructureKind):
        return kind

    wanted = str(kind).strip().lower()
    for candidate in StructureKind:
        names = (candidate.value, candidate.name, DISPLAY_NAMES[candidate])
        if wanted in (name.lower() for name in names):
            return candidate

    raise InvalidArgumentError(
        f"Unknown structure: {kind!r}. "
        f"Choose from: {', '.join(available_structures())}"
    )


def available_structures() -> List[str]:
    """Return the display names of every registered structure."""
    return [DISPLAY_NAMES[kind] for kind in STRUCTURES]


def structure_class(kind: Union[StructureKind, str]) -> Type[OrderedContainer]:
    """Return the container class for ``kind``."""
    return STRUCTURES[parse_kind(kind)]


def create(kind: Union[StructureKind, str],
           config: Optional[TreeConfig] = None) -> OrderedContainer:
    """Create an empty container of the given kind.

    Args:
        kind: StructureKind or any name accepted by ``parse_kind``
        config: Optional debug configuration

    Returns:
        A new, empty OrderedContainer
    """
    return structure_class(kind)(config)


def kind_of(container: OrderedContainer) -> StructureKind:
    """Derive a container's StructureKind from the object itself."""
    return container.kind


def display_name_of(container: OrderedContainer) -> str:
    return DISPLAY_NAMES[kind_of(container)]
