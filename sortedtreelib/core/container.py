"""OrderedContainer abstraction for SortedTreeLib.

OrderedContainer is the one operation surface every structure
implements. Callers pick a structure and then only ever talk to this
contract: insert, delete, contains, clear, size, traverse and the
read-only root views used for rendering.
"""

import functools
import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Iterable, Iterator, List, Optional

from ..config import ShapeKind, StructureKind, TreeConfig
from .errors import InvalidArgumentError
from .view import NaryNodeView, NodeView


class OrderedContainer(ABC):
    """Abstract base class for ordered, mutable collections.

    Elements must be mutually comparable with ``<`` and ``>``. Each
    element is stored at most once: inserting a value that is already
    present does nothing. ``None`` is never a valid element.

    Subclasses set the class attributes ``kind``, ``shape`` and
    ``color_name`` and implement the abstract operations. Everything
    else (the Python container protocol, config handling, debug hooks)
    is provided here on top of them.
    """

    kind: StructureKind
    shape: ShapeKind = ShapeKind.BINARY
    color_name: str = "black"

    def __init__(self, config: Optional[TreeConfig] = None):
        """Initialize the container.

        Args:
            config: Debug configuration (defaults to TreeConfig())

        Raises:
            InvalidArgumentError: If the configuration is invalid
        """
        config = config if config is not None else TreeConfig()
        config_errors = config.validate()
        if config_errors:
            raise InvalidArgumentError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )
        self.config = config

    # Contract operations

    @abstractmethod
    def insert(self, value: Any) -> None:
        """Add ``value`` keeping the structure ordered and balanced.

        Inserting a value that is already present is a no-op.

        Args:
            value: Element to add

        Raises:
            InvalidArgumentError: If value is None
        """
        pass

    @abstractmethod
    def delete(self, value: Any) -> bool:
        """Remove ``value`` if present.

        Args:
            value: Element to remove

        Returns:
            True if the element was removed, False if the structure is
            empty, value is None, or value is not present
        """
        pass

    @abstractmethod
    def contains(self, value: Any) -> bool:
        """Check whether ``value`` is stored. Never mutates."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Discard every element."""
        pass

    @abstractmethod
    def size(self) -> int:
        """Return the number of stored elements."""
        pass

    @abstractmethod
    def traverse(self) -> List[Any]:
        """Return the stored elements in ascending order.

        Every call builds a fresh list, so traversals never share state
        and can be repeated freely.
        """
        pass

    @abstractmethod
    def root_view(self) -> Optional[NodeView]:
        """Return a binary view of the root node.

        Returns:
            NodeView of the root, or None if the structure is empty or
            its shape is not binary
        """
        pass

    def nary_root_view(self) -> Optional[NaryNodeView]:
        """Return an n-ary view of the root node.

        Only multi-key structures support this; binary structures
        return None.
        """
        return None

    # Descriptive tags for external consumers

    def type_name(self) -> str:
        """Return the human-readable type tag, e.g. ``"AVL Tree"``."""
        return self.kind.value

    def display_color(self) -> str:
        """Return a suggested display color. Purely cosmetic."""
        return self.color_name

    def shape_kind(self) -> ShapeKind:
        """Return which view contract this structure exposes."""
        return self.shape

    # Conveniences built on the contract

    def is_empty(self) -> bool:
        return self.size() == 0

    def update(self, values: Iterable[Any]) -> None:
        """Insert every value from ``values`` in order."""
        for value in values:
            self.insert(value)

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return self.size() > 0

    def __contains__(self, value: object) -> bool:
        return self.contains(value)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.traverse())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.traverse()!r})"

    # Debug hooks used by subclasses

    def _require_value(self, value: Any) -> None:
        """Reject None before any mutation happens."""
        if value is None:
            raise InvalidArgumentError(
                f"Cannot insert None into {self.type_name()}"
            )

    def _trace(self, message: str, *args: Any) -> None:
        """Emit a DEBUG record if operation logging is enabled."""
        if self.config.log_operations:
            logging.getLogger(type(self).__module__).debug(message, *args)

    def _after_mutation(self) -> None:
        """Run the invariant checker if the config asks for it."""
        if self.config.check_invariants:
            # Imported here: the checkers import the concrete structures
            from ..testing.invariants import check_invariants
            check_invariants(self)


class LockedContainer(OrderedContainer):
    """Wrap a container so that every call holds one exclusive lock.

    The structures themselves carry no synchronization. An embedding
    system that shares a container between threads wraps it once and
    uses the wrapper everywhere; each operation then runs atomically
    with respect to the others.

    Operations outside the contract (``peek``, ``height`` and so on) are
    proxied through ``__getattr__`` and also run under the lock.
    """

    def __init__(self, inner: OrderedContainer):
        """Wrap ``inner``.

        Args:
            inner: The container to protect
        """
        if isinstance(inner, LockedContainer):
            inner = inner.inner
        self._inner = inner
        self._lock = threading.RLock()
        self.config = inner.config

    @property
    def inner(self) -> OrderedContainer:
        return self._inner

    @property
    def kind(self) -> StructureKind:
        return self._inner.kind

    @property
    def shape(self) -> ShapeKind:
        return self._inner.shape

    @property
    def color_name(self) -> str:
        return self._inner.color_name

    def insert(self, value: Any) -> None:
        with self._lock:
            self._inner.insert(value)

    def delete(self, value: Any) -> bool:
        with self._lock:
            return self._inner.delete(value)

    def contains(self, value: Any) -> bool:
        with self._lock:
            return self._inner.contains(value)

    def clear(self) -> None:
        with self._lock:
            self._inner.clear()

    def size(self) -> int:
        with self._lock:
            return self._inner.size()

    def traverse(self) -> List[Any]:
        with self._lock:
            return self._inner.traverse()

    def root_view(self) -> Optional[NodeView]:
        with self._lock:
            return self._inner.root_view()

    def nary_root_view(self) -> Optional[NaryNodeView]:
        with self._lock:
            return self._inner.nary_root_view()

    def update(self, values: Iterable[Any]) -> None:
        with self._lock:
            self._inner.update(values)

    def __getattr__(self, name: str) -> Any:
        """Proxy attributes of the wrapped container, locking method calls.

        Args:
            name: The attribute name being accessed

        Returns:
            The attribute from the wrapped container, wrapped if callable
        """
        if name.startswith('_'):
            raise AttributeError(name)

        attr = getattr(self._inner, name)
        if not callable(attr):
            return attr

        @functools.wraps(attr)
        def locked(*args, **kwargs):
            with self._lock:
                return attr(*args, **kwargs)

        return locked

    def __repr__(self) -> str:
        return f"LockedContainer({self._inner!r})"
