"""Save and load whole containers.

Containers are serialized with ``pickle``, so a loaded container comes
back as the same concrete class with the same shape. The caller does not
say what it expects to load: the structure type is read off the loaded
object, and the loaded structure is verified before it is returned.

Only load data you produced yourself. Unpickling untrusted bytes can
execute arbitrary code.
"""

import logging
import pickle
from pathlib import Path
from typing import Union

from .core.container import LockedContainer, OrderedContainer
from .core.errors import PersistenceError, StructuralCorruptionError
from .testing.invariants import check_invariants

logger = logging.getLogger(__name__)

# Errors pickle.loads raises for truncated, foreign or mangled payloads
_LOAD_ERRORS = (
    pickle.UnpicklingError,
    EOFError,
    AttributeError,
    ImportError,
    IndexError,
    KeyError,
    MemoryError,
    OverflowError,
    RecursionError,
    TypeError,
    ValueError,
)

# Errors the invariant checkers hit on a container with mangled nodes
_CORRUPT_ERRORS = (
    StructuralCorruptionError,
    AttributeError,
    IndexError,
    KeyError,
    RecursionError,
    TypeError,
)


def serialize(container: OrderedContainer) -> bytes:
    """Serialize a container to bytes.

    A LockedContainer is serialized as the container it wraps; the lock
    itself is not state.

    Args:
        container: Container to serialize

    Returns:
        Opaque bytes accepted by ``deserialize``

    Raises:
        PersistenceError: If the container holds values pickle cannot handle
    """
    if not isinstance(container, OrderedContainer):
        raise PersistenceError(
            f"Cannot serialize {type(container).__name__}: not an OrderedContainer"
        )
    if isinstance(container, LockedContainer):
        container = container.inner

    try:
        return pickle.dumps(container, protocol=pickle.HIGHEST_PROTOCOL)
    except (pickle.PicklingError, TypeError, AttributeError) as e:
        raise PersistenceError(f"Cannot serialize {container.type_name()}: {e}") from e


def deserialize(data: bytes) -> OrderedContainer:
    """Rebuild a container from ``serialize`` output.

    Args:
        data: Bytes produced by ``serialize``

    Returns:
        The reconstructed container

    Raises:
        PersistenceError: If the bytes are corrupt, do not hold a container,
            or hold a container whose structural invariants do not hold
    """
    try:
        loaded = pickle.loads(data)
    except _LOAD_ERRORS as e:
        raise PersistenceError(f"Corrupt or unreadable container data: {e}") from e

    if not isinstance(loaded, OrderedContainer):
        logger.warning("Rejected payload of type %s", type(loaded).__name__)
        raise PersistenceError(
            f"Loaded object is not a valid container (got {type(loaded).__name__})"
        )

    try:
        check_invariants(loaded)
    except _CORRUPT_ERRORS as e:
        logger.warning("Rejected corrupt %s: %s", type(loaded).__name__, e)
        raise PersistenceError(f"Loaded container is corrupt: {e}") from e

    return loaded


def save(container: OrderedContainer, path: Union[str, Path]) -> None:
    """Write a container to ``path``.

    The container is fully serialized before the file is opened, so a
    serialization failure leaves any existing file untouched.

    Raises:
        PersistenceError: If serialization or the write fails
    """
    data = serialize(container)
    path = Path(path)

    try:
        path.write_bytes(data)
    except OSError as e:
        raise PersistenceError(f"Error saving tree to {path}: {e}") from e

    logger.info("Saved %s with %d elements to %s",
                container.type_name(), container.size(), path)


def load(path: Union[str, Path]) -> OrderedContainer:
    """Read a container previously written by ``save``.

    Raises:
        PersistenceError: If the file cannot be read or does not hold a container
    """
    path = Path(path)

    try:
        data = path.read_bytes()
    except OSError as e:
        raise PersistenceError(f"Error loading tree from {path}: {e}") from e

    container = deserialize(data)
    logger.info("Loaded %s with %d elements from %s",
                container.type_name(), container.size(), path)
    return container
