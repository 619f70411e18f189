"""Exception hierarchy for SortedTreeLib.

Absence of a value is not an error: ``delete`` and ``contains`` report it
as ``False``. Exceptions are reserved for bad arguments, operations that
need an element on an empty structure, broken invariants and failed
persistence.
"""


class SortedTreeError(Exception):
    """Base class for all SortedTreeLib errors."""
    pass


class InvalidArgumentError(SortedTreeError, ValueError):
    """Raised when a caller passes a value the library cannot accept.

    Inserting ``None``, asking the registry for an unknown structure, or
    handing a container an invalid TreeConfig all raise this.
    """
    pass


class EmptyContainerError(SortedTreeError, IndexError):
    """Raised when an operation needs an element but the structure is empty."""
    pass


class StructuralCorruptionError(SortedTreeError, AssertionError):
    """Raised when a structure's balancing invariant does not hold.

    This signals a programming error, never an expected condition. It is
    raised by the checkers in ``sortedtreelib.testing.invariants`` and by
    containers running with ``TreeConfig.check_invariants`` enabled.
    """
    pass


class PersistenceError(SortedTreeError):
    """Raised when a container cannot be serialized or deserialized.

    The message carries a human-readable cause; the underlying exception,
    if any, is chained as ``__cause__``.
    """
    pass
