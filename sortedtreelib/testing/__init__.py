"""Testing helpers for SortedTreeLib and its consumers."""

from .invariants import (
    check_invariants,
    check_contents,
    check_avl,
    check_red_black,
    check_tree24,
    check_heap,
)

__all__ = [
    "check_invariants",
    "check_contents",
    "check_avl",
    "check_red_black",
    "check_tree24",
    "check_heap",
]
