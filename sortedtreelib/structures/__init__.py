"""Concrete ordered structures.

Each structure implements the OrderedContainer contract and is
self-contained: none of them calls into another.
"""

from .heap import Heap, MinHeap, MaxHeap, HeapNodeView
from .avl import AVLTree
from .red_black import RedBlackTree, NodeColor
from .tree24 import Tree24, Tree24NodeView

__all__ = [
    "Heap",
    "MinHeap",
    "MaxHeap",
    "HeapNodeView",
    "AVLTree",
    "RedBlackTree",
    "NodeColor",
    "Tree24",
    "Tree24NodeView",
]
