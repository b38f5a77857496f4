from . import tree

from .tree import (
    AVLTree,
    AVLNode,
    OrderedTree,
    TreeNode,
    InvariantViolation,
    default_comparator,
)

__all__ = [
    "AVLTree",
    "AVLNode",
    "OrderedTree",
    "TreeNode",
    "InvariantViolation",
    "default_comparator",
]
