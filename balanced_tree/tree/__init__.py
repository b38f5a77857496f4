from . import base
from . import balance
from . import rotation
from . import propagate
from . import avl

from .base import OrderedTree, TreeNode, Unlink, default_comparator
from .balance import AVLNode, InvariantViolation
from .avl import AVLTree

__all__ = [
    "OrderedTree",
    "TreeNode",
    "Unlink",
    "default_comparator",
    "AVLNode",
    "InvariantViolation",
    "AVLTree",
]
