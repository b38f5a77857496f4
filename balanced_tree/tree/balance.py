from __future__ import annotations

from .base import TreeNode


class InvariantViolation(AssertionError):
    """Raised when the balancing code is handed a tree state it cannot have
    produced itself. Continuing past one of these would silently corrupt
    the tree, so it is raised explicitly instead of via `assert`.
    """


class AVLNode(TreeNode):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # height(right) - height(left); +/-2 only while an edit is in flight
        self.balance: int = 0

    def _print_node(self) -> str:
        return "{} [BF = {}]".format(self._payload, self.balance)
