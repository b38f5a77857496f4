from __future__ import annotations

import logging
from typing import Tuple

from .balance import AVLNode, InvariantViolation
from .base import OrderedTree

logger = logging.getLogger(__name__)

LEFT = "left"
RIGHT = "right"


def rotate_left(node: AVLNode, tree: OrderedTree) -> AVLNode:
    """Rotate `node`'s right child up into `node`'s place.

    Returns the new subtree root. Only the two rotated nodes change height,
    so only their balance factors are updated.
    """
    pivot: AVLNode = node._right
    parent = node._parent

    node.balance = node.balance - 1 - max(pivot.balance, 0)
    pivot.balance = pivot.balance - 1 + min(node.balance, 0)

    node._set_right_child(pivot._left)
    pivot._set_left_child(node)
    tree.replace_child(parent, node, pivot)

    return pivot


def rotate_right(node: AVLNode, tree: OrderedTree) -> AVLNode:
    """Rotate `node`'s left child up into `node`'s place."""
    pivot: AVLNode = node._left
    parent = node._parent

    node.balance = node.balance + 1 - min(pivot.balance, 0)
    pivot.balance = pivot.balance + 1 + max(node.balance, 0)

    node._set_left_child(pivot._right)
    pivot._set_right_child(node)
    tree.replace_child(parent, node, pivot)

    return pivot


def rotation_kind(node: AVLNode) -> Tuple[str, ...]:
    """The rotations `rebalance` would apply to `node`, innermost first.

    Returns ("left",) or ("right",) for a single rotation at `node`, and
    ("right", "left") or ("left", "right") for a double rotation, where the
    first step is applied at the heavy child.
    """
    if node.balance == 2:
        child: AVLNode = node._right
        if child is None:
            raise InvariantViolation(
                "node {!r} has balance +2 but no right child".format(node.key)
            )
        if child.balance < 0:
            return (RIGHT, LEFT)
        return (LEFT,)
    elif node.balance == -2:
        child = node._left
        if child is None:
            raise InvariantViolation(
                "node {!r} has balance -2 but no left child".format(node.key)
            )
        if child.balance > 0:
            return (LEFT, RIGHT)
        return (RIGHT,)

    raise InvariantViolation(
        "cannot rebalance node {!r} with balance {}".format(node.key, node.balance)
    )


def rebalance(node: AVLNode, tree: OrderedTree) -> AVLNode:
    """Restore the AVL invariant at a node whose balance has reached +/-2.

    Returns the node now rooting the subtree `node` used to root.
    """
    kind = rotation_kind(node)
    logger.debug("rebalancing at %r: %s", node.key, "-".join(kind))

    if kind == (RIGHT, LEFT):
        rotate_right(node._right, tree)
    elif kind == (LEFT, RIGHT):
        rotate_left(node._left, tree)

    if kind[-1] == LEFT:
        return rotate_left(node, tree)
    return rotate_right(node, tree)
