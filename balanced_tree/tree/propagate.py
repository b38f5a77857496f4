from __future__ import annotations

import logging
from typing import Optional

from .balance import AVLNode, InvariantViolation
from .base import OrderedTree
from . import rotation

logger = logging.getLogger(__name__)


def propagate_insert(node: AVLNode, tree: OrderedTree) -> int:
    """Retrace from a freshly linked leaf up towards the root.

    Each ancestor's balance moves towards the side that grew. A balance of
    0 means the ancestor's height is unchanged and retracing stops; +/-1
    means it grew and retracing continues; +/-2 is fixed with a rotation,
    which restores the subtree's original height, so retracing stops there
    too.

    Returns the number of single rotations performed (0, 1 or 2).
    """
    if node._tree is not tree:
        raise InvariantViolation(
            "node {!r} is not linked into this tree".format(node.key)
        )
    if node._parent is None and tree.root_node is not node:
        raise InvariantViolation(
            "node {!r} is detached from the tree".format(node.key)
        )

    child: AVLNode = node
    parent: Optional[AVLNode] = node._parent

    while parent is not None:
        if child._is_left_child():
            parent.balance -= 1
        else:
            parent.balance += 1

        if parent.balance == 0:
            logger.debug("insert retrace absorbed at %r", parent.key)
            return 0
        elif parent.balance == 2 or parent.balance == -2:
            steps = rotation.rotation_kind(parent)
            rotation.rebalance(parent, tree)
            return len(steps)

        child = parent
        parent = parent._parent

    return 0


def propagate_delete(
    parent: Optional[AVLNode], from_left: bool, tree: OrderedTree
) -> int:
    """Retrace from the position a structural delete physically unlinked.

    `parent` is the unlinked node's former parent and `from_left` tells which
    of its subtrees shrank. A balance of +/-1 afterwards means the subtree
    kept its height and retracing stops. A balance of 0 means it lost one
    level, so retracing continues upwards. At +/-2 the subtree is rotated,
    and retracing continues from the new subtree root unless the heavy child
    was itself balanced (the rotated subtree then keeps its height).

    Returns the number of single rotations performed.
    """
    if parent is not None and parent._tree is not tree:
        raise InvariantViolation(
            "node {!r} is not linked into this tree".format(parent.key)
        )

    rotations = 0

    while parent is not None:
        if from_left:
            parent.balance += 1
        else:
            parent.balance -= 1

        if parent.balance == 1 or parent.balance == -1:
            logger.debug("delete retrace absorbed at %r", parent.key)
            break
        elif parent.balance != 0:
            heavy: AVLNode = parent._right if parent.balance > 0 else parent._left
            steps = rotation.rotation_kind(parent)
            heavy_balance = heavy.balance

            parent = rotation.rebalance(parent, tree)
            rotations += len(steps)

            if heavy_balance == 0:
                logger.debug("delete retrace absorbed by rotation at %r", parent.key)
                break

        child = parent
        parent = child._parent
        if parent is not None:
            from_left = parent._left is child

    return rotations
