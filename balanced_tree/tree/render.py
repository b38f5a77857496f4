from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable, Iterator, Optional, Tuple

if TYPE_CHECKING:
    from .base import TreeNode

Entry = Tuple[int, str, "TreeNode"]


def walk(root: Optional[TreeNode]) -> Iterator[Entry]:
    """Lazily yield `(depth, prefix, node)` for every node in pre-order.

    The root is tagged "Root: ", left children "L--> " and right children
    "R--> ". The walk only reads links, so it is safe to render a tree while
    holding references to its nodes.
    """
    if root is None:
        return

    stack = [(0, "Root: ", root)]
    while stack:
        depth, prefix, node = stack.pop()
        yield (depth, prefix, node)

        if node._right is not None:
            stack.append((depth + 1, "R--> ", node._right))
        if node._left is not None:
            stack.append((depth + 1, "L--> ", node._left))


def render(
    entries: Iterable[Entry], fmt: Optional[Callable[[TreeNode], str]] = None
) -> str:
    ret = ""
    for depth, prefix, node in entries:
        label = fmt(node) if fmt is not None else node._print_node()
        ret += ("  " * depth) + prefix + label + "\n"

    if len(ret) == 0:
        return "<empty tree>"
    return ret
