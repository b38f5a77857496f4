from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, Iterator, Optional, TypeVar

if TYPE_CHECKING:
    from .base import TreeNode

R = TypeVar("R")


class SentinelNode(object):
    """Head of the circular in-order thread running through a tree's nodes.

    `_next` is the smallest node and `_prev` the largest; both point back at
    the sentinel itself while the tree is empty.
    """

    def __init__(self):
        self.reset()

    def reset(self):
        self._prev = self
        self._next = self

    def first(self) -> Optional[TreeNode]:
        return None if self._next is self else self._next

    def last(self) -> Optional[TreeNode]:
        return None if self._prev is self else self._prev


class ThreadIter(Generic[R]):
    """Walks the in-order thread from one end of a tree to the other.

    Each visited node is passed through `project`, so the same walk yields
    payloads, keys or the nodes themselves.
    """

    def __init__(
        self,
        sentinel: SentinelNode,
        project: Callable[[TreeNode], R],
        reverse: bool = False,
    ):
        self._sentinel = sentinel
        self._project = project
        self._reverse = reverse
        self._cur = sentinel._prev if reverse else sentinel._next

    def __iter__(self) -> Iterator[R]:
        return self

    def __next__(self) -> R:
        node = self._cur
        if node is self._sentinel or node is None:
            raise StopIteration()

        self._cur = node._prev if self._reverse else node._next
        return self._project(node)
