from __future__ import annotations

from collections.abc import MutableSet
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, Tuple, TypeVar

from .balance import AVLNode
from .base import Comparator, NodeLocator, OrderedTree, TreeNode, Unlink
from .propagate import propagate_delete, propagate_insert
from .render import render

T = TypeVar("T")


class AVLTree(Generic[T], MutableSet):
    """Height-balanced binary search tree.

    The raw linking is done by an `OrderedTree` holding `AVLNode`s; this
    class retraces balance factors after every structural edit so that the
    tree height stays within ~1.44 * log2(n + 2).
    """

    def __init__(
        self,
        iterable: Iterable[T] = (),
        *,
        key: Optional[Callable[[T], Any]] = None,
        comparator: Optional[Comparator] = None,
        id_func: Optional[Callable[[T], Optional[str]]] = None,
    ):
        self._host: OrderedTree[T] = OrderedTree(
            key=key, comparator=comparator, id_func=id_func, node_class=AVLNode
        )

        for payload in iterable:
            self.insert(payload)

    @property
    def host(self) -> OrderedTree[T]:
        """The underlying unbalanced tree doing the structural work."""
        return self._host

    @property
    def root(self) -> Optional[T]:
        return self._host.root

    @root.setter
    def root(self, payload: Optional[T]):
        self._host.root = payload

    @property
    def root_node(self) -> Optional[AVLNode]:
        return self._host.root_node

    def insert(self, payload: T, id: Optional[str] = None) -> AVLTree[T]:
        """Insert `payload`, keeping the tree balanced.

        The node id is `id` if given, otherwise whatever the tree's `id_func`
        derives from the payload. Payloads with a key or id already in the
        tree are silently ignored.
        """
        id = self._host.resolve_id(payload, id)
        node = self._host.structural_insert(self._host.make_node(payload), id)
        if node is not None:
            propagate_insert(node, self._host)
        return self

    def _delete(self, node: AVLNode) -> Unlink:
        unlink = self._host.structural_delete(node)
        propagate_delete(unlink.parent, unlink.from_left, self._host)
        return unlink

    def delete(
        self, value: Any, comparator: Optional[Comparator] = None
    ) -> Optional[T]:
        """Remove the payload matching `value` and return it.

        Returns None, leaving the tree untouched, if nothing matches.
        """
        node = self._host.binary_search(value, comparator)
        if node is None:
            return None
        return self._delete(node).removed.payload

    def delete_node(self, locator: NodeLocator) -> Optional[AVLNode]:
        """Remove the node `locator` steers to and hand it back detached.

        `locator(node)` returns -1 when `node` sorts before the target, 1
        when it sorts after it and 0 on a match. The returned node has no
        links left and a zero balance, and carries the removed payload.
        """
        node = self._host.binary_search_node(locator)
        if node is None:
            return None

        removed: AVLNode = self._delete(node).removed
        removed.balance = 0
        return removed

    def search(
        self, value: Any, comparator: Optional[Comparator] = None
    ) -> Optional[AVLNode]:
        return self._host.binary_search(value, comparator)

    def binary_search_node(self, locator: NodeLocator) -> Optional[AVLNode]:
        return self._host.binary_search_node(locator)

    def find_id(self, id: str) -> Optional[AVLNode]:
        return self._host.find_id(id)

    def copy(self) -> AVLTree[T]:
        """Build an independent tree holding the same payloads and ids.

        Nodes are re-inserted in breadth-first order of this tree, so the
        copy is balanced by its own insertions rather than by sharing any
        node with this one.
        """
        tree = AVLTree(**self._host.config())
        for node in self._host.bfs():
            tree.insert(node.payload, node.id)
        return tree

    def clear(self):
        self._host.clear()

    def min(self) -> T:
        return self._host.min()

    def max(self) -> T:
        return self._host.max()

    def pop_min(self) -> T:
        return self._delete(self._host.first_node()).removed.payload

    def pop_max(self) -> T:
        return self._delete(self._host.last_node()).removed.payload

    def height(self) -> int:
        return self._host.height()

    def bfs(self) -> Iterator[AVLNode]:
        return self._host.bfs()

    def walk(self) -> Iterator[Tuple[int, str, TreeNode]]:
        return self._host.walk()

    def print(self, fmt: Optional[Callable[[AVLNode], str]] = None) -> str:
        """Render the tree one node per line, with balance factors."""
        if fmt is None:
            return render(self.walk())
        return render(
            self.walk(), lambda node: "{} [BF = {}]".format(fmt(node), node.balance)
        )

    def nodes(self, reverse: bool = False) -> Iterator[AVLNode]:
        return self._host.nodes(reverse)

    def payloads(self, reverse: bool = False) -> Iterator[T]:
        return self._host.payloads(reverse)

    def keys(self, reverse: bool = False) -> Iterator[Any]:
        return self._host.keys(reverse)

    def _from_iterable(self, it: Iterable[T]) -> AVLTree[T]:
        # set operators build their result here; keep this tree's ordering
        return AVLTree(it, **self._host.config())

    def add(self, payload: T):
        self.insert(payload)

    def discard(self, value: Any):
        self.delete(value)

    def __contains__(self, value: Any) -> bool:
        return self._host.binary_search(value) is not None

    def __iter__(self) -> Iterator[T]:
        return self._host.payloads()

    def __reversed__(self) -> Iterator[T]:
        return self._host.payloads(reverse=True)

    def __len__(self) -> int:
        return len(self._host)

    def __repr__(self) -> str:
        return "AVLTree({!r})".format(list(self))
