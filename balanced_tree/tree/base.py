from __future__ import annotations

import logging
from collections import deque
from collections.abc import MutableSet
from operator import attrgetter
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterable,
    Iterator,
    NamedTuple,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from .iter import SentinelNode, ThreadIter
from .render import render, walk

T = TypeVar("T")

Comparator = Callable[[Any, Any], int]
NodeLocator = Callable[["TreeNode"], int]

logger = logging.getLogger(__name__)


def default_comparator(candidate: Any, target: Any) -> int:
    """Three-way comparison of two keys using their natural ordering."""
    if candidate < target:
        return -1
    elif candidate > target:
        return 1
    return 0


def identity(payload: Any) -> Any:
    return payload


class TreeNode(Generic[T]):
    def __init__(self, payload: T, key: Any, id: Optional[str] = None):
        self._payload: T = payload
        self._key: Any = key
        self.id: Optional[str] = id

        self._parent: Optional[TreeNode[T]] = None
        self._left: Optional[TreeNode[T]] = None
        self._right: Optional[TreeNode[T]] = None
        self._prev: Union[None, SentinelNode, TreeNode[T]] = None
        self._next: Union[None, SentinelNode, TreeNode[T]] = None
        self._tree: Optional[OrderedTree[T]] = None

    @property
    def payload(self) -> T:
        return self._payload

    @property
    def key(self) -> Any:
        """The ordering key derived from this node's payload.

        This property is read-only; the owning tree keeps it in sync with
        the payload.
        """
        return self._key

    @property
    def parent(self) -> Optional[TreeNode[T]]:
        return self._parent

    @property
    def left(self) -> Optional[TreeNode[T]]:
        return self._left

    @property
    def right(self) -> Optional[TreeNode[T]]:
        return self._right

    @property
    def tree(self) -> Optional[OrderedTree[T]]:
        """The tree this node is linked into, or None once detached."""
        return self._tree

    @property
    def prev(self) -> Optional[TreeNode[T]]:
        """This node's predecessor in the tree, if any."""
        ret = self._prev
        if isinstance(ret, TreeNode):
            return ret

    @property
    def next(self) -> Optional[TreeNode[T]]:
        """This node's successor in the tree, if any."""
        ret = self._next
        if isinstance(ret, TreeNode):
            return ret

    def _attach(
        self,
        tree: OrderedTree[T],
        parent: Optional[TreeNode[T]],
        prev: Union[SentinelNode, TreeNode[T]],
        next: Union[SentinelNode, TreeNode[T]],
    ):
        self._tree = tree
        self._parent = parent
        self._prev = prev
        self._next = next

        prev._next = self
        next._prev = self

    def _set_left_child(self, child: Optional[TreeNode[T]]):
        self._left = child
        if child is not None:
            child._parent = self

    def _set_right_child(self, child: Optional[TreeNode[T]]):
        self._right = child
        if child is not None:
            child._parent = self

    def _is_left_child(self) -> bool:
        return (self._parent is not None) and (self._parent._left is self)

    def _swap_data(self, other: TreeNode[T]):
        self._payload, other._payload = other._payload, self._payload
        self._key, other._key = other._key, self._key
        self.id, other.id = other.id, self.id

    def _clear_links(self):
        self._tree = None
        self._parent = None
        self._left = None
        self._right = None
        self._prev = None
        self._next = None

    def _unlink(self, replace_with: Optional[TreeNode[T]] = None):
        self._prev._next = self._next
        self._next._prev = self._prev

        if self._parent is not None:
            if self._is_left_child():
                self._parent._set_left_child(replace_with)
            else:
                self._parent._set_right_child(replace_with)
        else:
            # this was the root node:
            if replace_with is not None:
                replace_with._parent = None
            self._tree._root = replace_with

        self._clear_links()

    # methods for subclasses to override:

    def _print_node(self) -> str:
        return str(self._payload)

    def __repr__(self) -> str:
        return "{}({!r})".format(self.__class__.__name__, self._payload)


class Unlink(NamedTuple):
    """Where a structural delete physically removed a node.

    `parent` is the former parent of the unlinked position (None if the root
    was unlinked), `from_left` tells which of its subtrees lost the node, and
    `removed` is the detached node, which carries the removed payload.
    """

    parent: Optional[TreeNode]
    from_left: bool
    removed: TreeNode


class OrderedTree(Generic[T], MutableSet):
    """Plain (unbalanced) binary search tree over arbitrary payloads.

    Payloads are ordered by `comparator(key(a), key(b))`. Each node may carry
    an id, either given explicitly on insertion or derived with `id_func`;
    ids are unique within a tree.
    """

    def __init__(
        self,
        iterable: Iterable[T] = (),
        *,
        key: Optional[Callable[[T], Any]] = None,
        comparator: Optional[Comparator] = None,
        id_func: Optional[Callable[[T], Optional[str]]] = None,
        node_class: Type[TreeNode] = TreeNode,
    ):
        self._key_func: Callable[[T], Any] = key if key is not None else identity
        self._comparator: Comparator = (
            comparator if comparator is not None else default_comparator
        )
        self._id_func = id_func
        self._node_cls = node_class

        self._root: Optional[TreeNode[T]] = None
        self._sentinel = SentinelNode()
        self._ids: Dict[str, TreeNode[T]] = {}
        self._len: int = 0

        for payload in iterable:
            self.insert(payload)

    def config(self) -> Dict[str, Any]:
        """Constructor keyword arguments that reproduce this tree's ordering."""
        return {
            "key": self._key_func,
            "comparator": self._comparator,
            "id_func": self._id_func,
        }

    # structural operations:

    def resolve_id(self, payload: T, id: Optional[str] = None) -> Optional[str]:
        if id is None and self._id_func is not None:
            id = self._id_func(payload)
        return id

    def make_node(self, payload: T, id: Optional[str] = None) -> TreeNode[T]:
        return self._node_cls(payload, self._key_func(payload), id)

    def binary_search(
        self, value: Any, comparator: Optional[Comparator] = None
    ) -> Optional[TreeNode[T]]:
        """Find the node whose key compares equal to the key of `value`."""
        cmp = comparator if comparator is not None else self._comparator
        target = self._key_func(value)

        node = self._root
        while node is not None:
            c = cmp(node._key, target)
            if c == 0:
                return node
            elif c > 0:
                node = node._left
            else:
                node = node._right
        return None

    def binary_search_node(self, locator: NodeLocator) -> Optional[TreeNode[T]]:
        """Find a node by steering with a three-way callback.

        `locator(node)` returns -1 if `node` sorts before the target, 1 if it
        sorts after it, and 0 if it is the target.
        """
        node = self._root
        while node is not None:
            c = locator(node)
            if c == 0:
                return node
            elif c > 0:
                node = node._left
            else:
                node = node._right
        return None

    def structural_insert(
        self, node: TreeNode[T], id: Optional[str] = None
    ) -> Optional[TreeNode[T]]:
        """Link a detached node into the tree as a new leaf.

        Returns the node, or None if the tree already holds an equal key or
        the same id.
        """
        if id is not None:
            node.id = id
        if node.id is not None and node.id in self._ids:
            logger.debug("rejected insertion of duplicate id %r", node.id)
            return None

        if self._root is None:
            node._attach(self, None, self._sentinel, self._sentinel)
            self._root = node
        else:
            cur = self._root
            prev: Union[SentinelNode, TreeNode[T]] = self._sentinel
            next: Union[SentinelNode, TreeNode[T]] = self._sentinel

            while True:
                c = self._comparator(cur._key, node._key)
                if c == 0:
                    logger.debug("rejected insertion of duplicate key %r", node._key)
                    return None
                elif c > 0:
                    if cur._left is None:
                        node._attach(self, cur, prev, cur)
                        cur._set_left_child(node)
                        break
                    next = cur
                    cur = cur._left
                else:
                    if cur._right is None:
                        node._attach(self, cur, cur, next)
                        cur._set_right_child(node)
                        break
                    prev = cur
                    cur = cur._right

        if node.id is not None:
            self._ids[node.id] = node
        self._len += 1
        return node

    def structural_delete(self, node: TreeNode[T]) -> Unlink:
        """Unlink the node holding `node`'s payload.

        A node with two children trades payload, key and id with its in-order
        successor, and the successor's position is the one unlinked.
        """
        if node._left is not None and node._right is not None:
            successor = node._next
            node._swap_data(successor)
            if node.id is not None:
                self._ids[node.id] = node
            node = successor

        parent = node._parent
        from_left = node._is_left_child()
        child = node._left if node._left is not None else node._right

        if node.id is not None:
            del self._ids[node.id]
        node._unlink(child)
        self._len -= 1

        return Unlink(parent, from_left, node)

    def replace_child(
        self,
        parent: Optional[TreeNode[T]],
        old: TreeNode[T],
        new: Optional[TreeNode[T]],
    ):
        """Splice `new` into the slot `old` occupies under `parent`."""
        if parent is None:
            self._root = new
            if new is not None:
                new._parent = None
        elif parent._left is old:
            parent._set_left_child(new)
        else:
            parent._set_right_child(new)

    # public API:

    @property
    def root(self) -> Optional[T]:
        """The payload stored at the root, or None for an empty tree."""
        if self._root is not None:
            return self._root.payload

    @root.setter
    def root(self, payload: Optional[T]):
        self.clear()
        if payload is not None:
            self.insert(payload)

    @property
    def root_node(self) -> Optional[TreeNode[T]]:
        return self._root

    def insert(self, payload: T, id: Optional[str] = None) -> OrderedTree[T]:
        id = self.resolve_id(payload, id)
        self.structural_insert(self.make_node(payload), id)
        return self

    def delete(
        self, value: Any, comparator: Optional[Comparator] = None
    ) -> Optional[T]:
        node = self.binary_search(value, comparator)
        if node is None:
            return None
        return self.structural_delete(node).removed.payload

    def delete_node(self, locator: NodeLocator) -> Optional[TreeNode[T]]:
        node = self.binary_search_node(locator)
        if node is None:
            return None
        return self.structural_delete(node).removed

    def search(
        self, value: Any, comparator: Optional[Comparator] = None
    ) -> Optional[TreeNode[T]]:
        return self.binary_search(value, comparator)

    def find_id(self, id: str) -> Optional[TreeNode[T]]:
        return self._ids.get(id)

    def copy(self) -> OrderedTree[T]:
        tree = self.__class__(node_class=self._node_cls, **self.config())
        for node in self.bfs():
            tree.insert(node.payload, node.id)
        return tree

    def clear(self):
        for node in list(self.nodes()):
            node._clear_links()
        self._root = None
        self._sentinel.reset()
        self._ids.clear()
        self._len = 0

    def first_node(self) -> TreeNode[T]:
        """The smallest node; raises IndexError on an empty tree."""
        node = self._sentinel.first()
        if node is None:
            raise IndexError("Tree is empty")
        return node

    def last_node(self) -> TreeNode[T]:
        """The largest node; raises IndexError on an empty tree."""
        node = self._sentinel.last()
        if node is None:
            raise IndexError("Tree is empty")
        return node

    def min(self) -> T:
        return self.first_node().payload

    def max(self) -> T:
        return self.last_node().payload

    def pop_min(self) -> T:
        return self.structural_delete(self.first_node()).removed.payload

    def pop_max(self) -> T:
        return self.structural_delete(self.last_node()).removed.payload

    def height(self) -> int:
        """Number of edges on the longest root-to-leaf path; -1 if empty."""
        height = -1
        level = [self._root] if self._root is not None else []
        while level:
            height += 1
            level = [
                child
                for node in level
                for child in (node._left, node._right)
                if child is not None
            ]
        return height

    # traversal:

    def bfs(self) -> Iterator[TreeNode[T]]:
        queue = deque()
        if self._root is not None:
            queue.append(self._root)

        while queue:
            node = queue.popleft()
            yield node
            if node._left is not None:
                queue.append(node._left)
            if node._right is not None:
                queue.append(node._right)

    def walk(self) -> Iterator[Tuple[int, str, TreeNode[T]]]:
        return walk(self._root)

    def print(self, fmt: Optional[Callable[[TreeNode[T]], str]] = None) -> str:
        return render(self.walk(), fmt)

    def nodes(self, reverse: bool = False) -> Iterator[TreeNode[T]]:
        return ThreadIter(self._sentinel, identity, reverse)

    def payloads(self, reverse: bool = False) -> Iterator[T]:
        return ThreadIter(self._sentinel, attrgetter("payload"), reverse)

    def keys(self, reverse: bool = False) -> Iterator[Any]:
        return ThreadIter(self._sentinel, attrgetter("key"), reverse)

    # MutableSet protocol:

    def _from_iterable(self, it: Iterable[T]) -> OrderedTree[T]:
        # set operators build their result here; keep this tree's ordering
        return self.__class__(it, node_class=self._node_cls, **self.config())

    def add(self, payload: T):
        self.insert(payload)

    def discard(self, value: Any):
        self.delete(value)

    def __contains__(self, value: Any) -> bool:
        return self.binary_search(value) is not None

    def __iter__(self) -> Iterator[T]:
        return self.payloads()

    def __reversed__(self) -> Iterator[T]:
        return self.payloads(reverse=True)

    def __len__(self) -> int:
        return self._len

    def __repr__(self) -> str:
        return "{}({!r})".format(self.__class__.__name__, list(self))
