"""Immutable weight-balanced binary search trees."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

K = TypeVar("K")
V = TypeVar("V")

_DELTA = 3
_GAMMA = 2

_MISSING: Any = object()


def _less(a: Any, b: Any) -> bool:
    """Strict ordering in which NaN sorts before every other value."""
    return a < b or (a != a and b == b)


def _compare(a: Any, b: Any) -> int:
    if _less(a, b):
        return -1
    if _less(b, a):
        return 1
    return 0


class Tree(Generic[K, V]):
    """An immutable weight-balanced tree.

    ``Tree()`` is the empty tree. Every operation that changes the tree
    returns a new tree and leaves the original untouched; unchanged parts
    are shared between the two. A non-empty tree is also its own root node.
    """

    __slots__ = ("_left", "_right", "_key", "_value", "_size")

    _left: "Tree[K, V]"
    _right: "Tree[K, V]"
    _key: K
    _value: V
    _size: int

    def __new__(cls) -> "Tree[K, V]":
        return _EMPTY

    # Node accessors

    @property
    def key(self) -> K:
        """The key at the root of this tree."""
        if not self._size:
            raise ValueError("the empty tree has no key")
        return self._key

    @property
    def value(self) -> V:
        """The value at the root of this tree."""
        if not self._size:
            raise ValueError("the empty tree has no value")
        return self._value

    @property
    def left(self) -> "Tree[K, V]":
        """The subtree holding all keys less than the root key."""
        return self._left

    @property
    def right(self) -> "Tree[K, V]":
        """The subtree holding all keys greater than the root key."""
        return self._right

    # Container protocol

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __iter__(self) -> Iterator[K]:
        return (key for key, _ in self.ascend())

    def __contains__(self, key: object) -> bool:
        return self.has(key)

    def __getitem__(self, key: K) -> V:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.ascend())!r})"

    # Lookup

    def get(self, key: K, default: Any = None) -> Any:
        """Return the value for key, or default if key is absent."""
        node = self.floor(key)
        if node is not None and not _less(node._key, key):
            return node._value
        return default

    def has(self, key: Any) -> bool:
        """Report whether key exists in this tree."""
        node = self.floor(key)
        return node is not None and not _less(node._key, key)

    def min(self) -> Optional["Tree[K, V]"]:
        """Return the node with the least key, or None if empty."""
        if not self._size:
            return None
        node = self
        while node._left._size:
            node = node._left
        return node

    def max(self) -> Optional["Tree[K, V]"]:
        """Return the node with the greatest key, or None if empty."""
        if not self._size:
            return None
        node = self
        while node._right._size:
            node = node._right
        return node

    def floor(self, key: K) -> Optional["Tree[K, V]"]:
        """Return the node with the greatest key <= key, or None."""
        node = None
        tree = self
        while tree._size:
            if _less(key, tree._key):
                tree = tree._left
            else:
                node = tree
                tree = tree._right
        return node

    def ceil(self, key: K) -> Optional["Tree[K, V]"]:
        """Return the node with the least key >= key, or None."""
        node = None
        tree = self
        while tree._size:
            if _less(tree._key, key):
                tree = tree._right
            else:
                node = tree
                tree = tree._left
        return node

    # Modification

    def put(self, key: K, value: V) -> "Tree[K, V]":
        """Return a tree with key set to value."""
        return self.patch(key, lambda _node: (value, True))

    def add(self, key: K) -> "Tree[K, V]":
        """Return a tree that contains key; an existing value is kept."""
        return self.patch(key, lambda node: (None, node is None))

    def patch(
        self,
        key: K,
        update: Callable[[Optional["Tree[K, V]"]], "tuple[V, bool]"],
    ) -> "Tree[K, V]":
        """Call update with the node for key (or None) and apply its result.

        update returns ``(value, True)`` to set the value for key, or
        ``(anything, False)`` to leave the tree as it is.
        """
        if not self._size:
            value, ok = update(None)
            if ok:
                return _make(key, value, _EMPTY, _EMPTY)
            return self

        order = _compare(key, self._key)
        if order < 0:
            left = self._left.patch(key, update)
            if left is self._left:
                return self
            return _rebalance_left(self._key, self._value, left, self._right)
        if order > 0:
            right = self._right.patch(key, update)
            if right is self._right:
                return self
            return _rebalance_right(self._key, self._value, self._left, right)

        value, ok = update(self)
        if ok:
            return _make(self._key, value, self._left, self._right)
        return self

    def delete(
        self,
        key: K,
        pred: Optional[Callable[["Tree[K, V]"], bool]] = None,
    ) -> "Tree[K, V]":
        """Return a tree with key removed.

        If pred is given, it is called with the node for key and the key
        is removed only if it returns true.
        """
        if not self._size:
            return self

        order = _compare(key, self._key)
        if order < 0:
            left = self._left.delete(key, pred)
            if left is self._left:
                return self
            return _rebalance_right(self._key, self._value, left, self._right)
        if order > 0:
            right = self._right.delete(key, pred)
            if right is self._right:
                return self
            return _rebalance_left(self._key, self._value, self._left, right)

        if pred is not None and not pred(self):
            return self
        if not self._left._size:
            return self._right
        if not self._right._size:
            return self._left

        if self._left._size > self._right._size:
            left, heir = self._left.delete_max()
            return _rebalance_right(heir._key, heir._value, left, self._right)
        right, heir = self._right.delete_min()
        return _rebalance_left(heir._key, heir._value, self._left, right)

    def delete_min(self) -> "tuple[Tree[K, V], Optional[Tree[K, V]]]":
        """Return the tree without its least key, and the removed node."""
        if not self._size:
            return self, None
        if not self._left._size:
            return self._right, self
        left, node = self._left.delete_min()
        return _rebalance_right(self._key, self._value, left, self._right), node

    def delete_max(self) -> "tuple[Tree[K, V], Optional[Tree[K, V]]]":
        """Return the tree without its greatest key, and the removed node."""
        if not self._size:
            return self, None
        if not self._right._size:
            return self._left, self
        right, node = self._right.delete_max()
        return _rebalance_left(self._key, self._value, self._left, right), node

    # Iteration

    def ascend(self) -> Iterator["tuple[K, V]"]:
        """Iterate over (key, value) pairs in ascending key order."""
        stack: list[Tree[K, V]] = []
        _push_left(stack, self)
        return _ascend_stack(stack)

    def descend(self) -> Iterator["tuple[K, V]"]:
        """Iterate over (key, value) pairs in descending key order."""
        stack: list[Tree[K, V]] = []
        _push_right(stack, self)
        return _descend_stack(stack)

    def ascend_ceil(self, pivot: K) -> Iterator["tuple[K, V]"]:
        """Iterate ascending, starting at the least key >= pivot."""
        stack: list[Tree[K, V]] = []
        tree = self
        while tree._size:
            if _less(tree._key, pivot):
                tree = tree._right
            else:
                stack.append(tree)
                tree = tree._left
        return _ascend_stack(stack)

    def ascend_floor(self, pivot: K) -> Iterator["tuple[K, V]"]:
        """Iterate ascending, starting at the greatest key <= pivot.

        When no key is <= pivot, iteration starts at the least key.
        """
        start = self.floor(pivot)
        if start is None:
            return self.ascend()
        return self.ascend_ceil(start._key)

    def descend_floor(self, pivot: K) -> Iterator["tuple[K, V]"]:
        """Iterate descending, starting at the greatest key <= pivot."""
        stack: list[Tree[K, V]] = []
        tree = self
        while tree._size:
            if _less(pivot, tree._key):
                tree = tree._left
            else:
                stack.append(tree)
                tree = tree._right
        return _descend_stack(stack)

    def descend_ceil(self, pivot: K) -> Iterator["tuple[K, V]"]:
        """Iterate descending, starting at the least key >= pivot.

        When no key is >= pivot, iteration starts at the greatest key.
        """
        start = self.ceil(pivot)
        if start is None:
            return self.descend()
        return self.descend_floor(start._key)

    # Order statistics

    def select(self, i: int) -> Optional["Tree[K, V]"]:
        """Return the node at index i in key order, or None if out of range."""
        tree = self
        while tree._size:
            p = tree._left._size
            if i < p:
                tree = tree._left
            elif i > p:
                i -= p + 1
                tree = tree._right
            else:
                return tree
        return None

    def rank(self, key: K) -> int:
        """Return the number of keys in this tree less than key."""
        k = 0
        tree = self
        while tree._size:
            order = _compare(key, tree._key)
            if order < 0:
                tree = tree._left
            elif order > 0:
                k += tree._left._size + 1
                tree = tree._right
            else:
                return k + tree._left._size
        return k

    # Splitting and filtering

    def split(
        self, key: K
    ) -> "tuple[Tree[K, V], Optional[Tree[K, V]], Tree[K, V]]":
        """Split around key into (lesser keys, node for key or None, greater keys)."""
        if not self._size:
            return self, None, self

        order = _compare(key, self._key)
        if order < 0:
            left, node, right = self._left.split(key)
            return left, node, join(right, self, self._right)
        if order > 0:
            left, node, right = self._right.split(key)
            return join(self._left, self, left), node, right
        return self._left, self, self._right

    def filter(self, pred: Callable[["Tree[K, V]"], bool]) -> "Tree[K, V]":
        """Return a tree of the nodes for which pred returns true."""
        if not self._size:
            return self
        left = self._left.filter(pred)
        right = self._right.filter(pred)
        if pred(self):
            return join(left, self, right)
        return join2(left, right)

    def partition(
        self, pred: Callable[["Tree[K, V]"], bool]
    ) -> "tuple[Tree[K, V], Tree[K, V]]":
        """Return trees of the nodes for which pred is true and false."""
        if not self._size:
            return self, self
        left_true, left_false = self._left.partition(pred)
        right_true, right_false = self._right.partition(pred)
        if pred(self):
            return join(left_true, self, right_true), join2(left_false, right_false)
        return join2(left_true, right_true), join(left_false, self, right_false)

    def collect(self) -> "dict[K, V]":
        """Return the key/value pairs of this tree as a new dict."""
        return dict(self.ascend())


_EMPTY: Tree[Any, Any] = object.__new__(Tree)
_EMPTY._key = None
_EMPTY._value = None
_EMPTY._left = _EMPTY
_EMPTY._right = _EMPTY
_EMPTY._size = 0


def _make(key: Any, value: Any, left: Tree, right: Tree) -> Tree:
    node: Tree = object.__new__(Tree)
    node._key = key
    node._value = value
    node._left = left
    node._right = right
    node._size = left._size + right._size + 1
    return node


def _is_heavy(a: Tree, b: Tree) -> bool:
    return a._size + 1 > _DELTA * (b._size + 1)


def _is_single(a: Tree, b: Tree) -> bool:
    return a._size + 1 < _GAMMA * (b._size + 1)


def _rebalance_left(key: Any, value: Any, left: Tree, right: Tree) -> Tree:
    """Build a node whose left side may have become too heavy."""
    if _is_heavy(left, right):
        if _is_single(left._right, left._left):
            return _make(
                left._key,
                left._value,
                left._left,
                _make(key, value, left._right, right),
            )
        mid = left._right
        return _make(
            mid._key,
            mid._value,
            _make(left._key, left._value, left._left, mid._left),
            _make(key, value, mid._right, right),
        )
    return _make(key, value, left, right)


def _rebalance_right(key: Any, value: Any, left: Tree, right: Tree) -> Tree:
    """Build a node whose right side may have become too heavy."""
    if _is_heavy(right, left):
        if _is_single(right._left, right._right):
            return _make(
                right._key,
                right._value,
                _make(key, value, left, right._left),
                right._right,
            )
        mid = right._left
        return _make(
            mid._key,
            mid._value,
            _make(key, value, left, mid._left),
            _make(right._key, right._value, mid._right, right._right),
        )
    return _make(key, value, left, right)


def _push_left(stack: list, tree: Tree) -> None:
    while tree._size:
        stack.append(tree)
        tree = tree._left


def _push_right(stack: list, tree: Tree) -> None:
    while tree._size:
        stack.append(tree)
        tree = tree._right


def _ascend_stack(stack: list) -> Iterator[tuple]:
    while stack:
        node = stack.pop()
        yield node._key, node._value
        _push_left(stack, node._right)


def _descend_stack(stack: list) -> Iterator[tuple]:
    while stack:
        node = stack.pop()
        yield node._key, node._value
        _push_right(stack, node._left)


def join(left: Tree[K, V], node: Tree[K, V], right: Tree[K, V]) -> Tree[K, V]:
    """Join two trees around the key and value of node.

    Every key in left must be less than node's key, and every key in
    right greater. Returns node itself if its children are left and right.
    """
    if left is node._left and right is node._right:
        return node
    if _is_heavy(right, left):
        return _rebalance_left(
            right._key, right._value, join(left, node, right._left), right._right
        )
    if _is_heavy(left, right):
        return _rebalance_right(
            left._key, left._value, left._left, join(left._right, node, right)
        )
    return _make(node._key, node._value, left, right)


def join2(left: Tree[K, V], right: Tree[K, V]) -> Tree[K, V]:
    """Join two trees where every key in left is less than every key in right."""
    if not left._size:
        return right
    if not right._size:
        return left
    if left._size > right._size:
        left, heir = left.delete_max()
    else:
        right, heir = right.delete_min()
    assert heir is not None
    return join(left, heir, right)