"""Set operations and comparisons between trees."""

from __future__ import annotations

from typing import TypeVar

from wbtree.tree import Tree, _compare, join, join2

K = TypeVar("K")
V = TypeVar("V")


def union(t1: Tree[K, V], t2: Tree[K, V]) -> Tree[K, V]:
    """Return the union of two trees; values from t2 win."""
    if t1 is t2 or not t1:
        return t2
    if not t2:
        return t1
    left, _, right = t1.split(t2.key)
    left = union(left, t2.left)
    right = union(right, t2.right)
    return join(left, t2, right)


def intersection(t1: Tree[K, V], t2: Tree[K, V]) -> Tree[K, V]:
    """Return the intersection of two trees; values from t1 win."""
    if t1 is t2:
        return t1
    if not t1 or not t2:
        return Tree()
    left, node, right = t1.split(t2.key)
    left = intersection(left, t2.left)
    right = intersection(right, t2.right)
    if node is None:
        return join2(left, right)
    return join(left, node, right)


def difference(t1: Tree[K, V], t2: Tree[K, V]) -> Tree[K, V]:
    """Return the keys of t1 that are not in t2."""
    if t1 is t2 or not t1:
        return Tree()
    if not t2:
        return t1
    left, _, right = t1.split(t2.key)
    left = difference(left, t2.left)
    right = difference(right, t2.right)
    return join2(left, right)


def symmetric_difference(t1: Tree[K, V], t2: Tree[K, V]) -> Tree[K, V]:
    """Return the keys that are in exactly one of the two trees."""
    if t1 is t2:
        return Tree()
    if not t1:
        return t2
    if not t2:
        return t1
    left, node, right = t1.split(t2.key)
    left = symmetric_difference(left, t2.left)
    right = symmetric_difference(right, t2.right)
    if node is None:
        return join(left, t2, right)
    return join2(left, right)


def equal(t1: Tree[K, V], t2: Tree[K, V]) -> bool:
    """Report whether two trees hold the same key/value pairs."""
    if t1 is t2:
        return True
    if len(t1) != len(t2):
        return False
    for (k1, v1), (k2, v2) in zip(t1.ascend(), t2.ascend()):
        # Keys that are both unordered (NaN) count as the same key.
        if (k1 != k2 and (k1 == k1 or k2 == k2)) or v1 != v2:
            return False
    return True


def subset(t1: Tree[K, V], t2: Tree[K, V]) -> bool:
    """Report whether t2 holds every key/value pair of t1."""
    if t1 is t2 or not t1:
        return True
    remaining1, remaining2 = len(t1), len(t2)
    if remaining1 > remaining2:
        return False

    others = t2.ascend()
    for k1, v1 in t1.ascend():
        while True:
            if remaining1 > remaining2:
                return False
            k2, v2 = next(others)
            remaining2 -= 1
            order = _compare(k1, k2)
            if order < 0:
                return False
            if order == 0:
                if v1 != v2:
                    return False
                break
        remaining1 -= 1
    return True


def overlap(t1: Tree[K, V], t2: Tree[K, V]) -> bool:
    """Report whether the two trees share any key."""
    if not t1 or not t2:
        return False
    if t1 is t2:
        return True

    first, second = t1.ascend(), t2.ascend()
    k1, _ = next(first)
    k2, _ = next(second)
    try:
        while True:
            order = _compare(k1, k2)
            if order < 0:
                k1, _ = next(first)
            elif order > 0:
                k2, _ = next(second)
            else:
                return True
    except StopIteration:
        return False