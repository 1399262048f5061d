"""Building balanced trees directly from collections of keys."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Hashable, Mapping, Sequence, TypeVar

from wbtree.tree import Tree, _compare, _less, join

K = TypeVar("K")
V = TypeVar("V")

_sort_key = cmp_to_key(_compare)


def _increasing(keys: Sequence[Any]) -> bool:
    return all(_less(a, b) for a, b in zip(keys, keys[1:]))


def _compact(keys: Sequence[Any]) -> list:
    out: list = []
    for key in keys:
        if not out or out[-1] != key:
            out.append(key)
    return out


def _build(keys: Sequence[Any], values: Mapping[Any, Any] | None) -> Tree:
    if not keys:
        return Tree()
    mid = len(keys) // 2
    left = _build(keys[:mid], values)
    right = _build(keys[mid + 1 :], values)
    key = keys[mid]
    node = Tree().put(key, None if values is None else values[key])
    return join(left, node, right)


def make_set(*args: Hashable) -> Tree:
    """Build a tree holding the given keys, each with the value None."""
    keys = list(args)
    if not _increasing(keys):
        keys = _compact(sorted(keys, key=_sort_key))
    return _build(keys, None)


def make_map(mapping: Mapping[K, V]) -> Tree:
    """Build a tree holding the key/value pairs of a mapping."""
    keys = sorted(mapping, key=_sort_key)
    return _build(keys, mapping)