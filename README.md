# wbtree

Immutable weight-balanced trees for Python.

A weight-balanced tree is a self-balancing binary search tree in which each
node knows the size of its subtree. That makes it an ordered map or set, and
also an order-statistic tree: you can find the *i*-th key or the rank of a key
in logarithmic time.

Trees are immutable. Every operation that changes a tree returns a new one and
shares all the nodes it can with the old one, so keeping earlier versions
around costs little.

No dependencies beyond the standard library. Python 3.10 or later.

## The `Tree` class

`wbtree.tree.Tree` is both the tree and its nodes: a non-empty tree is its own
root node. `Tree()` gives the empty tree.

```python
from wbtree.tree import Tree

t = Tree().put(1, "one").put(3, "three").put(2, "two")
len(t)          # 3
bool(Tree())    # False
list(t)         # [1, 2, 3]   iterating a tree yields its keys in order
t[2]            # "two"; a missing key raises KeyError
2 in t          # True
```

A node exposes `key`, `value`, `left` and `right`. `left` and `right` are
subtrees (the empty tree when there is none); reading `key` or `value` of the
empty tree raises `ValueError`.

Keys only need to be ordered with `<`. Values unordered with themselves, such
as NaN, sort before every other key.

## Building trees

```python
from wbtree.build import make_set, make_map

primes = make_set(7, 2, 5, 3, 3, 11)       # duplicates are dropped, values are None
ages = make_map({"ann": 31, "bob": 27, "cy": 45})
```

Both build a perfectly balanced tree in one pass from the sorted keys.

## Changing trees

`put`, `add`, `patch` and `delete` return a new tree and leave the original
untouched:

```python
older = ages.put("dee", 52)
assert "dee" in older and "dee" not in ages

fewer = older.delete("bob")
assert len(fewer) == 3
```

- `put(key, value)` sets a value.
- `add(key)` makes sure a key is present; a new key gets the value `None`, an
  existing key keeps its value.
- `patch(key, update)` calls `update` with the node for the key (or `None`,
  when the key is missing). `update` returns `(value, True)` to set the value,
  or `(anything, False)` to leave the tree alone.
- `delete(key, pred=None)` removes a key; if `pred` is given it is called with
  the node and must return true for the removal to happen.
- `delete_min()` and `delete_max()` remove the least or greatest key and
  return the new tree together with the removed node (`None` if the tree was
  empty).

When nothing changes, the very same tree object is returned.

## Looking things up

```python
ages.get("ann")             # value, or None
ages.get("zed", 0)          # value, or the default given
ages.has("bob")             # same as "bob" in ages
ages.min(), ages.max()      # nodes holding the least and greatest keys
ages.floor("bz")            # node with the greatest key <= "bz"
ages.ceil("bz")             # node with the least key >= "bz"
ages.select(1)              # node at index 1 in key order
ages.rank("cy")             # number of keys less than "cy"
```

`min`, `max`, `floor`, `ceil` and `select` return `None` when there is no such
node.

## Iterating in order

```python
for key, value in ages.ascend():
    ...
for key, value in ages.descend():
    ...
```

Ranged iteration starts from a pivot:

- `ascend_ceil(pivot)` — upward from the least key `>= pivot`
- `ascend_floor(pivot)` — upward from the greatest key `<= pivot`, or from the
  least key if none is `<= pivot`
- `descend_floor(pivot)` — downward from the greatest key `<= pivot`
- `descend_ceil(pivot)` — downward from the least key `>= pivot`, or from the
  greatest key if none is `>= pivot`

`collect()` gathers the whole tree into a plain `dict`.

## Splitting and filtering

```python
left, node, right = ages.split("bob")   # keys below, the node (or None), keys above
adults = ages.filter(lambda n: n.value >= 30)
kept, dropped = ages.partition(lambda n: n.value >= 30)
```

The lower-level `join(left, node, right)` and `join2(left, right)` in
`wbtree.tree` rebuild a balanced tree from pieces whose keys are already in
order. `join` uses the key and value of `node`, and returns `node` itself when
its children are already `left` and `right`.

## Set operations and comparisons

```python
from wbtree.setops import (
    union, intersection, difference, symmetric_difference,
    equal, subset, overlap,
)

a = make_set(1, 2, 3, 4)
b = make_set(3, 4, 5)

union(a, b)                 # 1 2 3 4 5 (values from b win)
intersection(a, b)          # 3 4       (values from a win)
difference(a, b)            # 1 2
symmetric_difference(a, b)  # 1 2 5

equal(a, b)                 # same key/value pairs?
subset(a, b)                # every pair of a also in b, with equal values?
overlap(a, b)               # any key in common?
```

These operations work by splitting and joining, so combining trees of similar
size costs far less than inserting one into the other key by key.

## Running the tests

```
pip install -e ".[test]"
pytest
```