import math
import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from wbtree.tree import Tree, join, join2


def _heavy(a, b):
    return len(a) + 1 > 3 * (len(b) + 1)


def _check(tree):
    """Assert the search, balance and size invariants; return the size."""
    if not tree:
        assert len(tree) == 0
        return 0
    left, right = tree.left, tree.right
    if left:
        assert left.key < tree.key
    if right:
        assert tree.key < right.key
    assert not _heavy(left, right)
    assert not _heavy(right, left)
    size = 1 + _check(left) + _check(right)
    assert size == len(tree)
    return size


def _odd_tree():
    return Tree().add(1).add(9).add(5).add(3).add(7)


def _keys(pairs):
    return [k for k, _ in pairs]


def _uppercase_existing(node):
    if node is not None:
        return node.value.upper(), True
    return "", False


# tree


def test_key_value_left_right():
    tt = Tree()
    assert len(tt.left) == 0
    assert len(tt.right) == 0

    tt = tt.put(1, "one")
    assert tt.key == 1
    assert tt.value == "one"
    assert len(tt.left) == 0
    assert len(tt.right) == 0


def test_empty_key_raises():
    with pytest.raises(ValueError):
        Tree().key
    with pytest.raises(ValueError):
        Tree().value


def test_put_get():
    tt = Tree().put(1, "one").put(3, "three").put(5, "five")
    tt = tt.put(4, "four").put(2, "two")
    tt = tt.put(3, "THREE")
    assert _check(tt) == 5

    assert tt.get(0) is None
    assert tt.get(0, "missing") == "missing"
    assert tt.get(1) == "one"
    assert tt.get(3) == "THREE"
    assert tt.get(5) == "five"


def test_getitem_and_contains():
    tt = Tree().put(1, "one").put(2, "two")
    assert tt[2] == "two"
    assert 1 in tt
    assert 3 not in tt
    with pytest.raises(KeyError):
        tt[3]


def test_add_has_delete():
    tt = Tree().add(1).add(3).add(5)
    assert tt.has(3)

    tt = tt.delete(3)
    assert not tt.has(3)

    tt = tt.delete(5).delete(1)
    assert len(tt) == 0
    assert not tt


def test_add_floor_ceil():
    tt = Tree().add(1).add(3).add(5)
    assert _check(tt) == 3

    assert tt.floor(0) is None
    assert tt.floor(3).key == 3
    assert tt.floor(6).key == 5

    assert tt.ceil(0).key == 1
    assert tt.ceil(3).key == 3
    assert tt.ceil(6) is None


def test_add_patch_get():
    tt = Tree().put(1, "one").put(3, "three").put(5, "five")
    tt = tt.patch(key=0, update=_uppercase_existing)
    tt = tt.patch(key=3, update=_uppercase_existing)
    assert _check(tt) == 3

    assert not tt.has(0)
    assert tt.get(3) == "THREE"


def test_add_increasing():
    tt = Tree()
    for i in range(7):
        tt = tt.add(i)
    assert _check(tt) == 7
    assert list(tt) == list(range(7))


def test_add_decreasing():
    tt = Tree().add(6).add(5).add(4).add(3).add(2)
    assert _check(tt) == 5
    assert list(tt) == [2, 3, 4, 5, 6]


def test_add_existing():
    tt = Tree().add(1).add(3).add(5)
    assert tt.add(1) is tt
    assert tt.add(5) is tt


def test_delete():
    tt = Tree()
    for i in range(7):
        tt = tt.add(i)
    tt = tt.delete(0).delete(3).delete(1)
    assert _check(tt) == 4
    assert list(tt) == [2, 4, 5, 6]


def test_delete_min():
    tt = Tree()
    for i in range(7):
        tt = tt.add(i)

    for i in range(7):
        assert tt.min().key == i
        tt, node = tt.delete_min()
        assert node.key == i
        _check(tt)

    assert len(tt) == 0
    assert tt.min() is None
    rest, node = tt.delete_min()
    assert node is None
    assert len(rest) == 0


def test_delete_max():
    tt = Tree()
    for i in range(7):
        tt = tt.add(i)

    for i in range(6, -1, -1):
        assert tt.max().key == i
        tt, node = tt.delete_max()
        assert node.key == i
        _check(tt)

    assert len(tt) == 0
    assert tt.max() is None
    rest, node = tt.delete_max()
    assert node is None
    assert len(rest) == 0


def test_delete_missing():
    tt = Tree().add(1).add(3).add(5)
    assert tt.delete(0) is tt
    assert tt.delete(2) is tt
    assert tt.delete(4) is tt
    assert tt.delete(6) is tt


def test_delete_pred():
    tt = Tree().add(1).add(3).add(5)
    assert tt.delete(3, lambda node: False) is tt
    assert list(tt.delete(3, lambda node: node.key == 3)) == [1, 5]


def test_persistence():
    base = Tree().put(1, "one").put(2, "two")
    changed = base.put(2, "TWO").delete(1)
    assert base.collect() == {1: "one", 2: "two"}
    assert changed.collect() == {2: "TWO"}


def test_nan_keys():
    nan = float("nan")
    tt = Tree().put(1.0, "one").put(nan, "nan").put(-1.0, "minus")
    assert tt.get(nan) == "nan"
    assert math.isnan(tt.min().key)
    assert len(tt.put(nan, "again")) == 3


@settings(max_examples=200)
@given(st.lists(st.integers(min_value=0, max_value=255), max_size=200))
def test_fuzz_tree(cmds):
    tt = Tree()
    for i, cmd in enumerate(cmds):
        if i % 3 == 0:
            tt = tt.add(cmd)
            assert tt.has(cmd)
        elif i % 3 == 1:
            tt = tt.delete(cmd)
            assert not tt.has(cmd)
        else:
            tt = tt.put(cmd, cmd)
            assert tt.get(cmd) == cmd
        _check(tt)


def test_add_delete_random():
    tt = Tree()
    rng = random.Random(42)
    present = set()

    for _ in range(1000):
        n = rng.randrange(1000)
        tt = tt.add(n)
        present.add(n)
        assert tt.has(n)
    assert _check(tt) == len(present)

    for _ in range(1000):
        n = rng.randrange(1000)
        tt = tt.delete(n)
        present.discard(n)
        assert not tt.has(n)
    assert _check(tt) == len(present)
    assert list(tt) == sorted(present)


def test_repr():
    assert repr(Tree().put(2, "b").put(1, "a")) == "Tree([(1, 'a'), (2, 'b')])"


# iteration


def test_put_get_ascend_descend():
    tt = Tree().add(1).add(3).add(5)
    tt = tt.add(4).add(2)
    tt = tt.add(3)

    assert _keys(tt.add(0).ascend()) == [0, 1, 2, 3, 4, 5]
    assert _keys(tt.add(6).descend()) == [6, 5, 4, 3, 2, 1]


def test_iteration_stops_early():
    tt = _odd_tree()
    it = tt.ascend()
    assert next(it) == (1, None)
    assert next(it) == (3, None)


@pytest.mark.parametrize(
    "pivot, expected",
    [(4, [5, 7, 9]), (3, [3, 5, 7, 9]), (0, [1, 3, 5, 7, 9]), (10, [])],
)
def test_ascend_ceil(pivot, expected):
    assert _keys(_odd_tree().ascend_ceil(pivot)) == expected


@pytest.mark.parametrize(
    "pivot, expected",
    [(4, [3, 5, 7, 9]), (3, [3, 5, 7, 9]), (0, [1, 3, 5, 7, 9])],
)
def test_ascend_floor(pivot, expected):
    assert _keys(_odd_tree().ascend_floor(pivot)) == expected


@pytest.mark.parametrize(
    "pivot, expected",
    [(6, [5, 3, 1]), (7, [7, 5, 3, 1]), (10, [9, 7, 5, 3, 1]), (0, [])],
)
def test_descend_floor(pivot, expected):
    assert _keys(_odd_tree().descend_floor(pivot)) == expected


@pytest.mark.parametrize(
    "pivot, expected",
    [(6, [7, 5, 3, 1]), (7, [7, 5, 3, 1]), (10, [9, 7, 5, 3, 1])],
)
def test_descend_ceil(pivot, expected):
    assert _keys(_odd_tree().descend_ceil(pivot)) == expected


def test_iterate_empty():
    assert list(Tree().ascend()) == []
    assert list(Tree().descend_ceil(3)) == []


# order statistics


def _stats_tree():
    tt = Tree().put(1, "one").put(3, "three").put(5, "five")
    tt = tt.put(4, "four").put(2, "two")
    return tt.put(3, "THREE")


def test_select():
    tt = _stats_tree()
    for i in range(5):
        assert tt.select(i).key == i + 1
    assert tt.select(-1) is None
    assert tt.select(len(tt)) is None


@pytest.mark.parametrize("key, rank", [(0, 0), (1, 0), (3, 2), (5, 4), (6, 5)])
def test_rank(key, rank):
    assert _stats_tree().rank(key) == rank


# split, filter, partition, collect


def test_split():
    tt = _stats_tree()
    left, node, right = tt.split(3)
    assert list(left) == [1, 2]
    assert node.key == 3 and node.value == "THREE"
    assert list(right) == [4, 5]
    _check(left)
    _check(right)

    left, node, right = tt.split(0)
    assert node is None
    assert len(left) == 0
    assert list(right) == [1, 2, 3, 4, 5]


def _six():
    tt = Tree()
    for i in range(6):
        tt = tt.add(i)
    return tt


def test_filter():
    even = _six().filter(lambda node: node.key % 2 == 0)
    assert list(even) == [0, 2, 4]
    assert _check(even) == 3


def test_partition():
    even, odd = _six().partition(lambda node: node.key % 2 == 0)
    assert list(even) == [0, 2, 4]
    assert list(odd) == [1, 3, 5]
    _check(even)
    _check(odd)


def test_collect():
    tt = Tree().put(2, "two").put(1, "one")
    assert tt.collect() == {1: "one", 2: "two"}
    assert Tree().collect() == {}


# join


def _sides(ints):
    left, right = Tree(), Tree()
    for i in ints:
        if i > 0:
            right = right.add(i)
        elif i < 0:
            left = left.add(i)
    return left, right


def _signed(raw):
    return [b - 256 if b > 127 else b for b in raw]


def _join3_fuzz(ints):
    left, right = _sides(ints)
    zero = Tree().put(0, None)
    tree = join(left, zero, right)
    _check(tree)
    negatives = sorted({i for i in ints if i < 0})
    positives = sorted({i for i in ints if i > 0})
    assert list(tree) == negatives + [0] + positives


def _join2_fuzz(ints):
    left, right = _sides(ints)
    tree = join2(left, right)
    _check(tree)
    assert list(tree) == sorted({i for i in ints if i != 0})


def test_join_identity():
    tt = Tree().add(0).add(1).add(2)
    assert join(tt.left, tt, tt.right) is tt


def test_join_random():
    rng = random.Random(42)
    for _ in range(200):
        raw = [rng.randrange(256) for _ in range(rng.randrange(512))]
        _join3_fuzz(_signed(raw))


@given(st.lists(st.integers(min_value=-128, max_value=127), max_size=300))
def test_join_fuzz(ints):
    _join3_fuzz(ints)


def test_join2_identity():
    tt = Tree().add(0).add(1).add(2)
    assert join2(tt, Tree()) is tt
    assert join2(Tree(), tt) is tt


def test_join2_random():
    rng = random.Random(42)
    for _ in range(200):
        raw = [rng.randrange(256) for _ in range(rng.randrange(512))]
        _join2_fuzz(_signed(raw))


@given(st.lists(st.integers(min_value=-128, max_value=127), max_size=300))
def test_join2_fuzz(ints):
    _join2_fuzz(ints)