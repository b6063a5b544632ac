import pytest

from osprojects.elections.connlist import ConnList


def _same(key, item):
    return key == item


def _ident(item):
    return item


def test_requires_matching_function():
    with pytest.raises(ValueError):
        ConnList(None)


def test_unordered_keeps_insertion_order():
    lst = ConnList(_same)
    for item in ["c", "a", "b"]:
        lst.insert(item)
    assert list(lst) == ["c", "a", "b"]
    assert len(lst) == 3


def test_unordered_allows_repeats():
    lst = ConnList(_same)
    lst.insert("x")
    lst.insert("x")
    assert list(lst) == ["x", "x"]


def test_ordered_keeps_descending_key_order():
    lst = ConnList(_same, key=_ident)
    for item in ["b", "d", "a", "c", "e"]:
        lst.insert(item)
    assert list(lst) == sorted(["b", "d", "a", "c", "e"], reverse=True)


def test_ordered_rejects_duplicates_anywhere():
    lst = ConnList(_same, key=_ident)
    for item in [3, 1, 2]:
        lst.insert(item)
    for dup in [3, 2, 1]:
        with pytest.raises(ValueError):
            lst.insert(dup)
    assert list(lst) == [3, 2, 1]


def test_ordered_with_key_function_on_records():
    lst = ConnList(lambda k, r: r["id"] == k, key=lambda r: r["id"])
    lst.insert({"id": "B"})
    lst.insert({"id": "A"})
    lst.insert({"id": "C"})
    assert [r["id"] for r in lst] == ["C", "B", "A"]


def test_delete_returns_item_and_removes_it():
    lst = ConnList(lambda k, r: r[0] == k)
    lst.insert((1, "one"))
    lst.insert((2, "two"))
    lst.insert((3, "three"))
    assert lst.delete(2) == (2, "two")
    assert list(lst) == [(1, "one"), (3, "three")]


def test_delete_head_and_tail():
    lst = ConnList(_same)
    for item in [1, 2, 3]:
        lst.insert(item)
    assert lst.delete(1) == 1
    assert lst.delete(3) == 3
    assert list(lst) == [2]


def test_delete_missing_raises_key_error():
    lst = ConnList(_same)
    lst.insert(1)
    with pytest.raises(KeyError):
        lst.delete(9)
    assert len(lst) == 1


def test_delete_from_empty_raises_key_error():
    with pytest.raises(KeyError):
        ConnList(_same).delete(1)