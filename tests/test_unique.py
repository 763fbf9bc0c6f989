import pytest

from doutil.unique import (
    contains,
    first,
    first_or,
    index,
    index_or,
    last,
    last_or,
    unique,
)


@pytest.mark.parametrize(
    "items, expected",
    [
        ([1, 22, 33, 22, 33, 4], [1, 22, 33, 4]),
        ([2, 23, 33, 22, 33, 4], [2, 23, 33, 22, 4]),
        ([2, 23, 33, 22, 4], [2, 23, 33, 22, 4]),
    ],
)
def test_unique(items, expected):
    assert unique(items) == expected


@pytest.mark.parametrize("element, expected", [(0, False), (1, True)])
def test_contains(element, expected):
    assert contains([1, 2, 3], element) is expected


@pytest.mark.parametrize("items, expected", [([1], 1), ([1, 2], 1)])
def test_first(items, expected):
    assert first(items) == expected


def test_first_empty_raises():
    with pytest.raises(IndexError):
        first([])


@pytest.mark.parametrize("items, expected", [([1], 1), ([1, 2], 2)])
def test_last(items, expected):
    assert last(items) == expected


def test_last_empty_raises():
    with pytest.raises(IndexError):
        last([])


@pytest.mark.parametrize(
    "items, i, expected",
    [([1], 0, 1), ([1, 2], 0, 1), ([1, 2], 1, 2)],
)
def test_index(items, i, expected):
    assert index(items, i) == expected


@pytest.mark.parametrize("items, i", [([], 0), ([1], 1), ([1, 2], 2), ([1, 2], -1)])
def test_index_out_of_range(items, i):
    with pytest.raises(IndexError):
        index(items, i)


@pytest.mark.parametrize("items, expected", [([], 0), ([1], 1), ([1, 2], 1)])
def test_first_or(items, expected):
    assert first_or(items, 0) == expected


@pytest.mark.parametrize("items, expected", [([], 0), ([1], 1), ([1, 2], 2)])
def test_last_or(items, expected):
    assert last_or(items, 0) == expected


@pytest.mark.parametrize(
    "items, i, expected",
    [
        ([], 0, 0),
        ([1], 0, 1),
        ([1], 1, 0),
        ([1, 2], 0, 1),
        ([1, 2], 1, 2),
        ([1, 2], 2, 0),
    ],
)
def test_index_or(items, i, expected):
    assert index_or(items, i, 0) == expected


def test_or_defaults_to_none():
    assert first_or([]) is None
    assert last_or([]) is None
    assert index_or([], 3) is None