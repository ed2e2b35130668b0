import pytest

from cordterm.maths import maximum, minimum


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        (1, 1, 1),
        (0, 0, 0),
        (-1, -1, -1),
        (3, 2, 3),
        (2, 3, 3),
        (-2, -3, -2),
    ],
    ids=[
        "equal numbers above 0",
        "two zeroes",
        "equal numbers below zero",
        "first is bigger",
        "first is smaller",
        "both negative and first is bigger",
    ],
)
def test_maximum(a, b, expected):
    assert maximum(a, b) == expected


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        (1, 1, 1),
        (0, 0, 0),
        (-1, -1, -1),
        (3, 2, 2),
        (2, 3, 2),
        (-2, -3, -3),
    ],
    ids=[
        "equal numbers above 0",
        "two zeroes",
        "equal numbers below zero",
        "first is bigger",
        "first is smaller",
        "both negative and first is bigger",
    ],
)
def test_minimum(a, b, expected):
    assert minimum(a, b) == expected