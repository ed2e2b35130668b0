"""Small integer helpers."""


def minimum(a: int, b: int) -> int:
    """Return the smaller of the two numbers."""
    return a if a < b else b


def maximum(a: int, b: int) -> int:
    """Return the bigger of the two numbers."""
    return a if a > b else b