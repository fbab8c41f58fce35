"""Sentinels marking where a late argument goes in a bound call."""
from typing import Any


class Placeholder:
    """Sentinel meaning: 'the k-th late argument goes here' (k is 1-based)."""
    __slots__ = ("index",)

    def __init__(self, index: int):
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"Placeholder index must be an int, not {type(index).__name__}")
        if index < 1:
            raise ValueError(f"Placeholder index must be at least 1, got {index}")
        self.index = index

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Placeholder):
            return self.index == other.index
        return NotImplemented

    def __hash__(self) -> int:
        return hash((Placeholder, self.index))

    def __repr__(self) -> str:
        return f"_{self.index}"

    def __reduce__(self):
        return placeholder, (self.index,)


_PREDEFINED = tuple(Placeholder(k) for k in range(1, 11))
_1, _2, _3, _4, _5, _6, _7, _8, _9, _10 = _PREDEFINED


def placeholder(index: int) -> Placeholder:
    """Return the placeholder for the *index*-th late argument.

    >>> placeholder(2) is _2
    True
    """
    if isinstance(index, int) and not isinstance(index, bool) and 1 <= index <= len(_PREDEFINED):
        return _PREDEFINED[index - 1]
    return Placeholder(index)


def is_placeholder(value: Any) -> int:
    """Return the 1-based index of *value* if it is a placeholder, otherwise 0."""
    if isinstance(value, Placeholder):
        return value.index
    return 0
