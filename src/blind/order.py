"""Resolution of the final argument order of a bound call.

The order only depends on the *shape* of a binding: which bound positions
hold placeholders (and which late argument each one names) and how many late
arguments the call supplies. The values themselves never matter, so one
resolved order is shared by every call, and every bound call, of that shape.
"""
import dataclasses
import enum
import functools
import logging
from typing import Any, Iterable, NamedTuple

from blind.errors import ShapeError
from blind.placeholders import is_placeholder

logger = logging.getLogger(__name__)

Shape = tuple[int, ...]
KeywordShape = tuple[tuple[str, int], ...]


class Source(enum.Enum):
    BOUND = "bound"
    LATE = "late"


class Slot(NamedTuple):
    """Selects one argument: position *index* of the bound or the late arguments."""
    source: Source
    index: int

    def __repr__(self) -> str:
        return f"{self.source.value}[{self.index}]"


@dataclasses.dataclass(frozen=True)
class ArgumentOrder:
    """Immutable, shape-derived selection of the arguments of one call."""
    positional: tuple[Slot, ...]
    keywords: tuple[tuple[str, Slot], ...] = ()

    def __len__(self) -> int:
        return len(self.positional) + len(self.keywords)

    def __repr__(self) -> str:
        parts = [repr(slot) for slot in self.positional]
        parts += [f"{name}={slot!r}" for name, slot in self.keywords]
        return f"ArgumentOrder({', '.join(parts)})"


def placeholder_shape(values: Iterable[Any]) -> Shape:
    """Return the placeholder index of each value, 0 for anything else."""
    return tuple(is_placeholder(v) for v in values)


def _check_shape(shape: Shape, keyword_shape: KeywordShape, late_arity: int) -> None:
    if isinstance(late_arity, bool) or not isinstance(late_arity, int) or late_arity < 0:
        raise ValueError(f"late arity must be a non-negative int, got {late_arity!r}")
    indices = [*shape, *(k for _, k in keyword_shape)]
    for k in indices:
        if isinstance(k, bool) or not isinstance(k, int) or k < 0:
            raise ValueError(f"shape entries must be non-negative ints, got {k!r}")
    highest = max(indices, default=0)
    if highest > late_arity:
        raise ShapeError(
            f"Placeholder _{highest} refers to late argument {highest}, "
            f"but only {late_arity} late argument(s) were supplied"
        )


@functools.lru_cache(maxsize=1024)
def _resolve(shape: Shape, keyword_shape: KeywordShape, late_arity: int) -> ArgumentOrder:
    logger.debug("resolving argument order for shape=%s keywords=%s late_arity=%s", shape, keyword_shape, late_arity)
    n_positional = len(shape)
    positional = [
        Slot(Source.LATE, k - 1) if k else Slot(Source.BOUND, i)
        for i, k in enumerate(shape)
    ]
    keywords = tuple(
        (name, Slot(Source.LATE, k - 1) if k else Slot(Source.BOUND, n_positional + m))
        for m, (name, k) in enumerate(keyword_shape)
    )
    targets = {*shape, *(k for _, k in keyword_shape)}
    positional += [Slot(Source.LATE, j) for j in range(late_arity) if j + 1 not in targets]
    return ArgumentOrder(tuple(positional), keywords)


def resolve_order(shape: Iterable[int], late_arity: int, keyword_shape: Iterable[tuple[str, int]] = ()) -> ArgumentOrder:
    """Return the order in which bound and late arguments are passed to the callable.

    *shape* holds one entry per positional bound argument: the 1-based index of
    the late argument a placeholder stands for, or 0 for a bound value.
    *keyword_shape* holds ``(name, index)`` pairs for bound keyword arguments,
    whose values follow the positional ones among the bound arguments.

    Each bound position is kept where it is, placeholders being replaced by the
    late argument they name. The late arguments no placeholder names are then
    appended left to right.

    >>> resolve_order((2, 1, 0), 2)
    ArgumentOrder(late[1], late[0], bound[2])

    Raises `ShapeError` if a placeholder names a late argument past *late_arity*.
    """
    shape = tuple(shape)
    keyword_shape = tuple((name, k) for name, k in keyword_shape)
    _check_shape(shape, keyword_shape, late_arity)
    return _resolve(shape, keyword_shape, late_arity)


resolve_order.cache_info = _resolve.cache_info  # type: ignore[attr-defined]
resolve_order.cache_clear = _resolve.cache_clear  # type: ignore[attr-defined]
