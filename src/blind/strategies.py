"""Strategies that fabricate binding shapes and the arguments that fit them.
"""
import keyword
from typing import Any

from hypothesis import strategies as st
from hypothesis.strategies import DrawFn, SearchStrategy

from blind.order import KeywordShape, Shape
from blind.placeholders import Placeholder, placeholder

MAX_LATE = 6
MAX_BOUND = 6


def valid_keyword(x: str) -> bool:
    return x.isidentifier() and not keyword.iskeyword(x)


KEYWORD_STRATEGY = st.text(st.characters(codec='ascii', categories=("Ll",)), min_size=1, max_size=8).filter(valid_keyword)


def placeholders(max_index: int = MAX_LATE) -> SearchStrategy[Placeholder]:
    return st.integers(min_value=1, max_value=max_index).map(placeholder)


@st.composite
def binding_shapes(
    draw: DrawFn,
    *,
    max_bound: int = MAX_BOUND,
    max_late: int = MAX_LATE,
    keywords: bool = False,
) -> tuple[Shape, KeywordShape, int]:
    """
    Draw ``(shape, keyword_shape, late_arity)`` such that every placeholder
    index is satisfied by the late arity.

    * Each bound position is a placeholder about half of the time; indices may
      repeat (one late argument broadcast to several positions).
    * ``keyword_shape`` is empty unless *keywords* is set.
    """
    late_arity = draw(st.integers(min_value=0, max_value=max_late))
    entry = st.just(0) if late_arity == 0 else st.one_of(st.just(0), st.integers(min_value=1, max_value=late_arity))
    shape = tuple(draw(st.lists(entry, max_size=max_bound)))
    keyword_shape: KeywordShape = ()
    if keywords:
        names = draw(st.lists(KEYWORD_STRATEGY, unique=True, max_size=max(0, max_bound - len(shape))))
        keyword_shape = tuple((name, draw(entry)) for name in names)
    return shape, keyword_shape, late_arity


@st.composite
def bound_arguments(
    draw: DrawFn,
    shape: Shape,
    keyword_shape: KeywordShape = (),
    values: SearchStrategy[Any] = st.integers(),
) -> tuple[tuple[Any, ...], dict[str, Any]]:
    """Materialise *shape* into ``(args, kwargs)`` ready to pass to `bind`."""
    args = tuple(placeholder(k) if k else draw(values) for k in shape)
    kwargs = {name: placeholder(k) if k else draw(values) for name, k in keyword_shape}
    return args, kwargs


def late_arguments(late_arity: int, values: SearchStrategy[Any] = st.integers()) -> SearchStrategy[tuple[Any, ...]]:
    return st.tuples(*[values] * late_arity)
