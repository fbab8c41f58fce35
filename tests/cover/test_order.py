import pytest

from hypothesis import given, note, settings, strategies as st

from blind import ShapeError, bind, resolve_order, placeholder_shape, _1, _2, _3
from blind.order import ArgumentOrder, Slot, Source
from blind.strategies import binding_shapes, bound_arguments

B = lambda i: Slot(Source.BOUND, i)
L = lambda j: Slot(Source.LATE, j)


def test_placeholders_select_late_arguments_by_index():
    order = resolve_order((2, 1, 0), 2)
    assert order.positional == (L(1), L(0), B(2))
    assert order.keywords == ()


def test_unreferenced_late_arguments_are_appended_in_order():
    assert resolve_order((0, 2), 4).positional == (B(0), L(1), L(0), L(2), L(3))


def test_no_placeholders_appends_everything():
    assert resolve_order((0, 0), 2).positional == (B(0), B(1), L(0), L(1))


def test_empty_shape():
    assert resolve_order((), 0) == ArgumentOrder(())
    assert resolve_order((), 3).positional == (L(0), L(1), L(2))


def test_broadcast_placeholder():
    assert resolve_order((1, 0, 1), 1).positional == (L(0), B(1), L(0))


def test_keyword_placeholders_consume_late_arguments():
    order = resolve_order((0,), 3, (("key", 2), ("reverse", 0)))
    assert order.positional == (B(0), L(0), L(2))
    assert order.keywords == (("key", L(1)), ("reverse", B(2)))


@pytest.mark.parametrize("shape,late_arity", [((2,), 1), ((0, 3), 2), ((1,), 0)])
def test_placeholder_past_late_arity_is_rejected(shape, late_arity):
    with pytest.raises(ShapeError, match=f"_{max(shape)}"):
        resolve_order(shape, late_arity)


def test_keyword_placeholder_past_late_arity_is_rejected():
    with pytest.raises(ShapeError):
        resolve_order((), 1, (("key", 2),))


@pytest.mark.parametrize("shape,late_arity", [((-1,), 2), ((0,), -1), (("1",), 2), ((True,), 1)])
def test_malformed_shapes_are_rejected(shape, late_arity):
    with pytest.raises(ValueError):
        resolve_order(shape, late_arity)


def test_orders_are_cached_per_shape():
    assert resolve_order((2, 1, 0), 3) is resolve_order([2, 1, 0], 3)
    assert resolve_order((2, 1, 0), 3) is not resolve_order((2, 1, 0), 4)


def test_bound_calls_of_same_shape_share_their_order():
    f = bind(print, _2, "a", _1)
    g = bind(max, _2, 17, _1)
    assert f.order(2) is g.order(2)


def test_placeholder_shape():
    assert placeholder_shape([_3, "x", _1, None]) == (3, 0, 1, 0)


def test_repr():
    assert repr(resolve_order((2, 0), 2, (("key", 1),))) == "ArgumentOrder(late[1], bound[1], key=late[0])"


@given(binding_shapes(keywords=True))
@settings(max_examples=300)
def test_order_length(drawn):
    shape, keyword_shape, late_arity = drawn
    note(drawn)
    order = resolve_order(shape, late_arity, keyword_shape)
    targets = {k for k in (*shape, *(k for _, k in keyword_shape)) if k}
    assert len(order) == len(shape) + len(keyword_shape) + late_arity - len(targets)
    assert len(order.positional) == len(shape) + late_arity - len(targets)


@given(binding_shapes())
def test_every_late_argument_is_used(drawn):
    shape, _, late_arity = drawn
    order = resolve_order(shape, late_arity)
    used = {slot.index for slot in order.positional if slot.source is Source.LATE}
    assert used == set(range(late_arity))


@given(binding_shapes())
def test_bound_positions_keep_their_place(drawn):
    shape, _, late_arity = drawn
    order = resolve_order(shape, late_arity)
    for i, k in enumerate(shape):
        assert order.positional[i] == (L(k - 1) if k else B(i))


@given(binding_shapes(keywords=True), st.data())
def test_order_does_not_depend_on_values(drawn, data):
    shape, keyword_shape, late_arity = drawn
    first = data.draw(bound_arguments(shape, keyword_shape))
    second = data.draw(bound_arguments(shape, keyword_shape, values=st.text()))
    f = bind(print, *first[0], **first[1])
    g = bind(print, *second[0], **second[1])
    assert f.shape == g.shape == shape
    assert f.order(late_arity) == g.order(late_arity)
