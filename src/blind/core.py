import functools
import logging
import types
from typing import Any, Callable, Mapping, Optional, TypeVar

from blind.config import BindSettings
from blind.errors import ConsumedError, ShapeError, UncopyableArgumentError
from blind.order import ArgumentOrder, Shape, Slot, Source, placeholder_shape, resolve_order
from blind.placeholders import Placeholder, is_placeholder
from blind.refs import ReferenceMarker, unwrap

logger = logging.getLogger(__name__)

T = TypeVar('T')

_CONSUMED = object()


def _callable_name(func: Any) -> str:
    func = unwrap(func)
    return getattr(func, '__qualname__', getattr(func, '__name__', repr(func)))


class BoundCall:
    """A callable with some of its arguments bound ahead of time.

    Use `bind` to create one. Calling it merges the late arguments into the
    bound ones: each placeholder ``_k`` is replaced by the k-th late argument
    and late arguments no placeholder names are appended at the end.

    >>> from blind import bind, _1, _2
    >>> bound = bind(divmod, _2, _1)
    >>> bound(3, 17)
    (5, 2)

    Calling never modifies what was bound. Bound values are handed to the
    callable as fresh copies on every call, except for those bound with
    `ref`, which are passed as the referenced object itself.
    """

    def __init__(self, func: Callable[..., Any], args: tuple, kwargs: Mapping[str, Any],
                 settings: Optional[BindSettings] = None) -> None:
        if not callable(unwrap(func)):
            raise TypeError(f"the first argument must be callable, not {type(unwrap(func)).__name__}")
        self._settings = settings if settings is not None else BindSettings.current()
        self._func = func
        self._n_positional = len(args)
        self._keyword_names = tuple(kwargs)
        self._bound = tuple(self._store(position, value) for position, value in enumerate((*args, *kwargs.values())))
        self._shape: Shape = placeholder_shape(args)
        self._keyword_shape = tuple((name, is_placeholder(value)) for name, value in kwargs.items())
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("bound %s with shape=%s keywords=%s", _callable_name(func), self._shape, self._keyword_shape)

    def _store(self, position: int, value: Any) -> Any:
        if isinstance(value, (Placeholder, ReferenceMarker)):
            return value
        try:
            return self._settings.store(value)
        except Exception as e:
            raise UncopyableArgumentError(
                f"Bound argument {self._describe_position(position)} of type {type(value).__name__} "
                f"cannot be copied ({e}); bind it with ref() to pass it by reference"
            ) from e

    def _describe_position(self, position: int) -> str:
        if position < self._n_positional:
            return f"#{position}"
        return repr(self._keyword_names[position - self._n_positional])

    @property
    def func(self) -> Callable[..., Any]:
        return unwrap(self._func)

    @property
    def args(self) -> tuple:
        self._check_not_consumed()
        return self._bound[:self._n_positional]

    @property
    def keywords(self) -> Mapping[str, Any]:
        self._check_not_consumed()
        return types.MappingProxyType(dict(zip(self._keyword_names, self._bound[self._n_positional:])))

    @property
    def shape(self) -> Shape:
        return self._shape

    @property
    def keyword_shape(self) -> tuple[tuple[str, int], ...]:
        return self._keyword_shape

    @property
    def arity(self) -> int:
        """Number of bound arguments, placeholders included."""
        return self._n_positional + len(self._keyword_names)

    @property
    def min_late_arity(self) -> int:
        """Smallest number of late arguments a call must supply."""
        return max((*self._shape, *(k for _, k in self._keyword_shape)), default=0)

    @property
    def consumed(self) -> bool:
        return self._bound is _CONSUMED

    def order(self, late_arity: int) -> ArgumentOrder:
        """Return the argument order used by a call with *late_arity* positional late arguments."""
        return resolve_order(self._shape, late_arity, self._keyword_shape)

    def _check_not_consumed(self) -> None:
        if self._bound is _CONSUMED:
            raise ConsumedError(f"{self!r} was consumed and cannot be called again")

    def _gather(self, bound: tuple, late: tuple, late_kwargs: Mapping[str, Any], copy: bool) -> tuple[list, dict]:
        for value in (*late, *late_kwargs.values()):
            if isinstance(value, Placeholder):
                raise ShapeError(f"Placeholder {value!r} cannot be passed as a late argument")
        for name, k in self._keyword_shape:
            if k and name in late_kwargs:
                raise ShapeError(
                    f"Keyword argument {name!r} is bound to placeholder _{k} and cannot be passed again"
                )
        order = self.order(len(late))

        def fetch(slot: Slot) -> Any:
            if slot.source is Source.LATE:
                return unwrap(late[slot.index])
            value = bound[slot.index]
            if isinstance(value, ReferenceMarker):
                return value.get()
            return self._settings.store(value) if copy else value

        args = [fetch(slot) for slot in order.positional]
        kwargs = {name: fetch(slot) for name, slot in order.keywords}
        kwargs.update((name, unwrap(value)) for name, value in late_kwargs.items())
        return args, kwargs

    def __call__(self, *late: Any, **late_kwargs: Any) -> Any:
        self._check_not_consumed()
        args, kwargs = self._gather(self._bound, late, late_kwargs, copy=True)
        return unwrap(self._func)(*args, **kwargs)

    def consume(self, *late: Any, **late_kwargs: Any) -> Any:
        """Call once, handing over the bound values themselves instead of copies.

        The bound call releases its bound values before calling, so any later
        call raises `ConsumedError`, even if this one raised.
        """
        self._check_not_consumed()
        bound = self._bound
        args, kwargs = self._gather(bound, late, late_kwargs, copy=False)
        self._bound = _CONSUMED
        return unwrap(self._func)(*args, **kwargs)

    def __repr__(self) -> str:
        if self._bound is _CONSUMED:
            return f"<consumed bind({_callable_name(self._func)})>"
        parts = [_callable_name(self._func)]
        parts += [repr(v) for v in self.args]
        parts += [f"{k}={v!r}" for k, v in self.keywords.items()]
        return f"bind({', '.join(parts)})"


def bind(func: Callable[..., Any], /, *args: Any, **kwargs: Any) -> BoundCall:
    """Bind *args* and *kwargs* to *func*, leaving placeholders to be filled at call time.

    >>> from blind import bind, _1
    >>> greet = bind("{}, {}!".format, "Hello", _1)
    >>> greet("world")
    'Hello, world!'

    Each bound value is copied now and again on every call, so calls never
    interfere with one another. Wrap a value in `ref` to pass the object
    itself instead. *func* may itself be a `ref`.
    """
    return BoundCall(func, args, kwargs)


def deferrable(func: Callable[..., T]) -> Callable[..., Any]:
    """Decorate *func* so that calling it with placeholders binds instead of calling.

    >>> from blind import deferrable, _1
    >>> @deferrable
    ... def scale(x, factor):
    ...     return x * factor
    >>> scale(2, 3)
    6
    >>> triple = scale(_1, 3)
    >>> triple(5)
    15
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if any(isinstance(v, Placeholder) for v in (*args, *kwargs.values())):
            return bind(func, *args, **kwargs)
        return func(*args, **kwargs)

    return wrapper
