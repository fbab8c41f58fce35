import copy
import threading
from typing import Any, Callable, ClassVar, Optional

Copier = Callable[[Any], Any]

_state = threading.local()


def _active() -> list['BindSettings']:
    try:
        return _state.active
    except AttributeError:
        _state.active = []
        return _state.active


def is_identity_only(value: Any) -> bool:
    """True for values that carry nothing but their identity, such as ``object()`` sentinels."""
    return type(value) is object


class BindSettings:
    """How `bind` stores literal bound arguments and hands them to the callable.

    Bound values are deep-copied by default, once when binding and again for
    every call, so a callable that mutates its arguments never changes what
    was bound. Pass ``copier=copy.copy`` for shallow copies, or
    ``copy_bound_arguments=False`` to pass bound values as they are.
    Identity-only values are never copied.

    Active settings are kept per thread. The settings in force when `bind`
    runs are captured by the bound call, so leaving a ``with`` block never
    changes the behaviour of calls bound inside it.

    Example::

        with BindSettings(copy_bound_arguments=False):
            shared = bind(list.append, [])
    """
    default: ClassVar['BindSettings']

    def __init__(self, *, copy_bound_arguments: bool = True, copier: Optional[Copier] = None) -> None:
        if copier is not None and not callable(copier):
            raise TypeError(f"copier must be callable, not {type(copier).__name__}")
        self.copy_bound_arguments = copy_bound_arguments
        self.copier: Copier = copier if copier is not None else copy.deepcopy

    def __enter__(self) -> 'BindSettings':
        _active().append(self)
        return self

    def __exit__(self, *args, **kwargs) -> None:
        active = _active()
        if not active or active[-1] is not self:
            raise RuntimeError("BindSettings exited out of order")
        active.pop()

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(copy_bound_arguments={self.copy_bound_arguments!r}, "
                f"copier={self.copier!r})")

    def store(self, value: Any) -> Any:
        """Return the value to keep for (or hand over from) a literal bound argument."""
        if not self.copy_bound_arguments or is_identity_only(value):
            return value
        return self.copier(value)

    @classmethod
    def current(cls) -> 'BindSettings':
        """Return the innermost settings entered in this thread, or `default`."""
        try:
            return _active()[-1]
        except IndexError:
            return cls.default


BindSettings.default = BindSettings()
