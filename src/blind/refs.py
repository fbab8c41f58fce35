"""Reference markers: bound arguments that are passed by reference instead of by copy."""
from typing import Any, Generic, TypeVar

T = TypeVar('T')


class ReferenceMarker(Generic[T]):
    """Non-owning relation to an external object.

    A bound call never copies the target of a marker: every invocation hands
    the callable the object itself, so mutations made through it are visible
    to the caller afterwards. The target must outlive the bound call.
    """
    __slots__ = ("_target", "readonly")

    def __init__(self, target: T, readonly: bool = False):
        if isinstance(target, ReferenceMarker):
            readonly = readonly or target.readonly
            target = target.get()
        self._target = target
        self.readonly = readonly

    def get(self) -> T:
        return self._target

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._target(*args, **kwargs)  # type: ignore[operator]

    def __repr__(self) -> str:
        name = "cref" if self.readonly else "ref"
        return f"{name}({self._target!r})"


def ref(obj: T) -> ReferenceMarker[T]:
    """Bind *obj* by reference."""
    return ReferenceMarker(obj)


def cref(obj: T) -> ReferenceMarker[T]:
    """Bind *obj* by reference, declaring that the callable only reads it.

    Python has no const references, so the callable receives *obj* itself;
    the flag is informational and shows in the marker's ``repr``.
    """
    return ReferenceMarker(obj, readonly=True)


def unwrap(value: Any) -> Any:
    """Return the referenced object for a marker and *value* unchanged otherwise."""
    if isinstance(value, ReferenceMarker):
        return value.get()
    return value
