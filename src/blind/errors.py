class BlindError(Exception):
    """Base class for errors raised by blind itself."""


class ShapeError(BlindError, TypeError):
    """The placeholders of a bound call cannot be satisfied by the late arguments."""


class UncopyableArgumentError(BlindError, TypeError):
    """A bound argument could not be stored by value."""


class ConsumedError(BlindError, RuntimeError):
    """A bound call was invoked after its bound arguments were consumed."""
