"""Late binding of call arguments with placeholders.

>>> from blind import bind, _1, _2
>>> sub = bind(lambda a, b: a - b, _2, _1)
>>> sub(1, 10)
9
"""
from blind.config import BindSettings
from blind.core import BoundCall, bind, deferrable
from blind.errors import BlindError, ConsumedError, ShapeError, UncopyableArgumentError
from blind.order import ArgumentOrder, Slot, Source, placeholder_shape, resolve_order
from blind.placeholders import Placeholder, is_placeholder, placeholder, _1, _2, _3, _4, _5, _6, _7, _8, _9, _10
from blind.refs import ReferenceMarker, cref, ref, unwrap

__version__ = "0.1.0"

__all__ = [
    "bind", "deferrable", "BoundCall",
    "ref", "cref", "unwrap", "ReferenceMarker",
    "placeholder", "is_placeholder", "Placeholder",
    "_1", "_2", "_3", "_4", "_5", "_6", "_7", "_8", "_9", "_10",
    "resolve_order", "placeholder_shape", "ArgumentOrder", "Slot", "Source",
    "BindSettings",
    "BlindError", "ShapeError", "UncopyableArgumentError", "ConsumedError",
]
