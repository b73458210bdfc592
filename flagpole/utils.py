"""
Flagpole utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the registry, the parser and the renderers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
    Flag declarations use it so that an explicit default of 0, "" or False is kept.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, preserving legitimate falsey values.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr), copying
    containers so callers cannot mutate registry state through the public API.
    The generated getter carries the public name, so tracebacks read "items", not "getter".

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(0, "fallback")
    0
"""
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Marker for a keyword the caller left out.

    Only one instance exists; it is falsey and prints as "Unset".
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __or__(self, other, /):
        # isinstance(value, str | Unset)
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """Return `default` when `object` is Unset, else `object` untouched (None, 0 and "" included)."""
    if object is Unset:
        return default
    return object


def _detach(object):
    match object:
        case str():
            return object
        case Mapping():
            return {key: _detach(value) for key, value in object.items()}
        case Sequence():
            return [_detach(value) for value in object]
        case Set():
            return {_detach(value) for value in object}
        case _:
            return object


def mirror(name, /):
    """
    Define a read-only property that mirrors the private attribute "_{name}".

    Containers are copied on every access, so `registry.flags["x"] = ...`
    never reaches the registry itself.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")
    attribute = "_" + name

    def getter(self):
        return _detach(getattr(self, attribute))

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


Unset = UnsetType()


__all__ = (
    # Functions
    "coalesce",
    "mirror",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
