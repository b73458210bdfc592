"""
Flagpole value types and coercion.

FlagType is the closed set of types a flag may declare. Each member knows how to
- coerce a raw token into a typed value (TypeError on a bad literal),
- supply its zero value (used as the default of non-required flags),
- format a value back into text (help output, round-trips).

FlagType.of(value) answers the reverse question: which tag describes a Python
value. The registry uses it to cross-check an explicit default against the
declared type, so `bool` is never taken for `int` and `int` never for `float`.

Tags can be given as members, as their string names ("boolean", "int", "float",
"string"), or as the matching builtin types (bool, int, float, str).
"""
import builtins
from enum import Enum

__all__ = (
    "FlagType",
)

_TRUTHY = frozenset({"true", "yes", "on", "1"})
_FALSY = frozenset({"false", "no", "off", "0"})


class FlagType(Enum):
    BOOLEAN = "boolean"
    INT = "int"
    FLOAT = "float"
    STRING = "string"

    @classmethod
    def _missing_(cls, value):
        # Builtin types are accepted as aliases of their tags.
        for member, python in _PYTHON_TYPES.items():
            if value is python:
                return member
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        return None

    @classmethod
    def of(cls, value, /):
        """
        Return the tag describing `value`, or None when no tag applies.

        bool is checked before int since bool subclasses int.
        """
        match value:
            case builtins.bool():
                return cls.BOOLEAN
            case builtins.int():
                return cls.INT
            case builtins.float():
                return cls.FLOAT
            case builtins.str():
                return cls.STRING
            case _:
                return None

    @property
    def default(self):
        """The zero value of this type."""
        return _DEFAULTS[self]

    def coerce(self, token, /):
        """
        Convert a raw token into a value of this type.

        Raises TypeError when the token is not a valid literal, e.g.
        FlagType.INT.coerce("3.5") or FlagType.BOOLEAN.coerce("maybe").
        """
        if not isinstance(token, str):
            raise TypeError("coerce() argument must be a string")
        match self:
            case FlagType.BOOLEAN:
                if (lowered := token.strip().lower()) in _TRUTHY:
                    return True
                if lowered in _FALSY:
                    return False
                raise TypeError("%r is not a valid boolean (use true or false)" % token)
            case FlagType.INT:
                try:
                    return int(token, 10)
                except ValueError:
                    raise TypeError("%r is not a valid integer" % token) from None
            case FlagType.FLOAT:
                try:
                    return float(token)
                except ValueError:
                    raise TypeError("%r is not a valid number" % token) from None
            case FlagType.STRING:
                return token

    def format(self, value, /):
        """Render a value of this type the way a user would type it."""
        match self:
            case FlagType.BOOLEAN:
                return "true" if value else "false"
            case _:
                return str(value)

    def __str__(self):
        return self.value


_DEFAULTS = {
    FlagType.BOOLEAN: False,
    FlagType.INT: 0,
    FlagType.FLOAT: 0.0,
    FlagType.STRING: "",
}

_PYTHON_TYPES = {
    FlagType.BOOLEAN: bool,
    FlagType.INT: int,
    FlagType.FLOAT: float,
    FlagType.STRING: str,
}
