"""
Flagpole faults (configuration and parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing error.
  Codes are grouped by domain (declaration vs. parsing) so logs and searches stay
  predictable.
- FlagsException: base type that carries message + options and knows how to render
  itself in a friendly, lowercased and actionable way (rich protocol).
- ConfigurationError: raised while flags are declared. Always a programming error
  of the host application; it surfaces at startup and is never recovered.
- ParseError: raised while an argument list is parsed. Always a user error; the
  message names the offending token or flag and the hint points to -h/--help.
- report(): prints any fault to stderr with rich. It never exits the process;
  the host decides the exit status.

Host integration
- __prog__ in __main__ overrides the program name shown in headers.
- __styles__ in __main__ overrides palette entries.
- __codes__ in __main__ remaps numeric codes to custom labels.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - configuration (21xxx): raised by the registry while flags are declared.
    - parsing (22xxx): raised by the parser while tokens are consumed.
    """
    # --- configuration errors (21xxx) ---
    RESERVED_FLAG       = 21101
    DUPLICATED_FLAG     = 21102
    INVALID_NAME        = 21103
    INCOMPATIBLE_FLAG   = 21111
    DEFAULT_MISMATCH    = 21112
    UNSUPPORTED_TYPE    = 21113

    # --- parse errors (22xxx) ---
    MALFORMED_TOKEN     = 22101
    UNKNOWN_FLAG        = 22102
    VALUE_REQUIRED      = 22111
    SINGLE_VALUE        = 22112
    INVALID_VALUE       = 22113
    NO_OPTIONS          = 22121
    MISSING_REQUIRED    = 22122

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class FlagsException(Exception):
    """
    base class of every flagpole fault.

    options
    - title: short lowercase title shown in the header.
    - code: a FaultCode.
    - hint: one sentence telling the user what to do next.
    - colorful / fancy: rendering switches (see report()).
    - any other context the raiser wants to keep (token, flag, name, ...).
    """
    __defaults__ = MappingProxyType({
        "title": "error",
        "code": Unset,
        "hint": Unset,
        "colorful": True,
        "fancy": False,
    })

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(dict(type(self).__defaults__) | options)

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if self.options["colorful"] else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not self.options["colorful"]:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "flagpole")), styler("prog-name"))
        code = self.options["code"]

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code else "?", styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(coalesce(self.options["hint"], ""), styler("hint")))

        if self.options["fancy"]:
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ConfigurationError(FlagsException):
    """a flag declaration violates a registry invariant."""
    __defaults__ = MappingProxyType(dict(FlagsException.__defaults__) | {"title": "invalid flag declaration"})


class ReservedFlagError(ConfigurationError): ...
class DuplicateFlagError(ConfigurationError): ...
class InvalidNameError(ConfigurationError): ...
class IncompatibleFlagError(ConfigurationError): ...
class DefaultMismatchError(ConfigurationError): ...
class UnsupportedTypeError(ConfigurationError): ...


class ParseError(FlagsException):
    """the argument list cannot be turned into an option mapping."""
    __defaults__ = MappingProxyType(dict(FlagsException.__defaults__) | {
        "title": "invalid arguments",
        "hint": "see help for available options (-h or --help)",
    })


class MalformedTokenError(ParseError): ...
class UnknownFlagError(ParseError): ...
class ValueRequiredError(ParseError): ...
class SingleValueError(ParseError): ...
class InvalidValueError(ParseError, TypeError): ...
class NoOptionsError(ParseError): ...
class MissingRequiredError(ParseError): ...


def report(fault, /, *, colorful=True, fancy=False):
    """
    print a fault to stderr with rich.

    contract
    - fault must be a FlagsException; rendering switches are merged into a copy
      via __replace__, the original fault is left untouched.
    - the process is never terminated here; callers usually follow with
      sys.exit(1) (or 2, like most shells expect for usage errors).
    """
    if not isinstance(fault, FlagsException):
        raise TypeError("report() argument must be a flagpole fault")
    console.print(fault.__replace__(colorful=colorful, fancy=fancy))


__all__ = (
    "FaultCode",
    "FlagsException",
    "ConfigurationError",
    "ReservedFlagError",
    "DuplicateFlagError",
    "InvalidNameError",
    "IncompatibleFlagError",
    "DefaultMismatchError",
    "UnsupportedTypeError",
    "ParseError",
    "MalformedTokenError",
    "UnknownFlagError",
    "ValueRequiredError",
    "SingleValueError",
    "InvalidValueError",
    "NoOptionsError",
    "MissingRequiredError",
    "report",
)
