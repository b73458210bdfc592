"""
Flagpole parser: turn an argument list into a typed option mapping.

What this module provides
- Parser: owns a FlagRegistry (with the implicit -h/--help flag), exposes
  register() for further declarations, and parse() to consume argv-like lists.
- Outcome: (options, fault) record returned by Parser.attempt(), for callers who
  prefer matching on the failure category over try/except.

Parsing model
- Two states. EXPECT_FLAG: the token must be a known short (-x) or long (--name)
  form. Boolean flags are set to True right away; any other flag needs the next
  token to be a value (it must not start with '-') and moves to EXPECT_VALUE.
- EXPECT_VALUE: the token is coerced with the flag's FlagType. Multi flags keep
  collecting while the following token is a value; single-value flags accept
  exactly one.
- After the last token: at least one flag must have been given, and every
  required flag must be present unless help was requested.

Notes
- Every parse starts from a fresh copy of the registry's seeded defaults, so a
  failed parse leaves nothing behind and the instance can be reused.
- Multi flags append to their seeded [default], so their values always begin
  with the default.
- Tokens starting with '-' are never values, which rules out negative numbers as
  flag values.

Quick start
    from flagpole import Parser

    parser = Parser([
        {"name": "count", "description": "Repetitions.", "type": "int", "multi": True},
        {"name": "output", "description": "Target file.", "type": "string", "required": True},
    ])
    options = parser.parse(["--count", "3", "5", "-o", "out.txt"])
    # {'help': False, 'count': [0, 3, 5], 'output': 'out.txt'}
"""
import difflib
import functools
import logging
import re
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import NamedTuple

from rich.console import Console

from .coercion import FlagType
from .faults import *
from .helper import HelpPrinter
from .registry import FlagRegistry, HELP
from .utils import *

logger = logging.getLogger(__name__)


class State(Enum):
    EXPECT_FLAG = "flag"
    EXPECT_VALUE = "value"


class Outcome(NamedTuple):
    """Result of Parser.attempt(): exactly one of the fields is None."""
    options: dict | None
    fault: ParseError | None


@functools.cache
def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def _is_value(token):
    return token is not None and not token.startswith("-")


class Parser:
    """
    Declared flags plus the machinery to parse argument lists against them.

    Configuration
    - flags: iterable of mappings, each with a "name", an optional "description"
      and any register() option (short, long, default, type, multi, required).
      A nested "options" mapping is accepted as well.
    - title / description / copyright: shown by print_help().
    - prog: program name shown in fault and help headers.

    Errors
    - ConfigurationError while declaring flags (constructor or register()).
    - ParseError from parse(); the library never exits the process.
    """

    title = mirror("title")
    description = mirror("description")
    copyright = mirror("copyright")
    prog = mirror("prog")

    def __init__(self, flags=(), /, *, title=Unset, description=Unset, copyright=Unset, prog=Unset):
        if not isinstance(flags, Iterable) or isinstance(flags, str | Mapping):
            raise TypeError("Parser() flags must be an iterable of mappings")
        for name, object in (("title", title), ("description", description), ("copyright", copyright), ("prog", prog)):
            if not isinstance(object, str | Unset):
                raise TypeError(f"Parser() {name!r} must be a string")

        self._registry = FlagRegistry()
        self._title = coalesce(title)
        self._description = coalesce(description)
        self._copyright = coalesce(copyright)
        self._prog = coalesce(prog, "flagpole")

        for declaration in flags:
            if not isinstance(declaration, Mapping):
                raise TypeError("Parser() flag declarations must be mappings")
            declaration = dict(declaration)
            try:
                name = declaration.pop("name")
            except KeyError:
                raise TypeError("Parser() flag declarations must have a 'name'") from None
            descr = declaration.pop("description", Unset)
            options = declaration.pop("options", {})
            self._registry.register(name, descr, **(declaration | dict(options)))

    @property
    def registry(self):
        return self._registry

    def register(self, name, description=Unset, /, **options):
        """
        Declare one more flag. See FlagRegistry.register() for the rules.
        """
        return self._registry.register(name, description, **options)

    def parse(self, args, /):
        """
        Parse an argument list (usually sys.argv[1:]) into an option mapping.

        Returns
        - dict mapping every seeded or given flag name to its value
          (a list for multi flags).

        Raises
        - ParseError (one of its subclasses); no partial mapping is returned.
        """
        if isinstance(args, str) or not isinstance(args, Iterable):
            raise TypeError("parse() argument must be a sequence of strings")
        tokens = list(args)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() argument must be a sequence of strings")

        options = self._registry.seed()
        given = []
        state = State.EXPECT_FLAG
        flag = None

        for index, token in enumerate(tokens):
            logger.debug("arg[%d] = %r", index, token)
            following = tokens[index + 1] if index + 1 < len(tokens) else None

            match state:
                case State.EXPECT_FLAG:
                    flag = self._resolve(token, index + 1)
                    given.append(flag.name)
                    if flag.type is FlagType.BOOLEAN:
                        options[flag.name] = True
                        logger.debug("options[%r] = True", flag.name)
                        continue
                    if not _is_value(following):
                        raise ValueRequiredError(
                            "option %r at %s position requires %s value of type %r" % (
                                token,
                                _ordinal(index + 1),
                                "at least one" if flag.multi else "a",
                                str(flag.type),
                            ),
                            title="missing value",
                            code=FaultCode.VALUE_REQUIRED,
                            token=token,
                            flag=flag,
                            hint="pass a value after %r (see -h or --help)" % token,
                            prog=self._prog,
                        )
                    state = State.EXPECT_VALUE

                case State.EXPECT_VALUE:
                    value = self._coerce(flag, token, index + 1)
                    if flag.multi:
                        options.setdefault(flag.name, []).append(value)
                    else:
                        options[flag.name] = value
                    logger.debug("options[%r] << %r", flag.name, value)

                    if not _is_value(following):
                        state = State.EXPECT_FLAG
                    elif not flag.multi:
                        raise SingleValueError(
                            "option %r expects a single value of type %r, but %r follows at %s position" % (
                                flag.long,
                                str(flag.type),
                                following,
                                _ordinal(index + 2),
                            ),
                            title="too many values",
                            code=FaultCode.SINGLE_VALUE,
                            token=following,
                            flag=flag,
                            hint="pass one value only (see -h or --help)",
                            prog=self._prog,
                        )

        logger.debug("options: %r", options)

        if not given:
            raise NoOptionsError(
                "no options were specified",
                title="no options",
                code=FaultCode.NO_OPTIONS,
                hint="see help for usage (-h or --help)",
                prog=self._prog,
            )
        self._check_required(options)
        return options

    def attempt(self, args, /):
        """
        Like parse(), but return an Outcome instead of raising ParseError.

            match parser.attempt(sys.argv[1:]):
                case Outcome(fault=MissingRequiredError() as fault): ...
                case Outcome(options=options, fault=None): ...
        """
        try:
            return Outcome(self.parse(args), None)
        except ParseError as fault:
            return Outcome(None, fault)

    def print_help(self, console=Unset, /, *, colorful=True, fancy=False):
        """Render the help message (stdout unless another console is given)."""
        coalesce(console, Console()).print(HelpPrinter(self, colorful=colorful, fancy=fancy))

    def _resolve(self, token, position):
        if (flag := self._registry.resolve(token)) is not None:
            return flag

        if not re.fullmatch(r"--?[^\W_][\w-]*", token):
            raise MalformedTokenError(
                "malformed option %r at %s position" % (token, _ordinal(position)),
                title="malformed option",
                code=FaultCode.MALFORMED_TOKEN,
                token=token,
                hint="options look like -x or --name; see help for usage (-h or --help)",
                prog=self._prog,
            )

        forms = [form for spec in self._registry for form in spec.forms]
        suggestions = difflib.get_close_matches(token, forms, 3)
        try:
            hint = "did you mean %r? see help for available options (-h or --help)" % suggestions[0]
        except IndexError:
            hint = "see help for available options (-h or --help)"
        raise UnknownFlagError(
            "unknown option %r at %s position" % (token, _ordinal(position)),
            title="unknown option",
            code=FaultCode.UNKNOWN_FLAG,
            token=token,
            suggestions=suggestions,
            hint=hint,
            prog=self._prog,
        )

    def _coerce(self, flag, token, position):
        try:
            return flag.type.coerce(token)
        except TypeError as exception:
            raise InvalidValueError(
                "invalid value for option %r at %s position: %s" % (flag.long, _ordinal(position), exception),
                title="invalid value",
                code=FaultCode.INVALID_VALUE,
                token=token,
                flag=flag,
                hint="pass a value of type %r to %r (see -h or --help)" % (str(flag.type), flag.long),
                prog=self._prog,
            ) from exception

    def _check_required(self, options):
        if options.get(HELP):
            return
        for flag in self._registry.required():
            if flag.name not in options:
                raise MissingRequiredError(
                    "missing required option %r" % flag.long,
                    title="missing option",
                    code=FaultCode.MISSING_REQUIRED,
                    flag=flag,
                    hint="pass %s (see help for details, -h or --help)" % " or ".join(flag.forms),
                    prog=self._prog,
                )


__all__ = (
    "Parser",
    "Outcome",
)
