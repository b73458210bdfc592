r"""
Flagpole flag declarations.

Overview
- FlagSpec: immutable description of one flag (name, short/long forms, description,
  type, default, multi, required). Fields are exposed as read-only properties.
- FlagRegistry: ordered collection of FlagSpec instances. It validates every
  declaration, derives the short/long forms, seeds the default option mapping and
  resolves raw tokens back to their flag.

Declaration rules (checked in this order, nothing is stored on failure)
- name: a non-empty string without spaces that does not start with a dash;
  "help" is reserved (ReservedFlagError) and names are unique (DuplicateFlagError).
- short: defaults to "-" + name[0]; long: defaults to "--" + name. Both must be
  well formed (InvalidNameError). An explicit form already taken by another flag
  is a DuplicateFlagError; a derived one stays with the flag that took it first.
- boolean flags cannot be multi (IncompatibleFlagError).
- non-required flags get the zero value of their type when no default is given;
  an explicit default must have exactly the declared type (DefaultMismatchError).
- type: a FlagType, a tag string ("boolean", "int", "float", "string") or one of
  bool/int/float/str. Defaults to boolean. Anything else: UnsupportedTypeError.

Seeding
- Each non-required flag has an entry in the seeded mapping as soon as it is
  registered: the default itself, or [default] for multi flags. Parsing appends to
  that list, so multi results always start with the default.

Quick example:
    >>> registry = FlagRegistry()
    >>> registry.register("count", "How many.", type="int", multi=True)
    flag-spec(name='count', short='-c', long='--count', ...)
    >>> registry.seed()
    {'help': False, 'count': [0]}
"""
import logging
import re

from .coercion import FlagType
from .faults import (
    FaultCode,
    ReservedFlagError,
    DuplicateFlagError,
    InvalidNameError,
    IncompatibleFlagError,
    DefaultMismatchError,
    UnsupportedTypeError,
)
from .utils import *

logger = logging.getLogger(__name__)

HELP = "help"


class FlagSpec:
    """
    Immutable, validated description of a single flag.

    Instances are built by FlagRegistry.register(); constructing one directly
    skips every registry check and is reserved for internal use.
    """

    __introspectable__ = (
        "name",
        "short",
        "long",
        "description",
        "type",
        "default",
        "multi",
        "required",
    )

    def __init__(self, *, name, short, long, description, type, default, multi, required):
        self._name = name
        self._short = short
        self._long = long
        self._description = description
        self._type = type
        self._default = default
        self._multi = multi
        self._required = required

    name = mirror("name")
    short = mirror("short")
    long = mirror("long")
    description = mirror("description")
    type = mirror("type")
    default = mirror("default")
    multi = mirror("multi")
    required = mirror("required")

    @property
    def forms(self):
        """Both textual forms, short first."""
        return self._short, self._long

    def __repr__(self):
        return "flag-spec(%s)" % ", ".join("%s=%r" % (name, value) for name, value in self.__rich_repr__())

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __init_subclass__(cls, **options):
        raise TypeError("type 'FlagSpec' is not an acceptable base type")


class FlagRegistry:
    """
    Ordered set of declared flags plus the option mapping seeded from them.

    The implicit boolean "help" flag (-h/--help) is always registered first.
    """

    flags = mirror("flags")

    def __init__(self):
        self._flags = {}
        self._forms = {}
        self._seeds = {}
        self._register(HELP, "Displays the help message.")

    def register(self, name, description=Unset, /, **options):
        """
        Declare a new flag and return its FlagSpec.

        Parameters
        - name: str, unique, not "help".
        - description: str, shown in help.
        - options: short, long, default, type, multi, required.

        Raises
        - ConfigurationError (one of its subclasses) on any violated invariant.
        """
        if name == HELP:
            raise ReservedFlagError(
                "the option %r is reserved and cannot be overwritten" % HELP,
                code=FaultCode.RESERVED_FLAG,
                name=name,
                hint="choose another name for this flag",
            )
        logger.debug("Adding flag %r with options: %r", name, options)
        return self._register(name, description, **options)

    def _register(
            self,
            name,
            description=Unset,
            /,
            *,
            short=Unset,
            long=Unset,
            default=Unset,
            type=Unset,
            multi=False,
            required=False
    ):
        _sanitize_name(name)
        if name in self._flags:
            raise DuplicateFlagError(
                "the option %r is already declared" % name,
                code=FaultCode.DUPLICATED_FLAG,
                name=name,
                hint="every flag needs its own name",
            )

        if not isinstance(description, str | Unset):
            raise TypeError("flag %r 'description' must be a string" % name)
        description = coalesce(description, "").strip()

        forms = {"short": coalesce(short), "long": coalesce(long)}
        short = forms["short"] or "-" + name[0]
        long = forms["long"] or "--" + name
        _sanitize_forms(name, short, long)
        for kind, form in (("short", short), ("long", long)):
            if forms[kind] and form in self._forms:
                raise DuplicateFlagError(
                    "option %r uses %r, which already belongs to option %r" % (name, form, self._forms[form].name),
                    code=FaultCode.DUPLICATED_FLAG,
                    name=name,
                    form=form,
                    hint="pass another %s= form for %r" % (kind, name),
                )

        multi = bool(multi)
        required = bool(required)
        tag = coalesce(type, FlagType.BOOLEAN)
        flagtype = _lookup_type(tag)

        if flagtype is FlagType.BOOLEAN and multi:
            raise IncompatibleFlagError(
                "option %r has a type %r, which is not allowed for options that accept multiple values"
                % (name, str(FlagType.BOOLEAN)),
                code=FaultCode.INCOMPATIBLE_FLAG,
                name=name,
                hint="drop multi=True or declare a non-boolean type",
            )

        default = coalesce(default)
        if not required:
            if default is None and flagtype is not None:
                default = flagtype.default
            if default is not None and (actual := FlagType.of(default)) is not flagtype:
                declared = str(flagtype) if flagtype else tag
                raise DefaultMismatchError(
                    "option %r has a default value of type %r, which does not match the specified type %r"
                    % (name, str(actual) if actual else default.__class__.__name__, declared),
                    code=FaultCode.DEFAULT_MISMATCH,
                    name=name,
                    hint="use a default of type %r or change the declared type" % declared,
                )

        if flagtype is None:
            raise UnsupportedTypeError(
                "option %r has a type %r, which is an unsupported type (must be 'boolean', 'int', 'float', or 'string')"
                % (name, tag),
                code=FaultCode.UNSUPPORTED_TYPE,
                name=name,
                hint="declare one of the supported types",
            )

        spec = FlagSpec(
            name=name,
            short=short,
            long=long,
            description=description,
            type=flagtype,
            default=default,
            multi=multi,
            required=required,
        )
        logger.debug("Described flag: %r", spec)

        self._flags[name] = spec
        for form in spec.forms:
            if self._forms.setdefault(form, spec) is not spec:
                logger.debug("Form %r stays with option %r; %r is not reachable through it",
                             form, self._forms[form].name, name)
        if not required:
            self._seeds[name] = [default] if multi else default
        return spec

    def resolve(self, token, /):
        """
        Return the FlagSpec for a short or long form, or None when no flag matches.

        Short forms are "-" plus one character and long forms start with "--",
        so both live in one lookup table without clashing.
        """
        if not isinstance(token, str):
            raise TypeError("resolve() argument must be a string")
        return self._forms.get(token)

    def seed(self):
        """A fresh copy of the option mapping seeded at registration."""
        return {name: list(value) if isinstance(value, list) else value for name, value in self._seeds.items()}

    def required(self):
        """Required flags, in registration order."""
        return [spec for spec in self._flags.values() if spec.required]

    def __getitem__(self, name):
        return self._flags[name]

    def __contains__(self, name):
        return name in self._flags

    def __iter__(self):
        return iter(tuple(self._flags.values()))

    def __len__(self):
        return len(self._flags)

    def __repr__(self):
        return "flag-registry(%s)" % ", ".join(map(repr, self._flags))


def _lookup_type(type, /):
    """
    Internal: map a user supplied type onto the closed FlagType set, or None.
    """
    if isinstance(type, FlagType):
        return type
    try:
        return FlagType(type)
    except (ValueError, TypeError):
        return None


def _sanitize_name(name, /):
    if not isinstance(name, str):
        raise TypeError("flag name must be a string")
    if not re.fullmatch(r"[^\s-]\S*", name):
        raise InvalidNameError(
            "option name %r must not be empty, start with a dash or contain spaces" % name,
            code=FaultCode.INVALID_NAME,
            name=name,
            hint="use names such as 'count' or 'dry-run'",
        )


def _sanitize_forms(name, short, long, /):
    if not isinstance(short, str) or not re.fullmatch(r"-[^\s-]", short):
        raise InvalidNameError(
            "short form %r of option %r must be a dash followed by one character" % (short, name),
            code=FaultCode.INVALID_NAME,
            name=name,
            hint="use a short form such as '-%s'" % name[0],
        )
    if not isinstance(long, str) or not re.fullmatch(r"--[^\s-]\S*", long):
        raise InvalidNameError(
            "long form %r of option %r must be two dashes followed by a name" % (long, name),
            code=FaultCode.INVALID_NAME,
            name=name,
            hint="use a long form such as '--%s'" % name,
        )


__all__ = (
    "FlagSpec",
    "FlagRegistry",
)
