r"""
simpleargs argument definitions.

Overview
- Kinds (tagged variant carried by every definition)
  • Keyword(short, long): referenced on the command line as -short / --long.
  • Positional(name): referenced on the command line by its bare name.
  Parsing never branches on the kind; only display formatting does.

- Argument: one declared command-line argument.
  • Shared configuration: description, help_text, accepts_value, value_required,
    single_valued, required, default_value.
  • Parse-time state, written only by the parser: present, help_requested, values.
  • Fluent configuration: takes_value(), requires_value(), require(),
    single_value(), default(value), help(text). Each returns the definition.

- Introspection & representation
  • ArgumentType metaclass exposes every name in __introspectable__ as a
    read-only property backed by "_<name>" (containers come back frozen), and
    provides stable __repr__/__rich_repr__ implementations.

Names (sanitized on construction)
- Up to two leading hyphens are stripped: "-i", "--input", "i" and "input" are
  all accepted and stored bare.
- The bare name must match r"[A-Za-z0-9][A-Za-z0-9-]*".
- A keyword whose short and long names are equal is rejected.

Quick example:
    >>> output = Argument("-o", "--output", "where to write").requires_value().single_value()
    >>> output.kind
    Keyword(short='o', long='output')
    >>> output.spellings
    ('-o', '--output')

Public API
- Classes: Argument, Keyword, Positional
- Helpers: sanitize_name
"""
import functools
import operator
import re
from typing import NamedTuple

from rich.text import Text

from .faults import InvalidArgumentNameError, DuplicateArgumentNameError
from .utils import *

DEFAULT_HELP = "No help available for argument."


class Keyword(NamedTuple):
    """Identity of a keyword argument (bare short and long names)."""
    short: str
    long: str


class Positional(NamedTuple):
    """Identity of a positional argument (bare name)."""
    name: str


ArgumentKind = Keyword | Positional


def sanitize_name(name, /):
    """
    Validate a declared name and return it without its hyphen prefix.

    Parameters
    - name: str
      The name as written by the programmer ("-i", "--input", "input").

    Returns
    - str: the bare name ("i", "input").

    Raises
    - InvalidArgumentNameError: when the name is None, not a string, empty, or
      contains characters other than letters, digits and hyphens.
    """
    if name is None:
        raise InvalidArgumentNameError("New argument fields may not be null", token=name)
    if not isinstance(name, str):
        raise InvalidArgumentNameError("Argument names must be strings: %r" % (name,), token=name)
    bare = re.sub(r"^-{1,2}", "", name)
    if not re.fullmatch(r"[A-Za-z0-9][A-Za-z0-9-]*", bare):
        raise InvalidArgumentNameError("Argument names must contain letters, numbers, or hyphens: %s" % name, token=name)
    return bare


class ArgumentType(type):
    """
    Metaclass that turns definitions into introspectable records.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - argument(kind=Keyword(short='v', long='verbose'), required=False, ...)
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers (e.g., rich).
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize the configuration of a definition.

    Responsibilities
    - description/help_text/default_value: must be strings (or Unset for the
      optional ones). help_text falls back to DEFAULT_HELP, default_value to "".
    - flags: coerced to bool.
    - wiring:
        - accepts_value := accepts_value or value_required
        - a non-empty default_value implies value_required (and so accepts_value)

    Raises
    - TypeError: if a text field is not a string.

    Notes
    - This function mutates the provided metadata dict in place.
    """
    if not isinstance(metadata["description"], str):
        raise TypeError(f"{cls.__typename__} 'description' must be a string")

    if not isinstance(help := metadata["help_text"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'help_text' must be a string")
    metadata["help_text"] = coalesce(help, DEFAULT_HELP)

    if not isinstance(default := metadata["default_value"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'default_value' must be a string")
    metadata["default_value"] = coalesce(default, "")

    for name in ("accepts_value", "value_required", "single_valued", "required"):
        metadata[name] = bool(metadata[name])

    metadata["value_required"] |= bool(metadata["default_value"])
    metadata["accepts_value"] |= metadata["value_required"]


class Argument(metaclass=ArgumentType):
    """
    One declared command-line argument.

    A definition is created once, before parsing, and registered in exactly one
    registry. The parser then marks it present, flags help requests for it and
    appends the values it harvests. Nothing resets that state; build a new
    parser to parse another command line.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes
      mirroring private fields; values comes back as a tuple snapshot.
    """

    __introspectable__ = (
        "kind",
        "description",
        "help_text",
        "accepts_value",
        "value_required",
        "single_valued",
        "required",
        "default_value",
        "present",
        "help_requested",
        "values",
    )

    is_null = False

    def __init__(
            self,
            *names,
            description="",
            help_text=Unset,
            accepts_value=False,
            value_required=False,
            single_valued=False,
            required=False,
            default_value=Unset,
    ):
        """
        Construct a definition.

        Parameters
        - names: one or two str
          One name declares a positional argument, two names declare a keyword
          argument (short, long). A third positional string is accepted as
          the description, mirroring Argument("-o", "--output", "where to write").
        - description: str
          Short description shown in listings.
        - help_text: Unset | str
          Text printed when help is requested for this argument.
        - accepts_value / value_required / single_valued / required: bool
          See the fluent methods of the same meaning.
        - default_value: Unset | str
          Value used when the argument ends up without one. A non-empty default
          marks the argument as requiring a value.

        Raises
        - TypeError: wrong number of names or wrongly typed configuration.
        - InvalidArgumentNameError: a name fails validation.
        - DuplicateArgumentNameError: a keyword uses the same short and long name.
        """
        if len(names) == 3 and isinstance(names[-1], str) and not description:
            *names, description = names

        match tuple(names):
            case (name,):
                kind = Positional(sanitize_name(name))
            case (short, long):
                kind = Keyword(sanitize_name(short), sanitize_name(long))
                if kind.short == kind.long:
                    raise DuplicateArgumentNameError(
                        "This argument is a duplicate of another: %s" % kind.long, token=long
                    )
            case _:
                raise TypeError(f"{type(self).__typename__} takes a positional name or a short and a long name")

        metadata = {
            "description": description,
            "help_text": help_text,
            "accepts_value": accepts_value,
            "value_required": value_required,
            "single_valued": single_valued,
            "required": required,
            "default_value": default_value,
        }
        _sanitize_metadata(type(self), metadata)

        self._kind = kind
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

        self._present = False
        self._help_requested = False
        self._values = []

    # --- identity ---

    @property
    def name(self):
        """Long name of a keyword argument, bare name of a positional one."""
        match self._kind:
            case Keyword(long=long):
                return long
            case Positional(name=name):
                return name

    @property
    def short_name(self):
        return self._kind.short if isinstance(self._kind, Keyword) else ""

    @property
    def long_name(self):
        return self._kind.long if isinstance(self._kind, Keyword) else ""

    @property
    def names(self):
        """Every bare name this definition owns in its registry."""
        return tuple(self._kind)

    @property
    def spellings(self):
        """
        How the definition is written on a command line: ("-s", "--long") for
        keywords, ("name",) for positionals.
        """
        match self._kind:
            case Keyword(short, long):
                return "-" + short, "--" + long
            case Positional(name):
                return name,

    @property
    def value(self):
        """First harvested value, or "" when there is none."""
        return self._values[0] if self._values else ""

    # --- fluent configuration ---

    def takes_value(self):
        """Let the argument accept values on the command line."""
        self._accepts_value = True
        return self

    def requires_value(self):
        """
        Make a value mandatory whenever the argument appears. Without a default,
        a bare occurrence fails the parse with MissingArgumentValueError.
        """
        self._accepts_value = True
        self._value_required = True
        return self

    def require(self):
        """Make the argument itself mandatory on the command line."""
        self._required = True
        return self

    def single_value(self):
        """Allow at most one value in total."""
        self._single_valued = True
        return self

    def default(self, value, /):
        """
        Set the fallback value and mark the argument as requiring a value.

        None keeps the current default but still applies the value wiring.
        """
        if value is not None and not isinstance(value, str):
            raise TypeError(f"{type(self).__typename__} default value must be a string")
        self._accepts_value = True
        self._value_required = True
        if value is not None:
            self._default_value = value
        return self

    def help(self, text, /):
        """Set the text printed when help is requested for this argument (None is ignored)."""
        if text is not None and not isinstance(text, str):
            raise TypeError(f"{type(self).__typename__} help text must be a string")
        if text is not None:
            self._help_text = text
        return self

    # --- parse-time state ---

    def add_value(self, value, /):
        self._values.append("" if value is None else value)

    # --- display ---

    def __str__(self):
        match self._kind:
            case Keyword(short, long):
                row = "%-4s %-14s %-8s %-19s %-30s" % (
                    "-" + short,
                    "--" + long,
                    "<value>" if self._accepts_value else "",
                    "Default: " + self._default_value if self._default_value else "",
                    self._description,
                )
            case Positional(name):
                row = "%-18s %-9s %-19s %-30s" % (
                    name,
                    " <value>" if self._accepts_value else "",
                    "Default: " + self._default_value if self._default_value else "",
                    self._description,
                )
        return row.rstrip()

    def __rich__(self):
        label = Text(" | ").join(Text(spelling, style="bold cyan") for spelling in self.spellings)
        if self._accepts_value:
            label.append(" ")
            label.append("<value>" if self._value_required else "[<value>]", style="bold yellow")
        return label

    def __eq__(self, other):
        if not isinstance(other, Argument):
            return NotImplemented
        return self._kind == other._kind

    def __hash__(self):
        return hash(self._kind)


__all__ = (
    "Argument",
    "ArgumentKind",
    "Keyword",
    "Positional",
    "sanitize_name",
    "DEFAULT_HELP",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ArgumentType
