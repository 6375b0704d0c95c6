"""
simpleargs faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain so logs and searches stay predictable.
- ArgumentException: base type that carries message + options and knows how to
  render itself (rich) in a short, actionable way.
- ParserUsageError / InvalidInputError: the two families. The first is raised
  while arguments are being declared (programmer mistakes), the second while a
  command line is being parsed (user mistakes).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Stable plain-text messages through str(), so callers that do not use rich
  still get something printable.

Integration
- The registry and the parser raise these faults; nothing in the library
  catches them. Program.report() renders one to stderr with the program's
  presentation options, the caller decides the exit status.
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
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - declaration (101xx)
      • INVALID_ARGUMENT_NAME, DUPLICATE_ARGUMENT_NAME
    - command line input (111xx)
      • UNKNOWN_ARGUMENT, MISSING_REQUIRED_ARGUMENT, MISSING_ARGUMENT_VALUE,
        TOO_MANY_VALUES, VALUE_NOT_ALLOWED, NULL_INPUT

    normalize() allows host remapping to custom labels while keeping the
    numeric ids stable.
    """
    # --- declaration errors (101xx) ---
    INVALID_ARGUMENT_NAME       = 10101
    DUPLICATE_ARGUMENT_NAME     = 10102

    # --- command line errors (111xx) ---
    UNKNOWN_ARGUMENT            = 11101
    MISSING_REQUIRED_ARGUMENT   = 11111
    MISSING_ARGUMENT_VALUE      = 11112
    TOO_MANY_VALUES             = 11113
    VALUE_NOT_ALLOWED           = 11114
    NULL_INPUT                  = 11121

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgumentException(Exception):
    """
    Base class of every fault raised by simpleargs.

    A fault is a message plus a frozen bag of options. Subclasses provide the
    defaults for the well-known options through class attributes:

    - __code__: FaultCode
    - __title__: short, lowercase title shown in the rendered header
    - __hint__: default hint when the raiser does not pass one

    Recognized options
    - code, title, hint: override the class defaults.
    - argument: the definition involved (if any).
    - token: the offending command-line token (if any).
    - index: 1-based position of the token on the command line (if known).
    - prog, colorful, fancy, ratio: rendering options (see __rich__).
    """
    __code__ = Unset
    __title__ = "argument error"
    __hint__ = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code", type(self).__code__)

    @property
    def title(self):
        return self.options.get("title", type(self).__title__)

    @property
    def hint(self):
        return self.options.get("hint", coalesce(type(self).__hint__))

    @property
    def argument(self):
        return self.options.get("argument")

    @property
    def token(self):
        return self.options.get("token")

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "docs": "#737373",  # dim footer gray
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(self.options.get("prog", getattr(main, "__prog__", "simpleargs")), styler("prog-name"))
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "-"

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code, styler("code")),
            " | ",
            text(self.title.title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        renders = [message]
        if self.hint:
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))
        if isinstance(self.code, FaultCode) and (docs := getdoc(self.code)):
            renders.append(text(docs, styler("docs")))

        if fancy:
            try:
                width = int((console.width - 4) * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(*renders), title=header, title_align="left", width=width)

        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})

    def __reduce__(self):
        return _restore, (type(self), self.message, dict(self.options))


def _restore(cls, message, options):
    return cls(message, **options)


class ParserUsageError(ArgumentException):
    """Raised while declaring arguments; never reaches parse()."""
    __title__ = "invalid parser usage"


class InvalidArgumentNameError(ParserUsageError):
    __code__ = FaultCode.INVALID_ARGUMENT_NAME
    __title__ = "invalid argument name"
    __hint__ = "names may only contain letters, digits and hyphens (for example: -o, --output, output)"


class DuplicateArgumentNameError(ParserUsageError):
    __code__ = FaultCode.DUPLICATE_ARGUMENT_NAME
    __title__ = "duplicate argument name"
    __hint__ = "short, long and positional names share one namespace; pick a different name"


class InvalidInputError(ArgumentException):
    """Raised while parsing a command line; aborts the whole parse."""
    __title__ = "invalid input"


class UnknownArgumentError(InvalidInputError):
    __code__ = FaultCode.UNKNOWN_ARGUMENT
    __title__ = "unknown argument"


class MissingRequiredArgumentError(InvalidInputError):
    __code__ = FaultCode.MISSING_REQUIRED_ARGUMENT
    __title__ = "missing required argument"


class MissingArgumentValueError(InvalidInputError):
    __code__ = FaultCode.MISSING_ARGUMENT_VALUE
    __title__ = "missing argument value"


class TooManyValuesError(InvalidInputError):
    __code__ = FaultCode.TOO_MANY_VALUES
    __title__ = "too many values"


class ValueNotAllowedError(InvalidInputError):
    __code__ = FaultCode.VALUE_NOT_ALLOWED
    __title__ = "value not allowed"


class NullInputError(InvalidInputError):
    __code__ = FaultCode.NULL_INPUT
    __title__ = "missing command line"
    __hint__ = "pass a sequence of strings (use an empty list for no arguments)"


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ArgumentException",
    "ParserUsageError",
    "InvalidArgumentNameError",
    "DuplicateArgumentNameError",
    "InvalidInputError",
    "UnknownArgumentError",
    "MissingRequiredArgumentError",
    "MissingArgumentValueError",
    "TooManyValuesError",
    "ValueNotAllowedError",
    "NullInputError",
    "getdoc",
)
