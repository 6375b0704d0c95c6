"""
simpleargs registry: the set of definitions one parser knows about.

What this module provides
- Registry: owns every Argument registered for one parser and answers the two
  questions the tokenizer and the callers keep asking:
  • lookup(token): "which definition is this?" (lenient: 0–2 leading hyphens
    are ignored, so "-i", "--input" and "input" all resolve).
  • match(token): "is this command-line token a reference to a definition?"
    (strict: "-short", "--long" or the bare positional name).

Invariants
- Short, long and positional names share one namespace; a name can be owned
  by a single definition only.
- Lookups never return None: a miss returns the `null` sentinel, whose
  accessors are all safe to call.
- The registry is filled before parsing and only read while parsing.
"""
import re

from .arguments import Argument, sanitize_name
from .faults import InvalidArgumentNameError, DuplicateArgumentNameError
from .null import null
from .utils import mirror


class Registry:
    """
    Mapping from argument identity to definition.

    Storage
    - _primary: long names and positional names (searched first by lookup()).
    - _shorts: short names of keyword arguments.
    - _spellings: command-line spellings ("-i", "--input", "output").
    - _arguments: definitions in registration order.
    """

    arguments = mirror("arguments")
    shorts = mirror("shorts")

    def __init__(self):
        self._primary = {}
        self._shorts = {}
        self._spellings = {}
        self._arguments = []

    def register(self, argument, /):
        """
        Add a definition to the registry and return it.

        Raises
        - TypeError: when `argument` is not an Argument.
        - InvalidArgumentNameError: when one of its names is not a valid bare name.
        - DuplicateArgumentNameError: when one of its names is already owned by a
          registered definition.
        """
        if not isinstance(argument, Argument):
            raise TypeError("register() argument must be an argument definition")

        for name in argument.names:
            if sanitize_name(name) != name:
                raise InvalidArgumentNameError(
                    "Argument names must contain letters, numbers, or hyphens: %s" % name, token=name
                )
            if name in self._primary or name in self._shorts:
                raise DuplicateArgumentNameError(
                    "This argument is a duplicate of another: %s" % name, token=name, argument=argument
                )

        if argument.short_name:
            self._shorts[argument.short_name] = argument
        self._primary[argument.name] = argument
        for spelling in argument.spellings:
            self._spellings[spelling] = argument
        self._arguments.append(argument)
        return argument

    def lookup(self, token, /):
        """
        Resolve a name to its definition, ignoring up to two leading hyphens.

        The long or positional name wins over a short name. Anything that does
        not resolve (including non-strings) returns `null`.
        """
        if not isinstance(token, str):
            return null
        name = re.sub(r"^-{1,2}", "", token)
        return self._primary.get(name) or self._shorts.get(name) or null

    def is_known_name(self, token, /):
        return self.lookup(token) is not null

    def match(self, token, /):
        """
        Resolve a command-line token written exactly as a definition is spelled
        on the command line, or return `null`.
        """
        if not isinstance(token, str):
            return null
        return self._spellings.get(token, null)

    def is_argument(self, token, /):
        return self.match(token) is not null

    @property
    def keywords(self):
        """Keyword definitions, in registration order."""
        return tuple(argument for argument in self._arguments if argument.short_name)

    @property
    def positionals(self):
        """Positional definitions, in registration order."""
        return tuple(argument for argument in self._arguments if not argument.short_name)

    def __len__(self):
        return len(self._arguments)

    def __iter__(self):
        return iter(tuple(self._arguments))

    def __contains__(self, token):
        return self.is_known_name(token)

    def __str__(self):
        string = ""
        if keywords := "".join("%s\n" % argument for argument in self.keywords):
            string += "Keyword Arguments: \n" + keywords + "\n"
        if positionals := "".join("%s\n" % argument for argument in self.positionals):
            string += "Positional Arguments: \n" + positionals
        return string

    def __repr__(self):
        return "registry(%s)" % ", ".join(map(repr, self._arguments))


__all__ = (
    "Registry",
)
