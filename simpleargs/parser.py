"""
simpleargs parsing engine: tokenize, match, validate.

Pipeline
    raw vector
      → tokenize()            one forward pass, builds a new token list
      → presence marking      every argument token marks its definition present
      → required check        MissingRequiredArgumentError
      → value harvesting      UnknownArgumentError / ValueNotAllowedError / TooManyValuesError
      → defaults              definitions left without values receive their default
      → required values       MissingArgumentValueError / ValueNotAllowedError

Tokenization, per raw token (first rule that applies wins)
1. a registered spelling ("-i", "--input", "output")    → ARGUMENT
2. "-h" or "--help"                                     → HELP marker
3. "<spelling>=<value>" with a non-empty value          → ARGUMENT, VALUE
4. "-<shorts>[=<value>]" longer than two characters whose part before "="
   decomposes into registered short names (shortest prefix first)
                                                        → ARGUMENT..., [VALUE]
5. anything else                                        → VALUE

A HELP marker is scoped to the argument emitted right before it; otherwise it
asks for program help. When help is enabled, any marker ends the parse right
after tokenization (nothing is validated, so a help request never fails on a
missing required argument).

Faults abort the parse at once and nothing is rolled back: definitions already
marked present or given values keep that state. A parser parses exactly once.
"""
import shlex
from collections.abc import Iterable
from enum import IntEnum
from typing import NamedTuple

from .faults import *
from .null import null
from .registry import Registry
from .utils import Unset, mirror, ordinal

HELP_TOKENS = frozenset(("-h", "--help"))


class TokenKind(IntEnum):
    ARGUMENT = 1
    VALUE = 2
    HELP = 3


class Token(NamedTuple):
    """
    One item of the normalized stream.

    - kind: TokenKind
    - text: the spelling or value as it will be reported in faults.
    - argument: the definition for ARGUMENT tokens, the scoped definition for
      HELP markers (or null for program help), null for VALUE tokens.
    - index: 1-based position of the raw token it came from.
    """
    kind: TokenKind
    text: str
    argument: object = null
    index: int = 0


class HelpRequest(IntEnum):
    """What parse() asks the caller to print."""
    NONE = 0
    PROGRAM = 1
    ARGUMENT = 2


def _expand(shorts, cluster):
    """
    Split a cluster like "abc" into registered short names, shortest prefix
    first. Returns None when the cluster cannot be consumed entirely.
    """
    if not cluster:
        return None
    names = []
    while cluster:
        for length in range(1, len(cluster) + 1):
            if cluster[:length] in shorts:
                names.append(cluster[:length])
                cluster = cluster[length:]
                break
        else:
            return None
    return names


def tokenize(registry, args, /):
    """
    Normalize a raw argument vector into a new list of Tokens.

    Parameters
    - registry: Registry
      Source of the known spellings and short names.
    - args: Iterable[str]
      The raw vector; it is never modified.

    Returns
    - list[Token]
    """
    tokens = []
    shorts = registry.shorts

    for index, token in enumerate(args, 1):
        prefix, separator, value = token.partition("=")

        if argument := registry.match(token):
            tokens.append(Token(TokenKind.ARGUMENT, token, argument, index))
        elif token in HELP_TOKENS:
            if tokens and tokens[-1].kind is TokenKind.ARGUMENT:
                tokens.append(Token(TokenKind.HELP, token, tokens[-1].argument, index))
            else:
                tokens.append(Token(TokenKind.HELP, token, null, index))
        elif separator and value and (argument := registry.match(prefix)):
            tokens.append(Token(TokenKind.ARGUMENT, prefix, argument, index))
            tokens.append(Token(TokenKind.VALUE, value, null, index))
        elif (
                token.startswith("-") and
                not token.startswith("--") and
                len(token) > 2 and
                (names := _expand(shorts, prefix[1:])) is not None
        ):
            tokens.extend(Token(TokenKind.ARGUMENT, "-" + name, shorts[name], index) for name in names)
            if value:
                tokens.append(Token(TokenKind.VALUE, value, null, index))
        else:
            tokens.append(Token(TokenKind.VALUE, token, null, index))

    return tokens


def _sanitized(args):
    """
    Turn the accepted input shapes into a list of strings.

    - None: NullInputError.
    - str: shell-like string, split with shlex.split.
    - Iterable[str]: copied as-is (empty strings are legitimate values).
    """
    if args is None:
        raise NullInputError("Command line arguments may not be null")
    if isinstance(args, str):
        return shlex.split(args)
    if not isinstance(args, Iterable):
        raise TypeError("parse() argument must be a string or an iterable of strings")
    tokens = list(args)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("parse() argument must be a string or an iterable of strings")
    return tokens


class Parser:
    """
    Tokenizer + matcher over one Registry.

    Parameters
    - registry: Unset | Registry
      Definitions to match against; a fresh Registry when omitted.
    - help: bool (keyword-only)
      Automatic help interception. When False, "-h"/"--help" are still
      recorded (see program_help_requested / argument_help_requested) but the
      parse runs to completion.
    """

    program_help_requested = mirror("program_help_requested")
    argument_help_requested = mirror("argument_help_requested")
    requested_argument = mirror("requested_argument")
    help_enabled = mirror("help")
    registry = mirror("registry")

    def __init__(self, registry=Unset, /, *, help=True):
        registry = Registry() if registry is Unset else registry
        if not isinstance(registry, Registry):
            raise TypeError("Parser() argument must be a registry")
        self._registry = registry
        self._help = bool(help)
        self._parsed = False
        self._program_help_requested = False
        self._argument_help_requested = False
        self._requested_argument = null

    # --- registry delegation ---

    def register(self, argument, /):
        return self._registry.register(argument)

    def lookup(self, token, /):
        return self._registry.lookup(token)

    def is_known_name(self, token, /):
        return self._registry.is_known_name(token)

    @property
    def arguments(self):
        return self._registry.arguments

    def disable_help(self):
        if self._parsed:
            raise RuntimeError("disable_help() must be called before parse()")
        self._help = False
        return self

    @property
    def argument_help(self):
        """Help text of the argument help was requested for ("" when none)."""
        return self._requested_argument.help_text

    # --- orchestration ---

    def parse(self, args, /):
        """
        Parse a raw argument vector against the registry.

        Returns
        - HelpRequest.NONE after a complete, successful parse.
        - HelpRequest.PROGRAM / HelpRequest.ARGUMENT when help is enabled and was
          requested; nothing else was validated in that case.

        Raises
        - NullInputError: args is None.
        - TypeError: args is neither a string nor an iterable of strings.
        - RuntimeError: the parser was already used.
        - InvalidInputError subclasses: see the module docstring.
        """
        args = _sanitized(args)
        if self._parsed:
            raise RuntimeError("a parser can only parse once; create a new one")
        self._parsed = True

        stream = []
        for token in tokenize(self._registry, args):
            if token.kind is TokenKind.HELP:
                self._request_help(token)
            else:
                stream.append(token)

        if self._help and self._program_help_requested:
            return HelpRequest.PROGRAM
        if self._help and self._argument_help_requested:
            return HelpRequest.ARGUMENT

        self._mark_present(stream)
        self._check_required()
        self._harvest(stream)
        self._apply_defaults()
        self._check_values()
        return HelpRequest.NONE

    def _request_help(self, token):
        if token.argument:
            token.argument._help_requested = True
            self._argument_help_requested = True
            self._requested_argument = token.argument
        else:
            self._program_help_requested = True

    def _hint(self, hint):
        if self._help:
            return hint + "; run with --help to list the accepted arguments"
        return hint

    # --- passes ---

    def _mark_present(self, stream):
        for token in stream:
            if token.kind is TokenKind.ARGUMENT:
                token.argument._present = True

    def _check_required(self):
        for argument in self._registry.arguments:
            if argument.required and not argument.present:
                raise MissingRequiredArgumentError(
                    "Argument %s is required but not specified." % argument.spellings[-1],
                    argument=argument,
                    hint="add %s to the command line" % " or ".join(argument.spellings),
                )

    def _harvest(self, stream):
        """
        Single walk over the stream: unknown tokens, value attachment, arity.
        """
        position = 0
        while position < len(stream):
            token = stream[position]
            position += 1

            if token.kind is TokenKind.VALUE:
                raise UnknownArgumentError(
                    "Unrecognized argument provided: %s" % token.text,
                    token=token.text,
                    index=token.index,
                    hint=self._hint("the %s item did not match any argument" % ordinal(token.index)),
                )

            argument = token.argument
            following = []
            while position + len(following) < len(stream):
                if stream[position + len(following)].kind is not TokenKind.VALUE:
                    break
                following.append(stream[position + len(following)])

            if not argument.accepts_value:
                if following:
                    self._reject_value(token, following[0])
                continue

            for value in following:
                if argument.single_valued and argument.values:
                    raise TooManyValuesError(
                        "Argument %s allowed to only have one value." % token.text,
                        argument=argument,
                        token=value.text,
                        index=value.index,
                        hint="pass a single value to %s" % token.text,
                    )
                argument.add_value(value.text)
            position += len(following)

            if not following and not argument.values and argument.default_value:
                argument.add_value(argument.default_value)

    def _reject_value(self, token, value):
        message = "Argument %s may not have a value but was assigned: %s" % (token.text, value.text)
        if value.text.startswith("-"):
            message = "Unrecognized argument provided: %s or %s" % (value.text, message)
        raise ValueNotAllowedError(
            message,
            argument=token.argument,
            token=value.text,
            index=value.index,
            hint=self._hint("remove %r or check its spelling" % value.text),
        )

    def _apply_defaults(self):
        for argument in self._registry.arguments:
            if not argument.values and argument.default_value:
                argument.add_value(argument.default_value)

    def _check_values(self):
        for argument in self._registry.arguments:
            if argument.present and argument.value_required and not argument.values:
                raise MissingArgumentValueError(
                    "Argument %s requires a value." % argument.spellings[-1],
                    argument=argument,
                    hint="provide a value (e.g., %s <value>)" % argument.spellings[-1],
                )
            if not argument.accepts_value and argument.values:
                raise ValueNotAllowedError(
                    "Argument %s may not have a value but was assigned: %s" % (
                        argument.spellings[-1], argument.value
                    ),
                    argument=argument,
                    token=argument.value,
                )


__all__ = (
    "Parser",
    "HelpRequest",
    "Token",
    "TokenKind",
    "tokenize",
    "HELP_TOKENS",
)
