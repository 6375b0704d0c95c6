"""
Absent argument sentinel.

This module defines a process-wide singleton `null` and its type `NullArgument`.
Lookups that match no registered definition return `null` instead of None, so
call sites can chain accessors without checking first:

    program.get("--never-registered").value   # "" instead of AttributeError

Semantics
- Same accessors as a real definition (see simpleargs.arguments.Argument):
  empty names, empty description/help, every flag False, no values.
- values is always an empty tuple and add_value() is a no-op.
- Falsy: bool(null) is False, so `if argument := registry.lookup(token):` reads naturally.
- Stable string form: repr(null) == "null" (and Rich uses a dim style).
- Identity: NullArgument() always returns the same instance per interpreter,
  including after copy, deepcopy and pickle round-trips.
"""
import functools

from rich.text import Text


class NullArgument:
    """
    Singleton type standing in for “no such argument”.

    Notes
    - This type is final; subclassing is blocked to preserve semantics.
    - Instances are singletons per interpreter process.
    - is_null is True here and False on every real definition; prefer it over
      identity checks in application code.
    """
    __slots__ = ()

    @functools.cache
    def __new__(cls):
        """
        Return the unique instance of NullArgument (per process).
        """
        return super().__new__(cls)

    name = ""
    short_name = ""
    long_name = ""
    names = ()
    spellings = ()
    kind = None
    description = ""
    help_text = ""
    accepts_value = False
    value_required = False
    single_valued = False
    required = False
    default_value = ""
    present = False
    help_requested = False
    values = ()
    value = ""
    is_null = True

    def add_value(self, value, /):
        """
        Ignore the value; the sentinel never holds state.
        """

    def __bool__(self):
        return False

    def __rich__(self):
        """
        Rich protocol hook: render a dim 'null' token for human-friendly output.
        """
        return Text(repr(self), style="dim")

    def __repr__(self):
        return "null"

    def __str__(self):
        return ""

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "null"

    def __init_subclass__(cls, **options):
        """
        Prevent subclassing to preserve the sentinel’s guarantees.
        """
        raise TypeError("type 'NullArgument' is not an acceptable base type")


null = NullArgument()


__all__ = (
    "NullArgument",
    "null",
)
