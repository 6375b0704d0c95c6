"""
simpleargs program layer: declare, parse, print help.

What this module provides
- Program: the facade an application talks to.
  • argument(...): declare a positional or keyword argument and get it back
    for fluent configuration.
  • parse(...): run the parsing engine and, unless disabled, print usage and
    help text when the user asked for it.
  • get(...) / program[...]: query the populated definitions afterwards.
  • report(fault): render a fault (rich) on stderr with the program's style.
- program(...): create a Program (factory mirroring the constructor).

Quick start
    from simpleargs import Program, InvalidInputError

    program = Program("copy", usage="copy [-v] -i <file> -o <file>")
    program.argument("-i", "--input", description="file to read").requires_value().require()
    program.argument("-o", "--output", description="file to write").default("out.txt")
    program.argument("-v", "--verbose", description="chatty output")

    try:
        program.parse()
    except InvalidInputError as fault:
        program.report(fault)
        raise SystemExit(1)

    if program.program_help_requested or program.argument_help_requested:
        raise SystemExit(0)
    print(program["input"].value, program["output"].value, program["-v"].present)

Design notes
- The library prints only help (to the program console) and reported faults
  (to the error console); it never exits the process.
- Help interception is a per-program switch (autohelp / disable_help()).
- Colors come from a palette that the host can override with a __styles__
  mapping in __main__; colorful=False strips every style.
"""
import os.path
import sys
from collections import defaultdict

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from . import faults
from .arguments import Argument, Keyword, Positional
from .parser import Parser, HelpRequest
from .utils import *


class Program:
    """
    Facade over a Parser: declaration, parsing, help and reporting.

    Parameters
    - name: Unset | str
      Program name used in rendered usage and faults. Defaults to
      __main__.__prog__ when defined, else the script name.
    - usage: str
      Usage line printed when help is requested.
    - help: Unset | str
      Program help printed after the usage line. When omitted, the rendered
      listing of the registered arguments is printed instead.
    - autohelp: bool (keyword-only)
      Print help automatically when "-h"/"--help" is found (default True).
    - console: Unset | rich.console.Console (keyword-only)
      Output sink for help text (stdout console by default).
    - errors: Unset | rich.console.Console (keyword-only)
      Output sink for report() (stderr console by default).
    - colorful: bool (keyword-only)
      Style rendered output; when False, plain text is printed.
    - fancy: bool (keyword-only)
      Wrap help and reported faults in a rich Panel.
    """

    name = mirror("name")
    usage = mirror("usage")
    colorful = mirror("colorful")
    fancy = mirror("fancy")
    console = mirror("console")
    parser = mirror("parser")

    def __init__(
            self,
            name=Unset,
            usage="",
            help=Unset,
            *,
            autohelp=True,
            console=Unset,
            errors=Unset,
            colorful=True,
            fancy=False,
    ):
        if not isinstance(name, str | Unset):
            raise TypeError("program 'name' must be a string")
        if isinstance(name, str) and not (name := name.strip()):
            raise ValueError("program 'name' cannot be empty")
        if usage is None:
            usage = ""
        if not isinstance(usage, str):
            raise TypeError("program 'usage' must be a string")
        if help is None:
            help = ""
        if not isinstance(help, str | Unset):
            raise TypeError("program 'help' must be a string")
        if not isinstance(console, Console | Unset) or not isinstance(errors, Console | Unset):
            raise TypeError("program consoles must be rich consoles")

        main = __import__("__main__")
        self._name = coalesce(name, getattr(main, "__prog__", os.path.basename(sys.argv[0]) or "program"))
        self._usage = usage
        self._help = help
        self._parser = Parser(help=autohelp)
        self._console = coalesce(console, Console())
        self._errors = coalesce(errors, faults.console)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)

    # --- declaration ---

    def argument(self, *names, **config):
        """
        Declare and register an argument.

        Forms
        - argument("output", description=...)            → positional
        - argument("-o", "--output", description=...)    → keyword
        - argument("-o", "--output", "where to write")   → keyword with description

        Keyword configuration is forwarded to Argument (help_text,
        accepts_value, value_required, single_valued, required, default_value).

        Returns
        - Argument: the registered definition, ready for fluent configuration.

        Raises
        - InvalidArgumentNameError / DuplicateArgumentNameError: see Registry.register.
        """
        return self._parser.register(Argument(*names, **config))

    def disable_help(self):
        """Stop intercepting "-h"/"--help"; requests stay queryable."""
        self._parser.disable_help()
        return self

    @property
    def autohelp(self):
        return self._parser.help_enabled

    @property
    def help(self):
        """Program help text, or the plain argument listing when none was given."""
        return coalesce(self._help, str(self._parser.registry))

    # --- parsing ---

    def parse(self, args=Unset, /):
        """
        Parse the command line and print help when it was requested.

        Parameters
        - args: Unset | str | Iterable[str]
          Unset reads sys.argv[1:]; a string is split like a shell would.

        Returns
        - Program: self, so program.parse().get("x") reads naturally.

        Raises
        - InvalidInputError subclasses, NullInputError, TypeError: see Parser.parse.
        """
        match self._parser.parse(sys.argv[1:] if args is Unset else args):
            case HelpRequest.PROGRAM:
                self.print_help()
            case HelpRequest.ARGUMENT:
                self._console.print(self._parser.argument_help, markup=False, highlight=False)
                self.print_help()
        return self

    @property
    def program_help_requested(self):
        return self._parser.program_help_requested

    @property
    def argument_help_requested(self):
        return self._parser.argument_help_requested

    @property
    def requested_argument(self):
        return self._parser.requested_argument

    # --- access ---

    def get(self, name, /):
        """Definition for a short, long or positional name (null when unknown)."""
        return self._parser.lookup(name)

    def __getitem__(self, name):
        return self._parser.lookup(name)

    def __contains__(self, name):
        return self._parser.is_known_name(name)

    def __iter__(self):
        return iter(self._parser.arguments)

    def __len__(self):
        return len(self._parser.arguments)

    # --- output ---

    def print_help(self):
        """Print the usage line followed by the program help to the program console."""
        renders = []
        if self._usage:
            renders.append(Text(self._usage, style=self._styler("usage-section")))
        if self._help is Unset:
            renders.append(self)
        else:
            renders.append(Text(self._help, style=self._styler("description-section")))

        if self._fancy:
            title = Text(" %s " % self._name, style=self._styler("panel-title"))
            self._console.print(Panel(Group(*renders), title=title, title_align="left"))
        else:
            for render in renders:
                self._console.print(render, highlight=False)

    def report(self, fault, /):
        """
        Render a fault on the error console using this program's style.

        The fault is not raised and the process is not terminated.
        """
        if not isinstance(fault, faults.ArgumentException):
            raise TypeError("report() argument must be a simpleargs fault")
        self._errors.print(fault.__replace__(prog=self._name, colorful=self._colorful, fancy=self._fancy))

    def _styler(self, style):
        styles = defaultdict(str, {
            # === Head sections ===
            "usage-section": "bold #36C5F0",  # SKY-BLUE usage line
            "description-section": "italic #A3A3A3",  # Neutral gray help text

            # === Groups / arguments ===
            "group-label": "bold #FFFFFF",  # Pure white headers
            "argument-description": "#9CA3AF",  # Muted gray
            "keyword-name": "bold #00E6FF",  # CYAN for keyword spellings
            "positional-name": "bold #22C55E",  # GREEN for positional names
            "metavar": "bold #FFD600",  # AMBER for values
            "default": "#737373",  # Dim default marker

            # === Fancy panel ===
            "panel-title": "bold #FF4D94",  # Magenta branding
        } | getattr(__import__("__main__"), "__styles__", {}))
        return styles[style] if self._colorful else ""

    def __rich__(self):
        """
        Render the registered arguments grouped by kind.

        Layout
            keyword arguments:
              -i | --input <value>     file to read
            positional arguments:
              output [<value>]         where to write (default: out.txt)
        """
        padding = 2
        indent = 28
        width = self._console.width

        groups = defaultdict(list)
        for argument in self._parser.arguments:
            groups[type(argument.kind)].append(argument)

        renders = Text()
        for kind in (Keyword, Positional):
            if not groups[kind]:
                continue
            if renders:
                renders.append("\n")
            label = pluralize(kind.__name__.lower() + " argument")
            renders.append(label, style=self._styler("group-label")).append(":\n")

            for argument in groups[kind]:
                style = self._styler("keyword-name" if kind is Keyword else "positional-name")
                section = Text(" " * padding)
                section.append(Text(" | ").join(Text(spelling, style=style) for spelling in argument.spellings))
                if argument.accepts_value:
                    metavar = "<value>" if argument.value_required and not argument.default_value else "[<value>]"
                    section.append(" ").append(metavar, style=self._styler("metavar"))

                descr = Text(argument.description, style=self._styler("argument-description"))
                if argument.default_value:
                    descr.append(" (default: %s)" % argument.default_value, style=self._styler("default"))

                if descr:
                    if len(section) >= indent:
                        section.append("\n").append(" " * indent)
                    else:
                        section.append(" " * (indent - len(section)))
                    lines = descr.wrap(self._console, max(width - indent, 16))
                    section.append(lines[0])
                    for line in lines[1:]:
                        section.append("\n").append(" " * indent).append(line)

                renders.append(section).append("\n")

        return renders

    def __str__(self):
        return "".join(
            "%s%s\n" % (argument, list(argument.values)) for argument in self._parser.arguments
        )

    def __repr__(self):
        return "program(name=%r, arguments=%d)" % (self._name, len(self))


def program(*args, **kwargs):
    """
    Create a Program.

    Parameters
    - *args, **kwargs: forwarded to Program(...).

    Returns
    - Program
    """
    return Program(*args, **kwargs)


__all__ = (
    "Program",
    "program",
)
