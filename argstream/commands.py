"""
Argstream command layer: register, parse, and query command-line arguments.

What this module provides
- ArgParser: one parsing scope that owns
  • a flag table and an option table (alias -> shared record),
  • a command table (alias -> child ArgParser with an optional callback),
  • the positional arguments found at its level,
  • optional help text and version string (activating --help/-h and --version/-v).
- invoke(parser, prompt): CLI entry point that turns faults into process exits.

Core ideas
- Registration first, then a single parse() call on the root parser; command
  parsers are fed automatically with whatever follows the command name.
- Every alias of a registration shares one record, so any spelling can be queried.
- Parsing never exits the process: user errors raise ParserFault subclasses and
  help/version requests raise ParserExit. Only the CLI entry point prints and exits.

Quick start
    from argstream import ArgParser, invoke

    parser = ArgParser(helptext="Usage: app [--verbose] [--count N] FILES...", version="1.0")
    parser.flag("verbose v")
    parser.integer("count c", fallback=1)

    def on_build(cmd):
        print("building", cmd.args(), "in", cmd.value("target"))

    build = parser.command("build b", helptext="Usage: app build [--target DIR]", callback=on_build)
    build.string("target t", fallback="out")

    invoke(parser)          # parses sys.argv[1:], exits on errors
    parser.value("count")   # -> int

Token classification (per parser level, first match wins)
- after a literal "--": every token is positional.
- "--": turns option parsing off for the rest of this level.
- "--name", "--name=value": long form.
- "-abc", "-n=value": short form; "-" and "-5" style tokens are positional.
- first token naming a command: the command parser consumes the rest.
- first token "help" (when enabled): print the named command's help text.
- anything else: positional.
"""
import logging
import shlex
import sys
import warnings
import weakref
from collections.abc import Iterable

from rich.console import Console
from rich.text import Text

from .arguments import Flag, Option, convert_all
from .faults import (
    ParserFault,
    ParserExit,
    UnknownOptionError,
    MissingValueError,
    UnknownCommandError,
    UnregisteredQueryError,
    AliasReboundWarning,
    trigger,
)
from .stream import TokenStream
from .utils import Unset, coalesce, aliases

log = logging.getLogger(__name__)


class ArgParser:
    """
    Registers flags, options and commands, and parses a stream of raw arguments.

    Parameters
    - helptext: str | Unset
      text printed verbatim by --help / -h (and by "help <command>" on the parent).
    - version: str | Unset
      text printed verbatim by --version / -v.
    - shell: bool | Unset (keyword-only)
      when True (the default), the CLI entry point prints faults and exits;
      when False, it lets them propagate. Command parsers inherit it when Unset.
    - colorful: bool | Unset (keyword-only)
      style the "Error:" prefix of fault messages. Inherited like shell.

    Lifecycle
    - register with flag()/option()/string()/integer()/floating()/command(),
    - call parse() (or invoke()) once on the root parser,
    - query with value()/values()/count()/found(), args(), command_name(), ...
    """

    def __init__(self, helptext=Unset, version=Unset, *, shell=Unset, colorful=Unset):
        if not isinstance(helptext, str | Unset):
            raise TypeError("parser 'helptext' must be a string")
        if not isinstance(version, str | Unset):
            raise TypeError("parser 'version' must be a string")
        self._helptext = coalesce(helptext)
        self._version = coalesce(version)
        self._shell = bool(coalesce(shell, True))
        self._colorful = bool(coalesce(colorful, False))
        self._flags = {}
        self._options = {}
        self._commands = {}
        self._args = []
        self._command = None
        self._callback = None
        self._parent = None
        self._help_command = False

    def __repr__(self):
        return "arg-parser(helptext=%r, version=%r, flags=%r, options=%r, commands=%r)" % (
            self._helptext,
            self._version,
            sorted(self._flags),
            sorted(self._options),
            sorted(self._commands),
        )

    # ── Registration ────────────────────────────────────────────────────────

    def _bind(self, table, names, record, /):
        """
        Point every alias at the given record.

        An alias already bound at this level is detached from its former record
        (which stays reachable through its other aliases) and a warning is emitted.
        """
        switches = table is not self._commands
        for name in names:
            if switches and (name in self._flags or name in self._options) or not switches and name in table:
                warnings.warn(AliasReboundWarning(
                    "alias %r was already registered and has been rebound" % name
                ), stacklevel=3)
                if switches:
                    self._flags.pop(name, None)
                    self._options.pop(name, None)
            table[name] = record

    def flag(self, name, /):
        """
        Register a flag under every whitespace-separated alias in `name`.

        Returns the parser itself, so registrations can be chained.
        """
        self._bind(self._flags, aliases(name), Flag())
        return self

    def option(self, name, /, fallback=Unset, *, type=str):
        """
        Register a valued option under every whitespace-separated alias in `name`.

        Parameters
        - type: str | int | float, the type every collected value is coerced to.
        - fallback: value returned by value() while nothing was found; defaults to
          the zero value of the type.

        Returns the parser itself, so registrations can be chained.
        """
        self._bind(self._options, aliases(name), Option(type, fallback))
        return self

    def string(self, name, /, fallback=""):
        return self.option(name, fallback, type=str)

    def integer(self, name, /, fallback=0):
        return self.option(name, fallback, type=int)

    def floating(self, name, /, fallback=0.0):
        return self.option(name, fallback, type=float)

    def command(self, name, /, helptext=Unset, callback=Unset, *, parser=Unset):
        """
        Register a command and return the parser dedicated to its arguments.

        Parameters
        - name: whitespace-separated aliases of the command.
        - helptext: help text of the command; when set, "help <name>" becomes
          available on this parser.
        - callback: called with the command parser once it has parsed its arguments.
        - parser: an existing ArgParser to adopt instead of creating a new one.

        Notes
        - The command parser is an independent scope: it can reuse the names of
          this parser's flags and options without interference.
        - It only keeps a weak reference to this parser (see `parent`).
        """
        names = aliases(name)
        if callback is not Unset and not callable(callback):
            raise TypeError("command 'callback' must be callable")
        if parser is Unset:
            parser = ArgParser(helptext, shell=self._shell, colorful=self._colorful)
        elif not isinstance(parser, ArgParser):
            raise TypeError("command 'parser' must be an argument parser")
        elif helptext is not Unset:
            if not isinstance(helptext, str):
                raise TypeError("parser 'helptext' must be a string")
            parser._helptext = helptext

        parser._callback = coalesce(callback, parser._callback)
        parser._parent = weakref.ref(self)
        self._bind(self._commands, names, parser)

        if parser._helptext is not None:
            self._help_command = True
        return parser

    def enable_help_command(self, enable=True, /):
        """
        Toggle the automatic "help <command>" command for this parser.
        """
        self._help_command = bool(enable)
        return self

    # ── Configuration / introspection ──────────────────────────────────────

    @property
    def helptext(self):
        return self._helptext

    @property
    def version(self):
        return self._version

    @property
    def shell(self):
        return self._shell

    @property
    def colorful(self):
        return self._colorful

    @property
    def callback(self):
        return self._callback

    @property
    def parent(self):
        """
        The parser this command parser is registered on, or None.

        The reference is weak: it never keeps the parent alive.
        """
        return self._parent() if self._parent is not None else None

    # ── Flag and option values ─────────────────────────────────────────────

    def _lookup(self, name, /):
        if name in self._flags:
            return self._flags[name]
        if name in self._options:
            return self._options[name]
        raise UnregisteredQueryError("%r is not a registered flag or option name" % name, input=name)

    def count(self, name, /):
        """
        Number of times a flag was found, or number of values found for an option.
        """
        return self._lookup(name).count

    def found(self, name, /):
        return self._lookup(name).count > 0

    def value(self, name, /):
        """
        Last value found for an option (or its fallback); True if a flag was found.
        """
        return self._lookup(name).value

    def values(self, name, /):
        """
        Every value found for an option, in order; one True per flag occurrence.
        """
        return self._lookup(name).values

    # ── Positional arguments ───────────────────────────────────────────────

    def args(self):
        return list(self._args)

    def has_args(self):
        return len(self._args) > 0

    def num_args(self):
        return len(self._args)

    def args_as_ints(self):
        """
        Every positional argument parsed as an integer.

        Raises InvalidNumericValueError on the first argument that is not one.
        """
        return convert_all(self._args, int)

    def args_as_floats(self):
        """
        Every positional argument parsed as a floating-point value.

        Raises InvalidNumericValueError on the first argument that is not one.
        """
        return convert_all(self._args, float)

    # ── Commands ───────────────────────────────────────────────────────────

    def has_command(self):
        return self._command is not None

    def command_name(self):
        return self._command

    def command_parser(self):
        return self._commands[self._command] if self._command is not None else None

    # ── Parsing machinery ──────────────────────────────────────────────────

    def parse(self, tokens=Unset, /):
        """
        Parse a sequence of raw arguments; defaults to sys.argv[1:].

        Returns
        - the parser itself.

        Raises
        - ParserFault: unknown option/command, missing or malformed value.
        - ParserExit: --help, --version or "help <command>" was requested.
        - TypeError: when tokens is not an iterable of strings.
        """
        if tokens is Unset:
            tokens = sys.argv[1:]
        elif isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")
        tokens = tuple(tokens)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be an iterable of strings")

        log.debug("parsing %d tokens", len(tokens))
        self._parse_stream(TokenStream(tokens))
        return self

    def _parse_stream(self, stream, /):
        parsing = True
        first = True

        while stream.has_next():
            token = stream.next()

            if not parsing:
                self._args.append(token)

            elif token == "--":
                log.debug("option parsing turned off after %d tokens", stream.consumed)
                parsing = False

            elif token.startswith("--"):
                self._parse_long(token[2:], stream)

            elif token.startswith("-"):
                # "-" alone and negative numbers such as "-5" are positionals
                if len(token) > 1 and not "0" <= token[1] <= "9":
                    self._parse_short(token[1:], stream)
                else:
                    self._args.append(token)

            elif first and token in self._commands:
                self._dispatch(token, stream)

            elif first and self._help_command and token == "help":
                self._parse_help_command(stream)

            else:
                self._args.append(token)

            first = False

    def _dispatch(self, name, stream, /):
        parser = self._commands[name]
        self._command = name
        log.debug("dispatching %d remaining tokens to command %r", len(stream), name)
        parser._parse_stream(stream)
        if parser._callback is not None:
            parser._callback(parser)

    def _parse_help_command(self, stream, /):
        if not stream.has_next():
            raise MissingValueError("the help command requires an argument", input="help")
        name = stream.next()
        if name not in self._commands:
            raise UnknownCommandError("%r is not a recognised command name" % name, input=name)
        self._commands[name]._exit_help()

    def _parse_long(self, name, stream, /):
        if "=" in name:
            self._parse_equals("--", name)
        elif name in self._flags:
            self._flags[name].hit()
        elif name in self._options:
            if not stream.has_next():
                raise MissingValueError("missing value for '--%s' option" % name, input="--" + name)
            self._options[name].append(stream.next())
        elif name == "help" and self._helptext is not None:
            self._exit_help()
        elif name == "version" and self._version is not None:
            self._exit_version()
        else:
            raise UnknownOptionError("--%s is not a recognised flag or option name" % name, input="--" + name)

    def _parse_short(self, chars, stream, /):
        if "=" in chars:
            self._parse_equals("-", chars)
            return

        # Each character is an alias of its own, so "-abc x y" reads as "-a -b x -c y"
        # when b and c are options.
        for char in chars:
            if char in self._flags:
                self._flags[char].hit()
            elif char in self._options:
                if stream.has_next():
                    self._options[char].append(stream.next())
                elif len(chars) > 1:
                    raise MissingValueError("missing value for %r option in -%s" % (char, chars), input="-" + chars)
                else:
                    raise MissingValueError("missing value for '-%s' option" % chars, input="-" + chars)
            elif char == "h" and self._helptext is not None:
                self._exit_help()
            elif char == "v" and self._version is not None:
                self._exit_version()
            elif len(chars) > 1:
                raise UnknownOptionError(
                    "%r in -%s is not a recognised flag or option name" % (char, chars), input="-" + chars
                )
            else:
                raise UnknownOptionError("-%s is not a recognised flag or option name" % chars, input="-" + chars)

    def _parse_equals(self, prefix, token, /):
        name, _, value = token.partition("=")
        if name in self._flags:
            raise UnknownOptionError("%s%s is a flag and cannot take a value" % (prefix, name), input=prefix + token)
        if name not in self._options:
            raise UnknownOptionError("%s%s is not a recognised option name" % (prefix, name), input=prefix + token)
        if not value:
            raise MissingValueError("missing value for '%s%s' option" % (prefix, name), input=prefix + token)
        self._options[name].append(value)

    def _exit_help(self):
        log.debug("help requested")
        raise ParserExit(coalesce(self._helptext, ""))

    def _exit_version(self):
        log.debug("version requested")
        raise ParserExit(self._version)

    # ── Diagnostics ────────────────────────────────────────────────────────

    def dump(self):
        """
        Write the parser's state to standard output (for manual inspection only).

        Sections
        - Flags: "name: count" per alias, sorted.
        - Options: "name: (fallback) [values]" per alias, sorted.
        - Arguments: one positional per line, in order.
        - Command: the command found, if any.
        """
        lines = ["Flags:"]
        lines += ["  %s: %d" % (name, self._flags[name].count) for name in sorted(self._flags)] or ["  [none]"]

        lines += ["", "Options:"]
        lines += [
            "  %s: (%s) [%s]" % (name, option.fallback, ", ".join(map(str, option.values)))
            for name, option in sorted(self._options.items())
        ] or ["  [none]"]

        lines += ["", "Arguments:"]
        lines += ["  %s" % arg for arg in self._args] or ["  [none]"]

        lines += ["", "Command:", "  %s" % (self._command if self._command is not None else "[none]")]

        Console().print(Text("\n".join(lines)), soft_wrap=True)

    # ── CLI entry point ────────────────────────────────────────────────────

    def __invoke__(self, prompt=Unset, /):
        """
        Parse a prompt as a command-line program would.

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; split with shlex.split.
          • Iterable[str]: pre-tokenized sequence, used as-is.

        Behavior
        - faults and help/version requests are handed to trigger(): with shell=True
          they are printed and the process exits (1 for faults, 0 for help/version);
          otherwise they propagate to the caller.
        """
        if isinstance(prompt, str):
            prompt = shlex.split(prompt)
        try:
            self.parse(prompt)
        except (ParserFault, ParserExit) as fault:
            trigger(fault, shell=self._shell, colorful=self._colorful)
        return self


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for parsers.

    Parameters
    - object: an instance providing __invoke__(prompt), such as ArgParser.
    - prompt: Unset (sys.argv[1:]), a shell-like string, or an iterable of strings.

    Raises
    - TypeError: when object does not implement __invoke__.
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)
    raise TypeError("invoke() first argument must implement __invoke__ method")


__all__ = (
    "ArgParser",
    "invoke",
)
