"""
Argstream faults (errors, exits and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain so logs and searches stay predictable.
- ParserFault and its subclasses: the exceptions raised by the parser engine.
  Each one carries a message, a kind tag (its FaultCode) and the offending input.
- ParserExit: a successful early termination (help or version output).
- ParserWarning: soft diagnostics emitted through the warnings module.
- trigger(): central entry point to surface a fault or an exit, either by raising
  it (embedded use) or by printing it and terminating the process (shell use).

Rendering contract
- errors: a single line "Error: <message>." on standard error, exit status 1.
- exits: the stored text, verbatim, on standard output, exit status 0.
- output goes through rich consoles; nothing is wrapped, highlighted, or
  interpreted as markup.

Integration
- The parser engine only ever raises. The CLI entry point catches and hands the
  exception to trigger(fault, shell=..., colorful=...).
"""
import sys
from enum import IntEnum

from rich.console import Console
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)
stdout = Console()


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping
    - routing (1110x): UNKNOWN_COMMAND
    - switches (1111x/1112x): UNKNOWN_OPTION, MISSING_VALUE, INVALID_NUMERIC_VALUE
    - programmer errors (112xx): UNREGISTERED_QUERY
    - warnings (12xxx): ALIAS_REBOUND
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND             = 11101

    # --- switch/option errors (11xxx) ---
    UNKNOWN_OPTION              = 11112
    MISSING_VALUE               = 11117
    INVALID_NUMERIC_VALUE       = 11124

    # --- programmer errors (112xx) ---
    UNREGISTERED_QUERY          = 11201

    # --- warnings (12xxx) ---
    ALIAS_REBOUND               = 12101


def _styles():
    """
    error styles, overridable by the host through a __styles__ mapping in __main__.
    """
    return {
        "error-prefix": "bold red",
        "error-message": "",
    } | getattr(sys.modules.get("__main__"), "__styles__", {})


class ParserFault(Exception):
    """
    Base class for every error raised while parsing or querying a parser.

    Attributes
    - message: str, the human readable description (no "Error:" prefix, no final dot).
    - code: FaultCode, the kind tag of the fault.
    - input: str | None, the offending token when one is known.
    - status: int, the exit status used when the fault terminates the process.
    """
    code = None
    status = 1

    def __init__(self, message, /, *, input=Unset):
        super().__init__(message)
        self.message = message
        self.input = coalesce(input)

    def __str__(self):
        return self.message

    def render(self, *, colorful=False):
        """
        Build the single-line "Error: <message>." renderable.
        """
        if not colorful:
            return Text("Error: %s." % self.message)
        styles = _styles()
        return Text.assemble(
            ("Error:", styles["error-prefix"]),
            " ",
            (self.message, styles["error-message"]),
            ".",
        )

    def __trigger__(self, **options):
        if not options.get("shell"):
            raise self from None
        console.print(self.render(colorful=bool(options.get("colorful"))), soft_wrap=True)
        sys.exit(self.status)


class UnknownOptionError(ParserFault):
    code = FaultCode.UNKNOWN_OPTION


class MissingValueError(ParserFault):
    code = FaultCode.MISSING_VALUE


class InvalidNumericValueError(ParserFault, ValueError):
    code = FaultCode.INVALID_NUMERIC_VALUE


class UnknownCommandError(ParserFault):
    code = FaultCode.UNKNOWN_COMMAND


class UnregisteredQueryError(ParserFault, LookupError):
    """
    Raised when an accessor is called with a name that was never registered.

    This signals a bug in the embedding program, not bad user input.
    """
    code = FaultCode.UNREGISTERED_QUERY


class ParserExit(Exception):
    """
    Successful early termination requested by the user (--help, --version, help <cmd>).

    The parser raises it so that embedding hosts can intercept the request; the CLI
    entry point prints the text verbatim to standard output and exits with status 0.
    """
    status = 0

    def __init__(self, text, /):
        super().__init__(text)
        self.text = text

    def __str__(self):
        return self.text

    def __trigger__(self, **options):
        if not options.get("shell"):
            raise self from None
        stdout.out(self.text, highlight=False)
        sys.exit(self.status)


class ParserWarning(UserWarning):
    """
    Base class for soft diagnostics; they never interrupt parsing.
    """
    code = None


class AliasReboundWarning(ParserWarning):
    code = FaultCode.ALIAS_REBOUND


def trigger(fault, /, **options):
    """
    surface a fault or an exit with the given runtime options.

    contract
    - fault must provide a __trigger__ method (ParserFault and ParserExit do).
    - options are forwarded as-is; the built-in faults recognise:
      • shell: bool, print and terminate the process instead of raising.
      • colorful: bool, style the "Error:" prefix.
    """
    if not hasattr(fault, "__trigger__") or not callable(fault.__trigger__):
        raise TypeError("trigger() argument must have a __trigger__ method")
    fault.__trigger__(**options)


__all__ = (
    "FaultCode",
    "ParserFault",
    "UnknownOptionError",
    "MissingValueError",
    "InvalidNumericValueError",
    "UnknownCommandError",
    "UnregisteredQueryError",
    "ParserExit",
    "ParserWarning",
    "AliasReboundWarning",
    "trigger",
)
