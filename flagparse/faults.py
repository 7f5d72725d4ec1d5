"""
Flagparse faults: every way a parse can fail, and how a fault shows itself.

Scope
- FaultCode: stable numbers for each failure, spaced by pipeline stage
  (matching, coercion, validation).
- ParseError and one subclass per failure. A fault carries a lowercase,
  one-sentence message plus read-only options (hint, token, index, argument,
  group, scope, and the presentation settings merged in by trigger()).
- trigger(): the host boundary. Raises the fault, or in shell mode prints it
  to stderr and exits with status 1.
- getdoc(): longer description of a code, when the host provides one.

Messages
- Token faults name the position as an ordinal ("at third position").
- Titles are short, the hint is a single suggestion.

Nothing here prints unless trigger() runs in shell mode.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    stable identifiers of parse failures.

    - 1110x/1111x: matching (unknown tokens, missing values)
    - 1112x: coercion (bad integers, unknown kinds)
    - 1113x: validation (required arguments, exclusive groups)
    """
    # --- matching ---
    UNKNOWN_ARGUMENT            = 11101
    UNKNOWN_SUBCOMMAND_TOKENS   = 11102
    MISSING_VALUE               = 11111

    # --- coercion ---
    TYPE_MISMATCH               = 11121
    UNKNOWN_KIND                = 11122

    # --- validation ---
    MISSING_REQUIRED            = 11131
    MUTUALLY_EXCLUSIVE          = 11132
    MISSING_ONE_OF              = 11133

    def normalize(self):
        """
        label shown for this code: the host's __codes__[code] when __main__
        defines that mapping, the number as text otherwise.
        """
        labels = getattr(__import__("__main__"), "__codes__", {})
        return str(labels.get(self, self.value))


_palette = {
    "program": "bold #E6E6F0",
    "fault-code": "bold #00E5FF",
    "fault-title": "bold #FF4DA6",
    "message": "#C8C8D0",
    "arrow": "dim #9CE19C",
    "hint": "italic #9CE19C",
}


class ParseError(Exception):
    """
    base class of every parse failure.

    attributes
    - message: the one-sentence description (str(fault) returns it).
    - options: read-only mapping with the context of the fault.
    - code: FaultCode of the failure; options["code"] takes precedence.
    - kind: class name without the "Error" suffix (e.g. "MissingValue").
    """
    __fault__ = Unset
    __title__ = "parse error"

    def __init__(self, message=Unset, /, **options):
        if not isinstance(message, str | Unset):
            raise TypeError("fault message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return "" if self.message is Unset else self.message

    @property
    def code(self):
        return self.options.get("code", type(self).__fault__)

    @property
    def kind(self):
        return type(self).__name__.removesuffix("Error")

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        styles = defaultdict(str, _palette | getattr(main, "__styles__", {}))

        def piece(fragment, style):
            return Text(str(fragment), styles[style] if colorful else "")

        schema = self.options.get("schema")
        program = getattr(main, "__prog__", None) or getattr(schema, "name", None) or "flagparse"
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "-"
        title = self.options.get("title", type(self).__title__).title()

        header = Text.assemble(
            "[ ", piece(program, "program"),
            " — ", piece(code, "fault-code"),
            " | ", piece(title, "fault-title"),
            " ]",
        )
        body = [piece(self, "message")]
        if hint := self.options.get("hint"):
            body.append(Text.assemble(piece(" → ", "arrow"), piece(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*body), title=header, title_align="left")
        return Group(header, *body)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        self.options.get("console", console).print(self)
        sys.exit(1)

    def __replace__(self, /, **overrides):
        return type(self)(self.message, **(dict(self.options) | overrides))


class UnknownArgumentError(ParseError):
    __fault__ = FaultCode.UNKNOWN_ARGUMENT
    __title__ = "unknown argument"


class UnknownSubcommandTokensError(UnknownArgumentError):
    __fault__ = FaultCode.UNKNOWN_SUBCOMMAND_TOKENS
    __title__ = "unknown subcommand input"


class MissingValueError(ParseError):
    __fault__ = FaultCode.MISSING_VALUE
    __title__ = "missing value"


class TypeMismatchError(ParseError):
    __fault__ = FaultCode.TYPE_MISMATCH
    __title__ = "type mismatch"


class UnknownKindError(ParseError, TypeError):
    __fault__ = FaultCode.UNKNOWN_KIND
    __title__ = "unknown data type"


class MissingRequiredError(ParseError):
    __fault__ = FaultCode.MISSING_REQUIRED
    __title__ = "missing required argument"


class MutuallyExclusiveError(ParseError):
    __fault__ = FaultCode.MUTUALLY_EXCLUSIVE
    __title__ = "mutually exclusive arguments"


class MissingOneOfError(ParseError):
    __fault__ = FaultCode.MISSING_ONE_OF
    __title__ = "missing one of"


def trigger(fault, /, **options):
    """
    merge `options` into a copy of `fault` and surface it.

    the fault must implement __replace__ and __trigger__ (every ParseError
    does). with shell=True the copy is printed through options["console"]
    (stderr by default) and the process exits with status 1; otherwise the
    copy is raised.
    """
    for hook in ("__replace__", "__trigger__"):
        if not callable(getattr(fault, hook, None)):
            raise TypeError("trigger() argument must implement __replace__ and __trigger__")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    host documentation of a fault code, or None.

    read from a __docs__ mapping (FaultCode → str) in __main__.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a FaultCode")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "ParseError",
    "UnknownArgumentError",
    "UnknownSubcommandTokensError",
    "MissingValueError",
    "TypeMismatchError",
    "UnknownKindError",
    "MissingRequiredError",
    "MutuallyExclusiveError",
    "MissingOneOfError",
    "FaultCode",
    "trigger",
    "getdoc",
)
