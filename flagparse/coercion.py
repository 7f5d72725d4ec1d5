"""
Flagparse coercion layer.

Turns the captures produced by the matcher into tagged values, using the kind
of the argument that produced each capture:
- BOOL       → True (presence is the value)
- INT        → base-10 signed integer, text must match [+-]?[0-9]+
- STRING     → the token verbatim
- STRINGLIST → list of the tokens verbatim (order kept, duplicates kept)
"""
import re

from .arguments import Kind
from .faults import *
from .results import Value


def coerce(argument, captured, /):
    """
    convert the raw capture of `argument` into its typed value.

    parameters
    - argument: Argument
    - captured: True | tuple[str, ...]
      what the matcher recorded for the argument.

    raises
    - TypeMismatchError when INT text is not a base-10 integer.
    - UnknownKindError when the argument's kind is outside the closed set.
    """
    match argument.kind:
        case Kind.BOOL:
            return True
        case Kind.INT:
            text, = captured
            if not re.fullmatch(r"[+-]?[0-9]+", text):
                raise TypeMismatchError(
                    "invalid value %r for argument %r: expected an integer" % (text, argument.name),
                    argument=argument.name,
                    token=text,
                    hint="pass a base-10 integer such as 5 or +5 (negative values are read as flags)",
                )
            return int(text)
        case Kind.STRING:
            text, = captured
            return text
        case Kind.STRINGLIST:
            return list(captured)
        case kind:
            raise UnknownKindError(
                "unknown data type %r for argument %r" % (getattr(kind, "value", kind), argument.name),
                kind=kind,
                argument=argument.name,
            )


def coerce_all(captures, /):
    """
    coerce every capture with the argument that produced it.

    parameters
    - captures: Mapping[str, Capture], as returned by tokens.match().

    returns
    - dict[str, Value]: tagged values keyed by argument name, in capture order.
    """
    return {
        name: Value(argument.kind, coerce(argument, raw))
        for name, (argument, raw) in captures.items()
    }


__all__ = (
    "coerce",
    "coerce_all",
)
