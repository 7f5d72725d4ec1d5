"""
Flagparse results.

Overview
- Value: tagged value (kind + payload) stored for every parsed name.
- ParseResult: read-only mapping from argument name to value. A subcommand
  that was invoked appears under its own name, holding a nested ParseResult.
- Outcome: what Schema.parse() hands back: (result, exit, fault).

Reading values
- result["config"] returns the plain payload (lists are fresh copies).
- getbool/getint/getstr/getlist/getcommand check the stored kind first and
  raise KindError (a TypeError) on a mismatch, so callers never need to guess.
- supplied tells apart values given on the command line from defaults.
"""
from collections.abc import Mapping
from typing import NamedTuple

from .arguments import Kind


class KindError(TypeError):
    """
    Raised by the kind-checked accessors when the stored kind differs.
    """


class Value(NamedTuple):
    """
    Tagged value of a result entry; kind is None for nested subcommand results.
    """
    kind: Kind | None
    payload: object


class Outcome(NamedTuple):
    """
    Result of Schema.parse().

    - result: ParseResult on success, None otherwise.
    - exit: True when the host should stop (help, version, or a fault).
    - fault: the ParseError when parsing failed, None otherwise.
    """
    result: "ParseResult | None"
    exit: bool
    fault: Exception | None


def _copy(payload):
    return list(payload) if isinstance(payload, list) else payload


class ParseResult(Mapping):
    """
    Read-only mapping from argument name to parsed value.

    Parameters
    - values: Mapping[str, Value]
      Tagged values in declaration order.
    - supplied: Iterable[str]
      Names matched on the command line at this level.
    - command: str | None
      Name of the invoked subcommand, if any (its entry holds the nested result).
    """
    __slots__ = ("_values", "_supplied", "_command")

    def __init__(self, values=(), /, *, supplied=(), command=None):
        self._values = dict(values)
        for name, value in self._values.items():
            if not isinstance(value, Value):
                raise TypeError("ParseResult values must be tagged values, got %r for %r" % (value, name))
        self._supplied = frozenset(supplied)
        self._command = command

    def __getitem__(self, name):
        return _copy(self._values[name].payload)

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"{type(self).__name__}({self.todict()!r})"

    def __rich_repr__(self):
        for name in self._values:
            yield name, self[name]

    @property
    def supplied(self):
        return self._supplied

    @property
    def command(self):
        return self._command

    def kindof(self, name, /):
        """
        Kind stored under `name` (None for a nested subcommand result).
        """
        return self._values[name].kind

    def _get(self, name, kind, /):
        value = self._values[name]
        if value.kind is not kind:
            held = "subcommand" if value.kind is None else value.kind.value
            wanted = "subcommand" if kind is None else kind.value
            raise KindError("%r holds a %s value, not %s" % (name, held, wanted))
        return _copy(value.payload)

    def getbool(self, name, /):
        return self._get(name, Kind.BOOL)

    def getint(self, name, /):
        return self._get(name, Kind.INT)

    def getstr(self, name, /):
        return self._get(name, Kind.STRING)

    def getlist(self, name, /):
        return self._get(name, Kind.STRINGLIST)

    def getcommand(self, name, /):
        return self._get(name, None)

    def todict(self):
        """
        Plain, nested dict copy of the result.
        """
        return {
            name: value.payload.todict() if value.kind is None else _copy(value.payload)
            for name, value in self._values.items()
        }


__all__ = (
    "KindError",
    "Value",
    "Outcome",
    "ParseResult",
)
