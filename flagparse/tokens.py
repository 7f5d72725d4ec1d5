"""
Flagparse tokenizer/matcher.

What this module provides
- Cursor: owns the immutable token tuple and the current position.
- Capture: what one argument matched, (argument, raw), where raw is
    • True for BOOL arguments,
    • a tuple of one or more raw strings for value-bearing arguments.
- match(): single left-to-right pass of a token list against the arguments
  of one schema level, producing captures keyed by argument name.
- match_stacked() / match_single() / consume_values(): the per-pattern
  routines used by match(); the matchers return how far the cursor advanced.

Token patterns
- "-xyz" (one dash, more than one character after it): stacked BOOL short
  aliases. Every character must name a BOOL argument, otherwise the whole
  token is unknown and nothing is applied.
- "-x" / "--word": a single argument. BOOL arguments are presence-only;
  INT/STRING take the next token; STRINGLIST takes every following token up
  to the next one starting with '-'.
- a token naming one of the level's subcommands stops the pass (it is left
  under the cursor for the dispatcher).
- anything else is unknown.

Policies
- A token starting with '-' is never consumed as a value (negative numbers
  included); the flag then reports a missing value.
- Repeated arguments: the last match wins, together with the argument that
  produced it. For STRINGLIST the last complete capture wins; captures are
  never concatenated.
- No backtracking; the first error aborts the pass.
"""
import difflib
from typing import NamedTuple

from .arguments import Argument, Kind
from .faults import *
from .utils import ordinal


class Capture(NamedTuple):
    """
    Raw match of one argument: True for BOOL, a tuple of strings otherwise.
    """
    argument: Argument
    raw: bool | tuple[str, ...]


class Cursor:
    """
    Reading position over an immutable token sequence.

    Parameters
    - tokens: Iterable[str]
      Raw tokens; copied into a tuple.
    - offset: int
      Number of tokens already consumed by outer levels (subcommand names),
      so that positions in messages stay absolute.
    """
    __slots__ = ("_tokens", "_index", "_offset")

    def __init__(self, tokens, /, offset=0):
        self._tokens = tuple(tokens)
        for token in self._tokens:
            if not isinstance(token, str):
                raise TypeError("cursor tokens must be strings")
        self._index = 0
        self._offset = offset

    def __repr__(self):
        return f"{type(self).__name__}(index={self._index}, tokens={self._tokens!r})"

    @property
    def tokens(self):
        return self._tokens

    @property
    def index(self):
        return self._index

    @property
    def position(self):
        """
        1-based absolute position of the current token (for messages).
        """
        return self._offset + self._index + 1

    @property
    def exhausted(self):
        return self._index >= len(self._tokens)

    def peek(self, ahead=0, /):
        """
        Token `ahead` positions past the current one, or None past the end.
        """
        try:
            return self._tokens[self._index + ahead]
        except IndexError:
            return None

    def advance(self, count=1, /):
        """
        Move forward `count` tokens (clamped to the end); return the distance moved.
        """
        count = min(count, len(self._tokens) - self._index)
        self._index += count
        return count

    def remaining(self):
        return self._tokens[self._index:]

    def fork(self):
        """
        New cursor over the remaining tokens, keeping absolute positions.
        """
        return type(self)(self.remaining(), self._offset + self._index)


def isflag(token, /):
    return token.startswith("-")


def isstacked(token, /):
    return len(token) > 2 and token[0] == "-" and token[1] != "-"


def _unknown(cursor, token, arguments, scope, /, **options):
    # unknown token: suggest the closest spellings declared at this level
    spellings = [flag for argument in arguments for flag in argument.flags]
    suggestions = difflib.get_close_matches(token, spellings, 3)
    if "hint" not in options:
        try:
            options["hint"] = "did you mean %r? run with --help to see all options" % suggestions[0]
        except IndexError:
            options["hint"] = "run with --help to see all options"

    if scope is None:
        return UnknownArgumentError(
            "unknown argument %r at %s position" % (token, ordinal(cursor.position)),
            token=token,
            index=cursor.position,
            suggestions=suggestions,
            **options
        )
    return UnknownSubcommandTokensError(
        "unknown argument %r for subcommand %r at %s position" % (token, scope, ordinal(cursor.position)),
        token=token,
        index=cursor.position,
        scope=scope,
        suggestions=suggestions,
        **options
    )


def match_stacked(cursor, arguments, captures, /, scope=None):
    """
    match a stacked short-boolean token ("-abc") at the cursor.

    behavior
    - resolves every character to a BOOL argument of this level (first
      declared match wins).
    - fails atomically: captures are only touched once every character resolved.

    returns
    - the distance advanced (always 1).

    raises
    - UnknownArgumentError (UnknownSubcommandTokensError inside a subcommand).
    """
    token = cursor.peek()
    resolved = []
    for char in token[1:]:
        for argument in arguments:
            if argument.short == char and argument.kind is Kind.BOOL:
                resolved.append(argument)
                break
        else:
            if any(argument.short == char for argument in arguments):
                hint = "only boolean flags can be stacked; pass '-%s' on its own with its value" % char
            else:
                hint = "'-%s' is not a known boolean flag; run with --help to see all options" % char
            raise _unknown(cursor, token, arguments, scope, hint=hint, char=char)

    for argument in resolved:
        captures[argument.name] = Capture(argument, True)
    return cursor.advance()


def consume_values(cursor, argument, flag, /):
    """
    consume the value window of a value-bearing argument.

    the cursor must sit on the first candidate value (just past the flag).

    returns
    - tuple[str, ...]: one token for INT/STRING, one or more for STRINGLIST.

    raises
    - MissingValueError when no token follows or the next token starts with '-'.
    """
    value = cursor.peek()
    if value is None or isflag(value):
        raise MissingValueError(
            "no value provided for argument %r at %s position" % (flag, ordinal(cursor.position - 1)),
            token=flag,
            index=cursor.position - 1,
            argument=argument.name,
            hint="pass a value after %s (values starting with '-', such as negative numbers, are read as flags)" % flag,
        )

    values = [value]
    cursor.advance()
    if argument.kind is Kind.STRINGLIST:
        while (value := cursor.peek()) is not None and not isflag(value):
            values.append(value)
            cursor.advance()
    return tuple(values)


def match_single(cursor, arguments, captures, /, scope=None):
    """
    match a single "-x" / "--word" token at the cursor.

    behavior
    - the first declared argument whose flags contain the token wins.
    - BOOL: records Capture(argument, True) (repeats are idempotent).
    - others: records Capture(argument, values) (later matches overwrite).

    returns
    - the distance advanced (1 for BOOL, 1 + number of values otherwise).
    """
    token = cursor.peek()
    for argument in arguments:
        if token in argument.flags:
            break
    else:
        raise _unknown(cursor, token, arguments, scope)

    start = cursor.index
    cursor.advance()
    if argument.kind is Kind.BOOL:
        captures[argument.name] = Capture(argument, True)
    else:
        captures[argument.name] = Capture(argument, consume_values(cursor, argument, token))
    return cursor.index - start


def match(cursor, arguments, /, scope=None, commands=()):
    """
    scan the cursor against the arguments of one schema level.

    parameters
    - cursor: Cursor
    - arguments: Sequence[Argument] (declaration order decides lookups)
    - scope: str | None
      name of the subcommand being matched; None at the top level.
    - commands: Container[str]
      subcommand names of the level; the pass stops on the first token
      (outside a value window) equal to one of them.

    returns
    - dict[str, Capture]: captures keyed by argument name. The cursor is
      exhausted, or sits on a subcommand name.
    """
    captures = {}
    while not cursor.exhausted and cursor.peek() not in commands:
        if isstacked(cursor.peek()):
            match_stacked(cursor, arguments, captures, scope)
        else:
            match_single(cursor, arguments, captures, scope)
    return captures


__all__ = (
    "Cursor",
    "Capture",
    "isflag",
    "isstacked",
    "match",
    "match_stacked",
    "match_single",
    "consume_values",
)
