"""
Flagparse constraint validator.

Runs once per schema level, after matching and coercion:
- required arguments must have been supplied (the first missing one fails);
- absent optional arguments receive their default, or their kind's zero value;
- exclusive groups are checked against the arguments supplied on the command
  line (defaults never count as supplied).
"""
from .arguments import Kind
from .faults import *
from .results import Value
from .utils import pluralize


def _spelling(argument):
    return argument.flags[-1]


def _where(scope):
    return "" if scope is None else " for subcommand %r" % scope


def validate_groups(groups, supplied, /, scope=None):
    """
    check every exclusive group against the supplied names.

    raises
    - MutuallyExclusiveError when more than one member was supplied.
    - MissingOneOfError when a musthave group has no supplied member.
    """
    for group in groups:
        found = [name for name in group.names if name in supplied]
        if len(found) > 1:
            raise MutuallyExclusiveError(
                "mutually exclusive arguments passed%s: %s" % (_where(scope), ", ".join(map(repr, group.names))),
                group=group.names,
                found=tuple(found),
                scope=scope,
                hint="keep only one of %s (got %d %s)" % (
                    ", ".join(map(repr, group.names)), len(found), pluralize("argument", len(found))
                ),
            )
        if group.musthave and not found:
            raise MissingOneOfError(
                "one of the mutually exclusive arguments must be provided%s: %s" % (
                    _where(scope), ", ".join(map(repr, group.names))
                ),
                group=group.names,
                scope=scope,
                hint="pass exactly one of %s" % ", ".join(map(repr, group.names)),
            )


def validate(arguments, groups, values, /, scope=None):
    """
    finalize the values of one schema level in place.

    parameters
    - arguments: Sequence[Argument] in declaration order.
    - groups: Sequence[ExclusiveGroup] of the same level.
    - values: dict[str, Value] tagged values of the supplied arguments; absent
      optional arguments are filled in, tagged with their own kind.
    - scope: str | None, name of the subcommand level (None at the top).

    returns
    - frozenset[str]: the names that were supplied on the command line.

    raises
    - MissingRequiredError, MutuallyExclusiveError, MissingOneOfError.
    """
    supplied = frozenset(values)

    for argument in arguments:
        if argument.name in values:
            continue
        if argument.required:
            value = "" if argument.kind is Kind.BOOL else " <value>"
            raise MissingRequiredError(
                "missing required argument %r%s" % (argument.name, _where(scope)),
                argument=argument.name,
                scope=scope,
                hint="pass %s%s" % (_spelling(argument), value),
            )
        values[argument.name] = Value(argument.kind, argument.fallback)

    validate_groups(groups, supplied, scope)
    return supplied


__all__ = (
    "validate",
    "validate_groups",
)
