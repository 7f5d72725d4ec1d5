"""
Flagparse schema layer: declare, dispatch, and parse.

What this module provides
- Schema: root container of a program's arguments, exclusive groups and
  subcommands, plus program metadata (name/author/version/description) and
  presentation settings. Schema.parse() is the public entry point.
- Subcommand: named, nested level with its own arguments, groups and
  (recursively) subcommands.
- resolve(level, tokens): the pure pipeline (dispatch → match → coerce →
  validate), with no help/version handling and no output.
- invoke(schema, prompt): convenience runner for host programs.

Quick start
    from flagparse import Schema, Kind, invoke

    schema = Schema("demo", version="1.0.0", description="A simple demonstration")
    schema.argument("verbose", "v", "verbose", "Increase verbosity", Kind.BOOL)
    schema.argument("config", "c", "config", "Path to config file", default="a.yaml")
    build = schema.command("build", "Build the project")
    build.argument("input", "i", "input", "Input file", required=True)

    if __name__ == "__main__":
        result = invoke(schema)          # reads sys.argv[1:]
        print(result["config"])

Pipeline contract
- Global pre-checks run once on the whole token list: an empty list (when
  emptyhelp is on) or any -h/--help renders help; any --version renders the
  version. Both short-circuit with exit=True and no fault.
- Each level matches its own flags up to the first token equal to one of its
  subcommand names; that level is then finalized (coerce, validate) and the
  remaining tokens go through the same pipeline against the subcommand, whose
  result is nested under its name.
- Any ParseError aborts the parse; there is never a partial result.
"""
import functools
import operator
import re
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console

from . import render
from .arguments import Argument, ExclusiveGroup, Kind
from .coercion import coerce_all
from .faults import *
from .results import Outcome, ParseResult, Value
from .tokens import Cursor, match
from .utils import *
from .validation import validate


class SchemaType(type):
    """
    Metaclass of the schema levels (Schema, Subcommand).

    Same contract as ArgumentType: hyphenated __typename__ for error
    messages, mirror() properties for __introspectable__ (containers come
    back frozen), and __repr__/__rich_repr__ over __displayable__.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        properties = {field: mirror(field) for field in namespace.get("__introspectable__", ())}
        self = super().__new__(cls, name, bases, namespace | properties)
        self.__typename__ = re.sub(r"(?<!^)(?=[A-Z])", "-", name).lower()

        def fields(self):
            for field in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield field, getattr(self, field)

        def describe(self):
            listing = ", ".join(map(functools.partial(operator.mod, "%s=%r"), fields(self)))
            return f"{type(self).__typename__}({listing})"

        self.__rich_repr__ = rename(fields, "__rich_repr__")
        self.__repr__ = rename(describe, "__repr__")
        return self


def _sanitize_name(cls, name, /):
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} name must be a string")
    elif not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", name):
        raise ValueError(f"{cls.__typename__} name must be a word without leading dashes (e.g. 'build')")
    return name


def _sanitize_text(cls, field, text, /):
    if not isinstance(text, str | Unset | None):
        raise TypeError(f"{cls.__typename__} {field!r} must be a string")
    elif isinstance(text, str) and not (text := text.strip()):
        raise ValueError(f"{cls.__typename__} {field!r} cannot be empty")
    return coalesce(text)


class Level(metaclass=SchemaType):
    """
    Building API shared by Schema and Subcommand.

    Every call constructs new definitions owned by this level only; nothing is
    shared with parent or child levels.
    """

    def argument(
            self,
            name,
            /,
            short=Unset,
            long=Unset,
            descr=Unset,
            kind=Kind.STRING,
            required=False,
            default=None,
    ):
        """
        Declare an argument on this level and return it.

        Parameters mirror Argument(...): name, short, long, descr, kind,
        required, default. Name collisions are not rejected; lookups use
        declaration order, so the first declaration wins.
        """
        argument = Argument(name, short, long, descr, kind, required, default)
        self._arguments.append(argument)
        return argument

    def exclusive(self, *names, musthave=False):
        """
        Declare a mutual-exclusion group over arguments of this level.

        Raises
        - ValueError when a name references no argument declared on this level.
        """
        group = ExclusiveGroup(*names, musthave=musthave)
        declared = {argument.name for argument in self._arguments}
        for name in group.names:
            if name not in declared:
                raise ValueError(f"{type(self).__typename__} has no argument named {name!r} for an exclusive group")
        self._groups.append(group)
        return group

    def command(self, name, /, descr=Unset):
        """
        Declare a subcommand of this level and return it.
        """
        child = Subcommand(name, descr, parent=self)
        self._commands.append(child)
        return child

    def lookup(self, name, /):
        """
        First subcommand of this level called `name`, or None.
        """
        for child in self._commands:
            if child.name == name:
                return child
        return None


class Subcommand(Level):
    """
    Named, nested schema level selected by a leading token.

    Its required arguments and exclusive groups are only enforced when the
    subcommand is actually invoked.
    """
    __introspectable__ = (
        "name",
        "descr",
        "arguments",
        "groups",
        "commands",
        "parent",
    )
    __displayable__ = (
        "name",
        "descr",
        "arguments",
        "commands",
    )

    def __new__(cls, name, /, descr=Unset, *, parent=Unset):
        self = super().__new__(cls)
        self._name = _sanitize_name(cls, name)
        self._descr = _sanitize_text(cls, "descr", descr)
        self._parent = coalesce(parent)
        self._arguments = []
        self._groups = []
        self._commands = []
        return self

    @property
    def route(self):
        """
        Space-separated subcommand names from the root down to this level.
        """
        names = [self.name]
        level = self.parent
        while isinstance(level, Subcommand):
            names.append(level.name)
            level = level.parent
        return " ".join(reversed(names))


class Schema(Level):
    """
    Root container of a program's command-line interface.

    Metadata (all optional, used by the help/version renderers)
    - name, author, version, description.

    Presentation settings
    - console: rich Console used by the help/version renderers (stdout by default).
    - shell: when True, invoke() prints faults and exits instead of raising.
    - fancy: wrap fault output in a panel.
    - colorful: enable styles in rendered output.
    - emptyhelp: an empty token list renders help (True) or parses to
      defaults (False).
    - helper / versioner: callables receiving the schema, replacing the
      default renderers.
    """
    __introspectable__ = (
        "name",
        "author",
        "version",
        "description",
        "arguments",
        "groups",
        "commands",
        "console",
        "shell",
        "fancy",
        "colorful",
        "emptyhelp",
    )
    __displayable__ = (
        "name",
        "version",
        "arguments",
        "groups",
        "commands",
    )

    def __new__(
            cls,
            name=Unset,
            /,
            *,
            author=Unset,
            version=Unset,
            description=Unset,
            console=Unset,
            shell=False,
            fancy=False,
            colorful=True,
            emptyhelp=True,
            helper=Unset,
            versioner=Unset,
    ):
        self = super().__new__(cls)
        self._name = _sanitize_text(cls, "name", name)
        self._author = _sanitize_text(cls, "author", author)
        self._version = _sanitize_text(cls, "version", version)
        self._description = _sanitize_text(cls, "description", description)

        if not isinstance(console, Console | Unset):
            raise TypeError(f"{cls.__typename__} 'console' must be a rich console")
        self._console = Console() if console is Unset else console

        for field, hook in (("helper", helper), ("versioner", versioner)):
            if hook is not Unset and not callable(hook):
                raise TypeError(f"{cls.__typename__} {field!r} must be callable")
        self._helper = coalesce(helper, render.printhelp)
        self._versioner = coalesce(versioner, render.printversion)

        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._emptyhelp = bool(emptyhelp)

        self._arguments = []
        self._groups = []
        self._commands = []
        return self

    def help(self):
        """
        Render the help text through the help hook.
        """
        self._helper(self)

    def about(self):
        """
        Render the version text through the version hook.
        """
        self._versioner(self)

    def parse(self, tokens=Unset, /):
        """
        Parse a token list against this schema.

        Parameters
        - tokens:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; split via shlex.split.
          • Iterable[str]: pre-tokenized sequence, used verbatim.

        Returns
        - Outcome(result, exit, fault):
          • success: (ParseResult, False, None)
          • help/version requested: (None, True, None)
          • failure: (None, True, ParseError)
        """
        tokens = tokenize(tokens)

        if (not tokens and self.emptyhelp) or any(token in ("-h", "--help") for token in tokens):
            self.help()
            return Outcome(None, True, None)

        if "--version" in tokens:
            self.about()
            return Outcome(None, True, None)

        try:
            return Outcome(resolve(self, tokens), False, None)
        except ParseError as fault:
            return Outcome(None, True, fault.__replace__(schema=self))


def tokenize(prompt=Unset, /):
    """
    Normalize a prompt into a list of tokens.

    Raises
    - TypeError: when prompt is not Unset/str/Iterable[str], or when an
      iterable contains a non-string element.
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


def _order(arguments, values):
    # declaration order; the first declaration of a name decides its position
    return {argument.name: values[argument.name] for argument in arguments}


def resolve(level, tokens, /):
    """
    run the full pipeline for one level (and, recursively, its subcommand).

    phases
    - match: raw captures via tokens.match(), up to the first token naming a
      subcommand of `level`.
    - coerce: tagged values via coercion.coerce_all().
    - validate: required arguments, defaults and groups via validation.validate().
    - dispatch: when a subcommand name stopped the match, the rest of the
      tokens are resolved against that subcommand and nested under its name.

    parameters
    - level: Schema | Subcommand
    - tokens: Iterable[str] | Cursor

    returns
    - ParseResult

    raises
    - ParseError subclasses; the first one aborts the pipeline.
    """
    cursor = tokens if isinstance(tokens, Cursor) else Cursor(tokens)
    scope = level.route if isinstance(level, Subcommand) else None
    names = frozenset(child.name for child in level.commands)

    captures = match(cursor, level.arguments, scope, names)
    values = coerce_all(captures)
    supplied = validate(level.arguments, level.groups, values, scope)
    values = _order(level.arguments, values)
    if cursor.exhausted:
        return ParseResult(values, supplied=supplied)

    child = level.lookup(cursor.peek())
    cursor.advance()
    values[child.name] = Value(None, resolve(child, cursor.fork()))
    return ParseResult(values, supplied=supplied, command=child.name)


def invoke(schema, prompt=Unset, /):
    """
    Convenience runner for host programs.

    Behavior
    - Parses `prompt` (see Schema.parse for accepted forms).
    - Help/version requests exit the process with status 0.
    - Faults go through faults.trigger() with the schema's presentation
      settings: raised when shell is False, printed to stderr with exit
      status 1 when shell is True.

    Returns
    - ParseResult on success.
    """
    if not isinstance(schema, Schema):
        raise TypeError("invoke() first argument must be a schema")

    result, exit, fault = schema.parse(prompt)
    if fault is not None:
        trigger(
            fault,
            schema=schema,
            shell=schema.shell,
            fancy=schema.fancy,
            colorful=schema.colorful,
        )
    if exit:
        sys.exit(0)
    return result


__all__ = (
    "Schema",
    "Subcommand",
    "resolve",
    "tokenize",
    "invoke",
)

# Internal base and metaclass are not part of the public API.
del SchemaType
