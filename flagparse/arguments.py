r"""
Flagparse argument definitions.

Overview
- Kind: closed set of value kinds an argument can carry
  (BOOL, INT, STRING, STRINGLIST), with their textual tags and zero values.
- Argument: one option definition (name, short/long aliases, description,
  kind, required flag, default). Read-only once built.
- ExclusiveGroup: ordered set of argument names of which at most one (or,
  with musthave, exactly one) may be supplied together.

Representation
- Every field named in __introspectable__ is a read-only property, and the
  same fields feed repr() and rich pretty printing (see ArgumentType).

Validation highlights (construction time, never at parse time)
- name must be a non-empty string without surrounding whitespace.
- short is a single character that is neither whitespace nor '-'.
- long must match r"[^\W\d_](-?[^\W_]+)*" (no leading dashes, no underscores).
- at least one of short/long is required.
- kind tags are resolved through Kind.resolve(); unknown tags raise UnknownKindError.
- required arguments cannot carry a default; defaults must match the kind.

Quick example:
    >>> from flagparse.arguments import Argument, Kind
    >>> verbose = Argument("verbose", "v", "verbose", "Increase verbosity", Kind.BOOL)
    >>> retry = Argument("retry-count", "r", "retry", "Number of retries", "int", default=3)
    >>> verbose.flags
    ('-v', '--verbose')
"""
import functools
import operator
import re
from collections.abc import Iterable
from enum import Enum

from .faults import UnknownKindError, FaultCode
from .utils import *


class Kind(Enum):
    """
    Closed set of value kinds.

    Each member's value is the textual tag used by hosts that declare kinds as
    strings ("bool", "int", "string", "[]string").
    """
    BOOL = "bool"
    INT = "int"
    STRING = "string"
    STRINGLIST = "[]string"

    @classmethod
    def resolve(cls, tag, /, name=Unset):
        """
        Resolve a Kind member or a textual tag into a Kind.

        Parameters
        - tag: Kind | str
          Member, tag text or one of the aliases "str", "list", "stringlist".
          Text is matched case-insensitively after trimming.
        - name: Unset | str
          Name of the argument being built; only used in the error message.

        Raises
        - UnknownKindError: when the tag names no kind.
        """
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, str):
            key = tag.strip().lower()
            try:
                return cls(_aliases.get(key, key))
            except ValueError:
                pass
        subject = "" if name is Unset else " for argument %r" % name
        raise UnknownKindError(
            "unknown data type %r%s" % (tag, subject),
            code=FaultCode.UNKNOWN_KIND,
            kind=tag,
            name=coalesce(name),
            hint="use one of %s" % ", ".join(repr(member.value) for member in cls),
        )

    @property
    def zero(self):
        """
        Fresh zero value of the kind: False, 0, "" or [].
        """
        match self:
            case Kind.BOOL:
                return False
            case Kind.INT:
                return 0
            case Kind.STRING:
                return ""
            case Kind.STRINGLIST:
                return []

    def __repr__(self):
        return f"{type(self).__name__}.{self.name}"


_aliases = {
    "str": "string",
    "list": "[]string",
    "stringlist": "[]string",
}


class ArgumentType(type):
    """
    Metaclass of the definition classes (Argument, ExclusiveGroup).

    - __typename__: hyphenated lowercase class name ("exclusive-group"), used
      as the subject of construction errors.
    - every name in __introspectable__ becomes a mirror() property over the
      matching "_<name>" attribute.
    - __repr__ / __rich_repr__ list the __displayable__ fields (all of
      __introspectable__ when unset), e.g. argument(name='verbose', short='v', ...).
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


def _sanitize_text(cls, metadata, field, /):
    # optional free text: Unset/None → None, otherwise a non-empty trimmed string
    if not isinstance(text := metadata[field], str | Unset | None):
        raise TypeError(f"{cls.__typename__} {field!r} must be a string")
    elif isinstance(text, str) and not (text := text.strip()):
        raise ValueError(f"{cls.__typename__} {field!r} cannot be empty")
    metadata[field] = coalesce(text)


def _sanitize_aliases(cls, metadata, /):
    r"""
    Internal: validate the identity fields of an argument.

    Responsibilities
    - name: required, non-empty, no surrounding whitespace (it is a result key).
    - short: Unset/None or exactly one character, neither whitespace nor '-'.
    - long: Unset/None or a word matching r"[^\W\d_](-?[^\W_]+)*".
    - at least one alias must remain.

    Side effects
    - Mutates the provided metadata dict in place (Unset → None).
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name or name != name.strip():
        raise ValueError(f"{cls.__typename__} 'name' must be a non-empty string without surrounding spaces")

    if not isinstance(short := metadata["short"], str | Unset | None):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    elif isinstance(short, str) and not re.fullmatch(r"[^\s-]", short):
        raise ValueError(f"{cls.__typename__} 'short' must be a single character other than '-'")
    metadata["short"] = coalesce(short)

    if not isinstance(long := metadata["long"], str | Unset | None):
        raise TypeError(f"{cls.__typename__} 'long' must be a string")
    elif isinstance(long, str) and not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", long):
        raise ValueError(f"{cls.__typename__} 'long' must be a word without leading dashes (e.g. 'dry-run')")
    metadata["long"] = coalesce(long)

    if metadata["short"] is None and metadata["long"] is None:
        raise TypeError(f"{cls.__typename__} {name!r} must specify a short or a long alias")


def _sanitize_default(cls, metadata, /):
    """
    Internal: resolve the kind and check the default against it.

    Rules
    - kind goes through Kind.resolve() (UnknownKindError for unknown tags).
    - required and default are mutually contradictory.
    - BOOL defaults are bools, INT defaults are ints (bools rejected), STRING
      defaults are strings, STRINGLIST defaults are iterables of strings and
      are stored as tuples.
    """
    kind = metadata["kind"] = Kind.resolve(metadata["kind"], metadata["name"])
    metadata["required"] = bool(metadata["required"])

    if (default := coalesce(metadata["default"])) is None:
        metadata["default"] = None
        return

    if metadata["required"]:
        raise ValueError(f"required {cls.__typename__} {metadata['name']!r} cannot have a default")

    match kind:
        case Kind.BOOL if isinstance(default, bool):
            pass
        case Kind.INT if isinstance(default, int) and not isinstance(default, bool):
            pass
        case Kind.STRING if isinstance(default, str):
            pass
        case Kind.STRINGLIST if isinstance(default, Iterable) and not isinstance(default, str):
            default = tuple(default)
            if not all(isinstance(item, str) for item in default):
                raise TypeError(f"{cls.__typename__} {metadata['name']!r} default must contain only strings")
        case _:
            raise TypeError(f"{cls.__typename__} {metadata['name']!r} default does not match kind {kind.value!r}")

    metadata["default"] = default


class Argument(metaclass=ArgumentType):
    """
    One option definition.

    Highlights
    - Matched on the command line as "-<short>" or "--<long>".
    - BOOL arguments are presence-only; stacked short forms ("-abc") only
      combine BOOL arguments.
    - INT/STRING consume one following value; STRINGLIST consumes every
      following value up to the next token starting with '-'.
    - Absent optional arguments receive their default, or the kind's zero value.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
    """
    __introspectable__ = (
        "name",
        "short",
        "long",
        "descr",
        "kind",
        "required",
        "default",
    )

    def __new__(
            cls,
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
        Construct an Argument with the provided metadata.

        Parameters
        - name: str
          Key of the value in the parse result.
        - short: Unset | str
          Single-character alias, matched as "-x".
        - long: Unset | str
          Word alias, matched as "--word".
        - descr: Unset | str
          Help text shown next to the flags; None when omitted.
        - kind: Kind | str
          Kind of the value (see Kind.resolve for accepted tags).
        - required: bool
          Whether the argument must be supplied.
        - default: Any
          Value installed when the optional argument is absent; None means
          “use the kind's zero value”.
        """
        metadata = {
            "name": name,
            "short": short,
            "long": long,
            "descr": descr,
            "kind": kind,
            "required": required,
            "default": default,
        }
        _sanitize_aliases(cls, metadata)
        _sanitize_text(cls, metadata, "descr")
        _sanitize_default(cls, metadata)

        self = super().__new__(cls)
        for field, value in metadata.items():
            setattr(self, "_" + field, value)
        return self

    @property
    def flags(self):
        """
        Literal spellings that select this argument, short form first.
        """
        flags = ()
        if self.short is not None:
            flags += ("-" + self.short,)
        if self.long is not None:
            flags += ("--" + self.long,)
        return flags

    @property
    def zero(self):
        """
        Fresh zero value of the argument's kind.
        """
        return self.kind.zero

    @property
    def fallback(self):
        """
        Value installed when this optional argument is absent (fresh copy).
        """
        if self.default is None:
            return self.zero
        if self.kind is Kind.STRINGLIST:
            return list(self.default)
        return self.default


class ExclusiveGroup(metaclass=ArgumentType):
    """
    Mutual-exclusion constraint over arguments of one schema level.

    - names: ordered, duplicate-free argument names.
    - musthave: when True, exactly one of the names must be supplied.

    Membership is checked by the schema when the group is attached; the group
    is evaluated only against arguments actually supplied on the command line.
    """
    __introspectable__ = (
        "names",
        "musthave",
    )

    def __new__(cls, *names, musthave=False):
        if not names:
            raise TypeError(f"{cls.__typename__} needs at least one argument name")
        if not all(isinstance(name, str) for name in names):
            raise TypeError(f"{cls.__typename__} argument names must be strings")
        if not all(names):
            raise ValueError(f"{cls.__typename__} argument names cannot be empty")
        if len(set(names)) != len(names):
            raise ValueError(f"{cls.__typename__} {names!r} repeats an argument name")

        self = super().__new__(cls)
        self._names = names
        self._musthave = bool(musthave)
        return self

    def __contains__(self, name):
        return name in self._names

    def __iter__(self):
        return iter(self._names)

    def __len__(self):
        return len(self._names)


__all__ = (
    "Kind",
    "Argument",
    "ExclusiveGroup",
)
