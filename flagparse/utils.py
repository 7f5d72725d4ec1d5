"""
Flagparse helpers shared by the definitions, the pipeline and the renderers.

Contents
- Unset / UnsetType: "argument not passed" marker, distinct from None (which
  is a meaningful value for several keyword parameters, e.g. default=None).
- coalesce(): swap Unset for a fallback, leaving every other value alone.
- rename(): give generated callables a readable __name__/__qualname__.
- mirror(): read-only property over a private "_<name>" attribute; containers
  are handed out frozen.
- pluralize() / ordinal(): wording helpers for fault messages.

    >>> coalesce(Unset, "a.yaml")
    'a.yaml'
    >>> ordinal(3), ordinal(22)
    ('third', '22nd')
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker.

    There is exactly one instance per process; calling UnsetType() again
    returns it. The marker is falsy, prints as "Unset", can be combined with
    types in isinstance unions (str | Unset) and cannot be subclassed.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("UnsetType is final and cannot be subclassed")


def coalesce(object, default=None, /):
    """
    `default` when `object` is Unset, `object` otherwise (None, 0 and "" included).
    """
    return default if object is Unset else object


def _retitle(callable, name):
    if not builtins.callable(callable):
        raise TypeError("rename() target must be callable")
    if not isinstance(name, str):
        raise TypeError("rename() name must be a string")
    try:
        callable.__name__ = callable.__qualname__ = name
    except (AttributeError, TypeError):
        raise TypeError("rename() target does not accept a new name") from None
    return callable


def rename(*parameters):
    """
    rename(callable, name) retitles `callable` and returns it;
    rename(name) returns a decorator doing the same.
    """
    if len(parameters) == 2:
        return _retitle(*parameters)
    if len(parameters) == 1:
        name, = parameters
        if not isinstance(name, str):
            raise TypeError("rename() name must be a string")
        return _retitle(functools.partial(_retitle, name=name), "rename")
    raise TypeError("rename() takes 1 or 2 arguments (%d given)" % len(parameters))


def _freeze(object):
    # read-only snapshot: sequences → tuple, mappings → proxy, sets → frozenset
    if isinstance(object, str):
        return object
    if isinstance(object, Sequence):
        return tuple(object)
    if isinstance(object, Mapping):
        return MappingProxyType(dict(object))
    if isinstance(object, Set):
        return frozenset(object)
    return coalesce(object)


def mirror(name, /):
    """
    Property reading `self._<name>` without a setter.

    Lists, dicts and sets come back as tuple, MappingProxyType and frozenset
    copies; Unset comes back as None.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() name must be a string")

    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(rename(getter, name))


@functools.cache
def pluralize(word, count, /):
    """
    `word` for a count of one, its regular English plural otherwise.

    >>> pluralize("argument", 2), pluralize("entry", 0), pluralize("match", 1)
    ('arguments', 'entries', 'match')
    """
    if not isinstance(word, str):
        raise TypeError("pluralize() word must be a string")
    if count == 1 or not word:
        return word
    if word.endswith(("s", "sh", "ch", "x", "z")):
        return word + "es"
    if len(word) > 1 and word[-1] == "y" and word[-2] not in "aeiou":
        return word[:-1] + "ies"
    return word + "s"


_words = (
    "first",
    "second",
    "third",
    "fourth",
    "fifth",
    "sixth",
    "seventh",
    "eighth",
    "ninth",
    "tenth",
)


@functools.cache
def ordinal(number, /):
    """
    Position label used in messages: words up to ten, then 11th, 21st, 102nd...
    """
    if 1 <= number <= len(_words):
        return _words[number - 1]
    if number % 100 in (11, 12, 13):
        return "%dth" % number
    return "%d%s" % (number, {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th"))


Unset = UnsetType()


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
    "pluralize",
    "ordinal",
)
