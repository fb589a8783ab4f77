"""
plaincommands declarative metadata.

Overview
- Command: metadata attached to a method by the @command decorator. Its mere
  presence marks the method as a command; the fields override what reflection
  would derive.
  • value: Unset | None | str, the command name (derived from the method name when empty;
    stripped, and never containing whitespace).
  • shortcuts: aliases the command is also invocable by.
  • hidden: omit the command from the command list.
  • deprecated: warn when the command is invoked.

- Option: metadata for a class attribute of a command set, used through
  typing.Annotated. Such attributes become global options shared by every
  command of the set.
  • value: Unset | str, the option name (derived from the attribute name when Unset).
  • shortcuts: single-character short names ("v" → "-v").
  • descr: help text.

Decorators / factories
- @command / @command("name", shortcuts=["n"]) → marks a method.
- option(...) → builds an Option for Annotated[T, option(...)].

Example
    class Users(CommandSet, namespace="users"):
        verbose: Annotated[bool, option(shortcuts=["v"])] = False

        @command(shortcuts=["cu"])
        def createUser(self, name, admin: bool = False):
            ...
"""
import re
from collections.abc import Iterable

from .utils import *

__attribute__ = "__plaincommands__"
"""
Name of the function attribute holding the metadata mapping {annotation type: instance}.
"""


def _sanitize_shortcuts(cls, shortcuts, pattern, /):
    """
    Validate an iterable of shortcut names and stabilize it into a tuple.

    Raises
    - TypeError: when the value is a plain string, not iterable, or holds non-strings.
    - ValueError: when a shortcut does not match the pattern or is duplicated.
    """
    if isinstance(shortcuts, str) or not isinstance(shortcuts, Iterable):
        raise TypeError(f"{cls.__typename__} 'shortcuts' must be an iterable of strings")
    seen = []
    for shortcut in shortcuts:
        if not isinstance(shortcut, str):
            raise TypeError(f"{cls.__typename__} 'shortcuts' must be an iterable of strings")
        elif not re.fullmatch(pattern, shortcut := shortcut.strip()):
            raise ValueError(f"{cls.__typename__} shortcut {shortcut!r} is not valid")
        elif shortcut in seen:
            raise ValueError(f"{cls.__typename__} 'shortcuts' cannot contain duplicates")
        seen.append(shortcut)
    return tuple(seen)


def _sanitize_value(cls, value, /):
    if not isinstance(value, str | None | Unset):
        raise TypeError(f"{cls.__typename__} 'value' must be a string")
    if isinstance(value, str):
        if re.search(r"\s", value := value.strip()):
            raise ValueError(f"{cls.__typename__} 'value' cannot contain whitespace")
        value = value or None
    return coalesce(value)


class Command(metaclass=IntrospectableType):
    """
    Command metadata (the eligibility marker of a method).

    An empty value (Unset, None or "") means “derive the name from the method”.
    A non-empty value is used as the command name once surrounding whitespace
    is stripped; whitespace inside it is rejected (ValueError), since a
    command line is split on whitespace before the name is looked up.
    """

    __introspectable__ = (
        "value",
        "shortcuts",
        "hidden",
        "deprecated",
    )

    def __init__(self, value=Unset, /, shortcuts=(), *, hidden=False, deprecated=False):
        self._value = _sanitize_value(type(self), value)
        self._shortcuts = _sanitize_shortcuts(type(self), shortcuts, r"[^\W\d][\w:.-]*")
        self._hidden = bool(hidden)
        self._deprecated = bool(deprecated)


class Option(metaclass=IntrospectableType):
    """
    Global option metadata (for Annotated class attributes of a command set).
    """

    __introspectable__ = (
        "value",
        "shortcuts",
        "descr",
    )

    def __init__(self, value=Unset, /, shortcuts=(), *, descr=Unset):
        self._value = _sanitize_value(type(self), value)
        self._shortcuts = _sanitize_shortcuts(type(self), shortcuts, r"[^\W\d_]")
        if not isinstance(descr, str | Unset):
            raise TypeError(f"{type(self).__typename__} 'descr' must be a string")
        elif isinstance(descr, str) and not (descr := descr.strip()):
            raise ValueError(f"{type(self).__typename__} 'descr' cannot be empty")
        self._descr = coalesce(descr)


def annotate(function, annotation, /):
    """
    Attach an annotation instance to a function, keyed by its type.

    A second annotation of the same type is rejected.
    """
    if not callable(function):
        raise TypeError("annotate() first argument must be callable")
    metadata = function.__dict__.setdefault(__attribute__, {})
    if type(annotation) in metadata:
        raise TypeError(f"{function.__qualname__}() is already annotated with {type(annotation).__typename__!r}")
    metadata[type(annotation)] = annotation
    return function


def read_annotations(function, /):
    """
    Return the {annotation type: instance} mapping of a function (empty when none).
    """
    return dict(getattr(function, __attribute__, {}))


def command(value=Unset, /, shortcuts=(), *, hidden=False, deprecated=False):
    """
    Mark a method as a command, optionally overriding its name and aliases.

    Forms
    - @command                         → name derived from the method name
    - @command()                       → same
    - @command("make")                 → explicit name
    - @command(shortcuts=["cu"])       → derived name, one alias

    Returns
    - the function itself (unchanged apart from the attached metadata), or a
      decorator doing so.
    """
    if callable(value):
        return annotate(value, Command())

    metadata = Command(value, shortcuts, hidden=hidden, deprecated=deprecated)

    @rename("command")
    def wrapper(function, /):
        if not callable(function):
            raise TypeError("@command() must be applied to a callable")
        return annotate(function, metadata)

    return wrapper


def option(value=Unset, /, shortcuts=(), *, descr=Unset):
    """
    Build Option metadata for a global option.

    Usage
        verbose: Annotated[bool, option(shortcuts=["v"], descr="talk more")] = False
    """
    return Option(value, shortcuts, descr=descr)


__all__ = (
    "Command",
    "Option",
    "command",
    "option",
    "annotate",
    "read_annotations",
)
