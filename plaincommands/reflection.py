"""
plaincommands reflection layer: read-only views over methods and attributes.

Overview
- ParameterDefinition: one reflected parameter (name, kind, resolved type,
  default, position, docstring description).
- MethodDefinition: one reflected function or method (name, parameters,
  short/long description from the docstring, attached annotations) and the
  means to call it with a list of resolved arguments.
- PropertyDefinition: one class attribute declared as
  ``name: Annotated[T, option(...)] = default``.

Docstrings
- The summary paragraph (up to the first blank line) is the short description;
  the rest is the long description. reST ``:param name: text`` fields are taken
  out of the long description and become parameter descriptions.

Types
- Annotations are resolved with typing.get_type_hints (so string annotations
  from ``from __future__ import annotations`` work). Optional[T] / T | None and
  Annotated[T, ...] are unwrapped to T. An unresolvable forward reference only
  leaves its own annotation as a raw string.
"""
import builtins
import inspect
import re
import sys
import types
import typing
from inspect import Parameter

from .annotations import Option, read_annotations
from .utils import *


def _unwrap(hint, /):
    """
    Reduce Annotated[T, ...], Optional[T] and T | None to T (recursively).
    """
    origin = typing.get_origin(hint)
    if origin is typing.Annotated:
        return _unwrap(typing.get_args(hint)[0])
    if origin is typing.Union or origin is types.UnionType:
        members = [member for member in typing.get_args(hint) if member is not type(None)]
        if len(members) == 1:
            return _unwrap(members[0])
    return hint


def _evaluate(hint, globals, locals, /):
    """
    Evaluate one string annotation; an unresolvable one is kept as the raw string.
    """
    if not isinstance(hint, str):
        return hint
    try:
        return eval(hint, globals, locals)
    except (NameError, AttributeError):
        return hint


def _hints(object, /):
    """
    Resolved type hints of a function or class (extras kept).

    When a forward reference cannot be resolved, the annotations are evaluated
    one by one: only the unresolvable ones stay raw strings.
    """
    try:
        return typing.get_type_hints(object, include_extras=True)
    except (NameError, AttributeError):
        pass

    if isinstance(object, builtins.type):
        scopes = [
            (klass, getattr(sys.modules.get(klass.__module__), "__dict__", {}), dict(vars(klass)))
            for klass in reversed(object.__mro__)
        ]
    else:
        scopes = [(object, getattr(inspect.unwrap(object), "__globals__", {}), None)]

    hints = {}
    for owner, globals, locals in scopes:
        for name, hint in inspect.get_annotations(owner).items():
            hints[name] = _evaluate(hint, globals, locals)
    return hints


def _parse_docstring(docstring, /):
    """
    Split a cleaned docstring into (short, long, {parameter: description}).
    """
    if not docstring:
        return "", "", {}

    fields = {}
    lines = []
    current = None
    for line in docstring.splitlines():
        if match := re.match(r":param\s+(?:[^:]+\s+)?(\w+):\s*(.*)$", line):
            current = match[1]
            fields[current] = match[2].strip()
        elif current and line[:1].isspace() and line.strip():
            # continuation of a multi-line :param: field
            fields[current] = (fields[current] + " " + line.strip()).strip()
        else:
            current = None
            lines.append(line)

    short, _, long = "\n".join(lines).strip().partition("\n\n")
    return short.strip(), long.strip(), fields


class ParameterDefinition(metaclass=IntrospectableType):
    """
    Reflected parameter.

    Properties
    - name: parameter name.
    - kind: inspect.Parameter kind.
    - type: resolved, unwrapped type (None when unannotated).
    - default: declared default, or Unset when there is none.
    - position: index among the exposed parameters (self excluded).
    - descr: description from the owner's docstring (None when absent).
    """

    __introspectable__ = (
        "name",
        "kind",
        "type",
        "default",
        "position",
        "descr",
    )
    __displayable__ = (
        "name",
        "type",
        "default",
    )

    def __init__(self, parameter, /, type=None, position=0, descr=None):
        if not isinstance(parameter, Parameter):
            raise TypeError(f"{builtins.type(self).__typename__} argument must be an inspect.Parameter")
        self._name = parameter.name
        self._kind = parameter.kind
        self._type = _unwrap(type) if type is not None else None
        self._default = parameter.default if parameter.default is not Parameter.empty else Unset
        self._position = position
        self._descr = descr

    @property
    def required(self):
        """
        True when the caller must supply a value (no default, not variadic).
        """
        return self._default is Unset and self._kind is not Parameter.VAR_POSITIONAL

    @property
    def optional(self):
        return not self.required

    @property
    def variadic(self):
        return self._kind in (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)


class MethodDefinition(metaclass=IntrospectableType):
    """
    Reflected function or method.

    Parameters
    - function: the plain function (as found in a class body, or free-standing).
    - method: when True, the first parameter (the instance) is not exposed and
      invoke_for() passes the object in its place.
    """

    __introspectable__ = (
        "name",
        "qualname",
        "parameters",
        "short_description",
        "long_description",
    )
    __displayable__ = (
        "qualname",
        "parameters",
    )

    def __init__(self, function, /, method=True):
        if not inspect.isfunction(function):
            raise TypeError(f"{type(self).__typename__} argument must be a function")

        self._function = function
        self._method = bool(method)
        self._name = function.__name__
        self._qualname = function.__qualname__

        short, long, fields = _parse_docstring(inspect.getdoc(function))
        self._short_description = short
        self._long_description = long

        hints = _hints(function)
        parameters = list(inspect.signature(function).parameters.values())
        if self._method:
            if not parameters or parameters[0].kind not in (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD):
                raise TypeError(f"{type(self).__typename__} method {self._qualname}() must accept the instance first")
            del parameters[0]

        self._parameters = tuple(
            ParameterDefinition(
                parameter,
                type=hints.get(parameter.name),
                position=position,
                descr=fields.get(parameter.name),
            )
            for position, parameter in enumerate(parameters)
        )

    @property
    def function(self):
        return self._function

    def read_annotation(self, cls, /):
        """
        Return the annotation of the given type attached to the function, or Unset.
        """
        return read_annotations(self._function).get(cls, Unset)

    def invoke_for(self, object, arguments, /):
        """
        Call the function with one resolved argument per exposed parameter.

        Keyword-only parameters are passed by keyword, *args values are
        expanded, everything else is passed positionally in declaration order.
        """
        arguments = list(arguments)
        if len(arguments) != len(self._parameters):
            raise TypeError(
                f"{self._qualname}() expects {len(self._parameters)} resolved arguments, got {len(arguments)}"
            )

        args = [object] if self._method else []
        kwargs = {}
        for parameter, argument in zip(self._parameters, arguments):
            match parameter.kind:
                case Parameter.VAR_POSITIONAL:
                    args.extend(argument)
                case Parameter.KEYWORD_ONLY:
                    kwargs[parameter.name] = argument
                case Parameter.VAR_KEYWORD:
                    kwargs.update(argument)
                case _:
                    args.append(argument)
        return self._function(*args, **kwargs)


class PropertyDefinition(metaclass=IntrospectableType):
    """
    Reflected class attribute carrying Option metadata through Annotated.
    """

    __introspectable__ = (
        "name",
        "type",
        "default",
        "annotation",
    )

    def __init__(self, name, hint, default=Unset, /):
        annotation = next(
            (item for item in getattr(hint, "__metadata__", ()) if isinstance(item, Option)),
            Unset,
        )
        if annotation is Unset:
            raise TypeError(f"{type(self).__typename__} {name!r} is not annotated with an option")
        self._name = name
        self._type = _unwrap(hint)
        self._default = default
        self._annotation = annotation

    @classmethod
    def collect(cls, owner, /):
        """
        Yield a PropertyDefinition for every Annotated option attribute of a class,
        base classes first, in declaration order.
        """
        hints = _hints(owner)
        seen = set()
        for klass in reversed(owner.__mro__):
            for name in inspect.get_annotations(klass):
                if name in seen or name not in hints:
                    continue
                if not any(isinstance(item, Option) for item in getattr(hints[name], "__metadata__", ())):
                    continue
                seen.add(name)
                yield cls(name, hints[name], getattr(owner, name, Unset))


__all__ = (
    "ParameterDefinition",
    "MethodDefinition",
    "PropertyDefinition",
)
