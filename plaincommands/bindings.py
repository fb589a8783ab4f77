"""
plaincommands parameter bindings.

A binding maps one reflected parameter to one value source. Exactly one
binding is chosen per parameter, by first match over a fixed strategy chain:

    1. RuntimeValue        the parameter's type is a runtime marker type
                           (Context, rich Console); filled by the engine itself
                           and never exposed on the command line.
    2. BooleanFlag         the declared type is bool; becomes a presence-only
                           --flag whose absence means the default (or False).
    3. PositionalArgument  everything else except **kwargs; a positional value
                           (a --name VALUE option for keyword-only parameters,
                           a variadic positional for *args). Required iff the
                           parameter has no default.

resolve(parameter) walks the chain and returns the first binding, or Unset
when no strategy accepts the parameter (the binder turns that into a
ParameterBindingError).

GlobalOption is the class-attribute counterpart: an Annotated option of a
command set, added to every command of the set and applied to the set
instance before the command runs.

Every binding knows how to
- configure(parser): declare itself on an argparse parser,
- resolve(context): produce its value from an invocation Context.
"""
import argparse
import builtins
import enum
import typing
from inspect import Parameter

from rich.console import Console

from .context import Context
from .utils import *

RUNTIME_TYPES = (Context, Console)
"""
Types whose parameters are provided by the engine (input context, output handle).
"""


def _is_boolean(type, /):
    return type is bool or type == "bool"


_BOOLEANS = {
    "true": True, "yes": True, "on": True, "1": True,
    "false": False, "no": False, "off": False, "0": False,
}


@rename("bool")
def _boolean(text, /):
    try:
        return _BOOLEANS[text.strip().lower()]
    except KeyError:
        raise argparse.ArgumentTypeError(f"invalid boolean value: {text!r} (use true/false, yes/no, on/off, 1/0)") from None


def _typed(type, /):
    """
    argparse keywords (type/choices/metavar) converting raw strings into the given type.
    """
    if _is_boolean(type):
        # bool("false") is True; parse the words instead
        return {"type": _boolean}

    if isinstance(type, builtins.type) and issubclass(type, enum.Enum):
        members = list(type)

        def convert(text):
            for member in members:
                if text in (str(member.value), member.name):
                    return member
            raise argparse.ArgumentTypeError(f"invalid choice: {text!r}")

        rename(convert, type.__name__)
        return {"type": convert, "metavar": "{%s}" % ",".join(str(member.value) for member in members)}

    if typing.get_origin(type) is typing.Literal:
        choices = typing.get_args(type)
        kinds = {builtins.type(choice) for choice in choices}
        return {"choices": choices} | ({"type": kinds.pop()} if len(kinds) == 1 and str not in kinds else {})

    if isinstance(type, builtins.type) and type is not str and callable(type):
        return {"type": type}
    return {}


class Binding(metaclass=IntrospectableType):
    """
    Base of the three parameter binding variants.

    Properties
    - parameter: the ParameterDefinition being bound.
    - name: parameter name (also the argparse destination).
    - type: declared type (None when unannotated).
    - default: value used when the command line does not provide one.
    - required: whether the command line must provide a value.
    """

    __introspectable__ = (
        "parameter",
        "name",
        "type",
        "default",
        "required",
    )
    __displayable__ = (
        "name",
        "type",
        "default",
        "required",
    )

    def __init__(self, parameter, /):
        self._parameter = parameter
        self._name = parameter.name
        self._type = parameter.type
        self._default = coalesce(parameter.default)
        self._required = parameter.required

    @property
    def dest(self):
        return self._name

    @property
    def option(self):
        """
        The command-line option string (--dashed-name).
        """
        return "--" + dasherize(self._name)

    def configure(self, parser, /):
        raise NotImplementedError

    def resolve(self, context, /):
        return context.value(self.dest, self._default)


class RuntimeValue(Binding):
    """
    Parameter filled by the engine itself (Context or rich Console).
    """

    def __init__(self, parameter, /):
        super().__init__(parameter)
        self._required = False

    def configure(self, parser, /):
        # not part of the command-line surface
        return None

    def resolve(self, context, /):
        if isinstance(self._type, builtins.type) and issubclass(self._type, Console):
            return context.console
        return context


class BooleanFlag(Binding):
    """
    Presence-only --flag for a bool parameter.
    """

    def __init__(self, parameter, /):
        super().__init__(parameter)
        self._default = bool(coalesce(parameter.default, False))
        self._required = False

    def configure(self, parser, /):
        parser.add_argument(
            self.option,
            dest=self.dest,
            default=self._default,
            action=argparse.BooleanOptionalAction if self._default else "store_true",
            help=self._parameter.descr,
        )

    def resolve(self, context, /):
        return bool(context.value(self.dest, self._default))


class PositionalArgument(Binding):
    """
    Value-bearing argument: positional, keyword-only (--name VALUE) or variadic (*args).
    """

    def __init__(self, parameter, /):
        super().__init__(parameter)
        if parameter.kind is Parameter.VAR_POSITIONAL:
            self._default = ()

    @property
    def named(self):
        return self._parameter.kind is Parameter.KEYWORD_ONLY

    @property
    def variadic(self):
        return self._parameter.kind is Parameter.VAR_POSITIONAL

    def configure(self, parser, /):
        options = _typed(self._type) | {"help": self._parameter.descr}
        if self.named:
            parser.add_argument(
                self.option,
                dest=self.dest,
                required=self._required,
                default=self._default,
                **{"metavar": self._name.upper()} | options,
            )
        elif self.variadic:
            parser.add_argument(self.dest, nargs="*", default=[], **options)
        elif self._required:
            parser.add_argument(self.dest, **options)
        else:
            parser.add_argument(self.dest, nargs="?", default=self._default, **options)

    def resolve(self, context, /):
        if self.variadic:
            return tuple(context.value(self.dest, ()) or ())
        return super().resolve(context)


class GlobalOption(metaclass=IntrospectableType):
    """
    Option shared by every command of a command set (an Annotated class attribute).

    Resolved before the command's own parameters; the value is stored on the
    command-set instance under the attribute name.
    """

    __introspectable__ = (
        "property",
        "name",
        "type",
        "default",
    )
    __displayable__ = (
        "name",
        "type",
        "default",
    )

    def __init__(self, property, /):
        self._property = property
        self._name = property.name
        self._type = property.type
        default = property.default
        self._default = bool(coalesce(default, False)) if _is_boolean(self._type) else coalesce(default)

    @property
    def dest(self):
        return "option:" + self._name

    @property
    def flags(self):
        """
        Option strings: the long name first, then the single-dash shortcuts.
        """
        annotation = self._property.annotation
        long = "--" + (annotation.value or dasherize(self._name)).lstrip("-")
        return (long, *("-" + shortcut for shortcut in annotation.shortcuts))

    def configure(self, parser, /):
        options = {"dest": self.dest, "default": self._default, "help": self._property.annotation.descr}
        if _is_boolean(self._type):
            options["action"] = argparse.BooleanOptionalAction if self._default else "store_true"
        else:
            options |= {"metavar": self._name.upper()} | _typed(self._type)
        parser.add_argument(*self.flags, **options)

    def resolve(self, context, /):
        return context.value(self.dest, self._default)

    def apply(self, context, /):
        """
        Store the resolved value on the command-set instance of the context.
        """
        setattr(context.instance, self._name, self.resolve(context))


def _accepts_runtime(parameter, /):
    return isinstance(parameter.type, builtins.type) and issubclass(parameter.type, RUNTIME_TYPES)


def _accepts_boolean(parameter, /):
    return _is_boolean(parameter.type) and not parameter.variadic


def _accepts_argument(parameter, /):
    return parameter.kind is not Parameter.VAR_KEYWORD


STRATEGIES = (
    (_accepts_runtime, RuntimeValue),
    (_accepts_boolean, BooleanFlag),
    (_accepts_argument, PositionalArgument),
)
"""
Binding strategies in precedence order: (predicate, constructor) pairs.
"""


def resolve(parameter, /, strategies=STRATEGIES):
    """
    Bind a parameter with the first accepting strategy; Unset when none accepts.
    """
    for accepts, construct in strategies:
        if accepts(parameter):
            return construct(parameter)
    return Unset


__all__ = (
    "RUNTIME_TYPES",
    "STRATEGIES",
    "Binding",
    "RuntimeValue",
    "BooleanFlag",
    "PositionalArgument",
    "GlobalOption",
    "resolve",
)
