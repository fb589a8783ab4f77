"""
plaincommands command layer: method-to-command mapping.

What this module provides
- CommandDescriptor: immutable record fully specifying one CLI command
  (full name, aliases, help text, ordered parameter bindings) and the means
  to invoke it against an invocation Context.
- CommandBinder: turns one reflected method into a CommandDescriptor, or
  reports that the method is not a command.

Mapping rules
- Eligibility: a method is a command iff it carries Command metadata (the
  @command decorator). Naming conventions are never an eligibility signal.
- Name: the metadata value verbatim when non-empty, otherwise the dasherized
  method name ("loadFromGitHub" → "load-from-git-hub").
- Full name: "namespace:name", or just "name" for an empty namespace.
  Descriptors compare (and hash) by full name only.
- Aliases: the metadata shortcuts, in order.
- Bindings: one per parameter, in declaration order, first match over the
  strategy chain in plaincommands.bindings.
- Help: short/long descriptions copied from the method's docstring.

Quick start
    from plaincommands import CommandBinder, MethodDefinition, command

    class Users:
        @command(shortcuts=["cu"])
        def createUser(self, name, admin: bool = False):
            \"\"\"Create a user.\"\"\"

    descriptor = CommandBinder().bind(MethodDefinition(Users.createUser), "users")
    descriptor.full_name   # 'users:create-user'
    descriptor.aliases     # ('cu',)
"""
from .annotations import Command
from .bindings import STRATEGIES, resolve
from .faults import *
from .reflection import MethodDefinition
from .utils import *


class CommandDescriptor(metaclass=IntrospectableType):
    """
    Immutable description of one command.

    Properties
    - full_name: "namespace:name" (unique key within a registry).
    - name / namespace: the two halves of the full name.
    - aliases: additional invocable names.
    - short_description / long_description: help text.
    - bindings: one binding per method parameter, in declaration order.
    - definition: the reflected method.
    - hidden / deprecated: presentation flags from the metadata.
    """

    __introspectable__ = (
        "full_name",
        "name",
        "namespace",
        "aliases",
        "short_description",
        "long_description",
        "bindings",
        "definition",
        "hidden",
        "deprecated",
    )
    __displayable__ = (
        "full_name",
        "aliases",
        "bindings",
    )

    def __init__(
            self,
            name,
            /,
            namespace="",
            aliases=(),
            short_description="",
            long_description="",
            bindings=(),
            definition=None,
            *,
            hidden=False,
            deprecated=False,
    ):
        if not isinstance(name, str) or not (name := name.strip()):
            raise ValueError(f"{type(self).__typename__} 'name' must be a non-empty string")
        if not isinstance(namespace, str):
            raise TypeError(f"{type(self).__typename__} 'namespace' must be a string")
        self._name = name
        self._namespace = namespace.strip()
        self._full_name = ":".join(filter(None, (self._namespace, self._name)))
        self._aliases = tuple(aliases)
        self._short_description = short_description
        self._long_description = long_description
        self._bindings = tuple(bindings)
        self._definition = definition
        self._hidden = bool(hidden)
        self._deprecated = bool(deprecated)

    @property
    def names(self):
        """
        Every name the command is invocable by: the full name, then the aliases.
        """
        return (self._full_name, *self._aliases)

    def is_equal_to(self, other, /):
        return self._full_name == other.full_name

    def __eq__(self, other):
        if not isinstance(other, CommandDescriptor):
            return NotImplemented
        return self.is_equal_to(other)

    def __hash__(self):
        return hash(self._full_name)

    def configure(self, parser, /):
        """
        Declare every command-line facing binding on an argparse parser.
        """
        for binding in self._bindings:
            binding.configure(parser)
        return parser

    def invoke(self, context, /):
        """
        Run the command and return its exit code.

        Global options carried by the context are applied first, then each
        binding resolves its value in declaration order and the method is
        called with the results. None means success (0); any other non-int
        return value is rejected.
        """
        for option in context.options:
            option.apply(context)

        arguments = [binding.resolve(context) for binding in self._bindings]

        status = self._definition.invoke_for(context.instance, arguments)
        if status is None:
            return 0
        if isinstance(status, bool) or not isinstance(status, int):
            raise TypeError(
                f"{self._definition.qualname}() must return an integer exit code or None, not {type(status).__name__}"
            )
        return status


class CommandBinder:
    """
    Maps reflected methods onto CommandDescriptors.

    Parameters
    - strategies: the (predicate, constructor) binding chain, in precedence
      order. Defaults to plaincommands.bindings.STRATEGIES.
    """

    def __init__(self, strategies=STRATEGIES):
        self.strategies = tuple(strategies)

    def bind(self, definition, namespace="", /):
        """
        Build the descriptor of a method.

        Raises
        - NotACommandError: the method carries no Command metadata.
        - ParameterBindingError: a parameter matched no binding strategy.
        """
        if not isinstance(definition, MethodDefinition):
            definition = MethodDefinition(definition)

        if (annotation := definition.read_annotation(Command)) is Unset:
            raise NotACommandError(
                f"method {definition.qualname}() is not a command",
                hint="decorate it with @command to expose it",
                name=definition.name,
            )

        bindings = []
        for parameter in definition.parameters:
            if (binding := resolve(parameter, self.strategies)) is Unset:
                raise ParameterBindingError(
                    f"parameter {parameter.name!r} of {definition.qualname}() cannot be processed",
                    hint="remove it or give it a bindable type (keyword-variadic parameters are not supported)",
                    parameter=parameter,
                    method=definition.qualname,
                )
            bindings.append(binding)

        return CommandDescriptor(
            annotation.value or dasherize(definition.name),
            namespace,
            annotation.shortcuts,
            definition.short_description,
            definition.long_description,
            bindings,
            definition,
            hidden=annotation.hidden,
            deprecated=annotation.deprecated,
        )

    def create(self, definition, namespace="", /):
        """
        Silent version of bind(): None instead of NotACommandError.
        """
        try:
            return self.bind(definition, namespace)
        except NotACommandError:
            return None


__all__ = (
    "CommandDescriptor",
    "CommandBinder",
)
