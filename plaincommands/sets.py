"""
plaincommands command sets.

A CommandSet groups the commands of one class under one namespace:

    class Users(CommandSet, namespace="users"):
        verbose: Annotated[bool, option(shortcuts=["v"])] = False

        @command(shortcuts=["cu"])
        def createUser(self, name, admin: bool = False):
            \"\"\"Create a user.\"\"\"

- namespace: class keyword (default ""); "users" gives "users:create-user".
- global options: Annotated class attributes; added to every command of the
  set and stored on the instance before any command runs.
- commands(): one descriptor per decorated public method, in definition order;
  methods without Command metadata are skipped silently.
"""
import inspect

from .bindings import GlobalOption
from .commands import CommandBinder
from .faults import NotACommandError
from .reflection import MethodDefinition, PropertyDefinition


class CommandSet:
    """
    Base class of command containers.
    """

    __namespace__ = ""

    def __init_subclass__(cls, /, namespace=None, **options):
        super().__init_subclass__(**options)
        if namespace is not None:
            if not isinstance(namespace, str):
                raise TypeError(f"{cls.__name__} 'namespace' must be a string")
            cls.__namespace__ = namespace.strip()

    @classmethod
    def namespace(cls):
        return cls.__namespace__

    @classmethod
    def methods(cls):
        """
        Yield (name, function) for every public plain method, base classes
        first, in definition order. Overrides keep the position of the
        overridden method.
        """
        members = {}
        for klass in reversed(cls.__mro__):
            if klass is object:
                continue
            for name, member in vars(klass).items():
                if not name.startswith("_") and inspect.isfunction(member):
                    members[name] = member
                elif name in members:
                    del members[name]
        yield from members.items()

    @classmethod
    def options(cls):
        """
        The global options of the set, one per Annotated option attribute.
        """
        return tuple(map(GlobalOption, PropertyDefinition.collect(cls)))

    @classmethod
    def commands(cls, binder=None):
        """
        Bind every command of the set.

        Raises
        - ParameterBindingError: propagated; a command with an unbindable
          parameter aborts the registration.
        """
        binder = binder or CommandBinder()
        descriptors = []
        for _, function in cls.methods():
            try:
                descriptors.append(binder.bind(MethodDefinition(function), cls.namespace()))
            except NotACommandError:
                continue
        return tuple(descriptors)


__all__ = (
    "CommandSet",
)
