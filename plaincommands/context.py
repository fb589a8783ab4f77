"""
plaincommands invocation context.

A Context is built by the application for every run of a command and handed
to CommandDescriptor.invoke(). It carries everything a binding needs to
resolve its value, so descriptors never reach back into the registry:
- the parsed arguments (argparse.Namespace),
- the output console (rich),
- the command-set instance the method is invoked on,
- the global options of that command set.

A parameter annotated with Context receives the context itself.
"""
import argparse

from rich.console import Console

from .utils import *


class Context(metaclass=IntrospectableType):
    """
    Input context of one command invocation.
    """

    __introspectable__ = (
        "arguments",
        "console",
        "instance",
        "options",
        "command",
    )
    __displayable__ = (
        "command",
        "arguments",
    )

    def __init__(self, arguments=Unset, /, console=Unset, instance=None, options=(), command=None):
        if not isinstance(arguments, argparse.Namespace | Unset):
            raise TypeError(f"{type(self).__typename__} 'arguments' must be an argparse namespace")
        if not isinstance(console, Console | Unset):
            raise TypeError(f"{type(self).__typename__} 'console' must be a rich console")
        self._arguments = coalesce(arguments, argparse.Namespace())
        self._console = coalesce(console, Console())
        self._instance = instance
        self._options = tuple(options)
        self._command = command

    def value(self, dest, /, default=None):
        """
        Return the parsed value stored under dest (default when absent).
        """
        return getattr(self._arguments, dest, default)

    def __contains__(self, dest):
        return hasattr(self._arguments, dest)


__all__ = (
    "Context",
)
