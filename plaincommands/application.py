"""
plaincommands application: the command registry and runner.

What this module provides
- Application: collects command sets, keeps the descriptor registry (unique
  full names and aliases), declares every command on an argparse parser and
  runs a command line, returning the command's exit code.

Engine
- Argument-string parsing, --help rendering and usage errors are delegated to
  argparse. Each command is a sub-parser named by its full name, with its
  aliases; global options of its command set are declared on it too.
- Usage errors surface as UsageError (exit code 2) through trigger(): rendered
  with rich on stderr in shell mode, raised otherwise.

Quick start
    from typing import Annotated
    from plaincommands import Application, CommandSet, command, option

    class Users(CommandSet, namespace="users"):
        verbose: Annotated[bool, option(shortcuts=["v"])] = False

        @command(shortcuts=["cu"])
        def createUser(self, name, admin: bool = False):
            \"\"\"Create a user.\"\"\"

    app = Application("tool", "1.0.0")
    app.add(Users)
    app.run("users:create-user alice --admin")   # or: cu alice --admin
"""
import argparse
import importlib
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

from .commands import CommandBinder
from .context import Context
from .faults import *
from .sets import CommandSet
from .utils import *

_COMMAND = "::command"


class _Parser(argparse.ArgumentParser):
    """
    ArgumentParser reporting through plaincommands faults and a rich console.
    """

    def __init__(self, *args, console=Unset, **kwargs):
        super().__init__(*args, **kwargs)
        self.console = coalesce(console, Console())

    def _print_message(self, message, file=None):
        if message:
            self.console.out(message, end="", highlight=False)

    def error(self, message):
        raise UsageError(
            message,
            hint="run '%s --help' to see the expected usage" % self.prog,
            prog=self.prog,
            status=2,
        )


def _tokenize(argv, /):
    """
    Normalize a command line: Unset (sys.argv[1:]), a shell-like string, or an iterable of strings.
    """
    if argv is Unset:
        return sys.argv[1:]
    if isinstance(argv, str):
        return shlex.split(argv)
    if isinstance(argv, Iterable):
        tokens = list(argv)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("run() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("run() argument must be a string or an iterable of strings")


def _declare(parser, descriptor, options, /):
    """
    Declare the global options, then the command's own bindings, on a parser.
    """
    for option in options:
        option.configure(parser)
    descriptor.configure(parser)
    return parser


class Application(metaclass=IntrospectableType):
    """
    Registry and runner of commands.

    Parameters
    - name: program name (shown in usage and fault headers).
    - version: optional version string; enables --version.
    - shell: render runtime faults instead of raising them.
    - colorful / fancy: fault and listing presentation (styles, panel chrome).
    - console: rich console for command output (stdout by default).
    - errors: rich console for faults (stderr by default).
    """

    __introspectable__ = (
        "name",
        "version",
        "shell",
        "colorful",
        "fancy",
    )

    def __init__(
            self,
            name,
            /,
            version=Unset,
            *,
            shell=True,
            colorful=True,
            fancy=True,
            console=Unset,
            errors=Unset,
            binder=Unset,
    ):
        if not isinstance(name, str) or not (name := name.strip()):
            raise ValueError(f"{type(self).__typename__} 'name' must be a non-empty string")
        if not isinstance(version, str | Unset):
            raise TypeError(f"{type(self).__typename__} 'version' must be a string")

        self._name = name
        self._version = coalesce(version)
        self._shell = bool(shell)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._console = coalesce(console, Console())
        self._errors = coalesce(errors, Console(stderr=True))
        self._binder = coalesce(binder, CommandBinder())

        # full name → (descriptor, command-set instance, global options)
        self._entries = {}
        # every invocable name (full names and aliases) → full name
        self._names = {}

        self._parser = _Parser(prog=name, console=self._console)
        if self._version is not None:
            self._parser.add_argument("--version", action="version", version="%s %s" % (name, self._version))
        self._subparsers = self._parser.add_subparsers(dest=_COMMAND, metavar="COMMAND")

    @property
    def commands(self):
        """
        Registered descriptors, in registration order.
        """
        return tuple(entry[0] for entry in self._entries.values())

    def _options(self):
        return {
            "prog": self._name,
            "shell": self._shell,
            "colorful": self._colorful,
            "fancy": self._fancy,
            "console": self._errors,
        }

    def add(self, source, /):
        """
        Register every command of a command set (instance or class).

        Returns the command-set instance commands will be invoked on.

        Raises
        - ParameterBindingError / DuplicateCommandError: configuration faults.
        """
        instance = source() if isinstance(source, type) and issubclass(source, CommandSet) else source
        if not isinstance(instance, CommandSet):
            raise TypeError("add() argument must be a command set")

        options = type(instance).options()
        for descriptor in type(instance).commands(self._binder):
            self.register(descriptor, instance, options)
        return instance

    def register(self, descriptor, /, instance=None, options=()):
        """
        Register one descriptor and declare it on the parser.
        """
        options = tuple(options)
        if descriptor.full_name in self._entries:
            raise DuplicateCommandError(
                "command %r is already registered" % descriptor.full_name,
                hint="rename one of the commands or move it to another namespace",
                name=descriptor.full_name,
            )
        for name in descriptor.names:
            if name in self._names:
                raise DuplicateCommandError(
                    "name %r of command %r is already used by command %r" % (
                        name, descriptor.full_name, self._names[name]
                    ),
                    hint="pick another shortcut",
                    name=name,
                )

        # a scratch parser takes the declaration first; a conflict leaves the real one untouched
        try:
            _declare(_Parser(prog=descriptor.full_name, console=self._console), descriptor, options)
        except argparse.ArgumentError as error:
            raise ParameterBindingError(
                "command %r cannot be declared: %s" % (descriptor.full_name, error),
                hint="rename the parameter or the global option it collides with",
                method=descriptor.definition.qualname if descriptor.definition else None,
            ) from None

        # hidden commands get no entry in the parent's help listing
        listing = {} if descriptor.hidden else {"help": descriptor.short_description or None}
        _declare(self._subparsers.add_parser(
            descriptor.full_name,
            aliases=list(descriptor.aliases),
            description=descriptor.short_description or None,
            epilog=descriptor.long_description or None,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            console=self._console,
            **listing,
        ), descriptor, options)

        self._entries[descriptor.full_name] = (descriptor, instance, options)
        for name in descriptor.names:
            self._names[name] = descriptor.full_name
        return descriptor

    def discover(self, pattern, /):
        """
        Import the modules matching a dotted glob and add every CommandSet
        subclass they define. Returns the added instances.
        """
        instances = []
        for name in mglob(pattern):
            module = importlib.import_module(name)
            for object in vars(module).values():
                if (
                    isinstance(object, type) and
                    issubclass(object, CommandSet) and
                    object is not CommandSet and
                    object.__module__ == module.__name__
                ):
                    instances.append(self.add(object))
        return instances

    def find(self, name, /):
        """
        Return the descriptor registered under a full name or alias.
        """
        try:
            return self._entries[self._names[name]][0]
        except KeyError:
            raise UnknownCommandError(
                "command %r is not defined" % name,
                hint="run '%s' without arguments to list the available commands" % self._name,
                name=name,
            ) from None

    def render(self):
        """
        Print the visible commands grouped by namespace.
        """
        def style(value):
            return value if self._colorful else ""

        table = Table(box=None, show_header=False, pad_edge=False, padding=(0, 2))
        table.add_column("command", style=style("bold #00E5FF"), no_wrap=True)
        table.add_column("aliases", style=style("#9CE19C"))
        table.add_column("description", style=style("#C8C8D0"))

        namespace = None
        for descriptor in sorted(self.commands, key=lambda x: (x.namespace, x.name)):
            if descriptor.hidden:
                continue
            if descriptor.namespace != namespace:
                namespace = descriptor.namespace
                if namespace:
                    table.add_row(Text(namespace, style("bold #FF4DA6")), "", "")
            table.add_row(
                ("  " if namespace else "") + descriptor.full_name,
                ", ".join(descriptor.aliases),
                descriptor.short_description,
            )

        header = Text.assemble(
            (self._name, style("bold #E6E6F0")),
            (" " + self._version if self._version else "", style("#00E5FF")),
        )
        usage = Text("usage: %s COMMAND [ARGUMENTS...]" % self._name)
        self._console.print(Group(header, usage, Text(""), table))

    def run(self, argv=Unset, /):
        """
        Parse a command line and run the command it names.

        Returns the exit code: the command's own, 0 after listing commands or
        printing help/version, 2 on usage errors (shell mode).
        """
        tokens = _tokenize(argv)
        try:
            arguments = self._parser.parse_args(tokens)
        except UsageError as error:
            trigger(error, **self._options())
            return error.status
        except SystemExit as exit:
            # --help / --version
            return exit.code if isinstance(exit.code, int) else 0

        if (name := getattr(arguments, _COMMAND, None)) is None:
            self.render()
            return 0

        descriptor, instance, options = self._entries[self._names[name]]
        if descriptor.deprecated:
            trigger(DeprecatedCommandWarning(
                "command %r is deprecated" % descriptor.full_name,
                hint="run '%s' to see the available commands" % self._name,
                name=descriptor.full_name,
            ), **self._options())

        context = Context(arguments, console=self._console, instance=instance, options=options, command=descriptor)
        return descriptor.invoke(context)

    def main(self, argv=Unset, /):
        """
        Run and exit the process with the command's exit code.
        """
        sys.exit(self.run(argv))


__all__ = (
    "Application",
)
