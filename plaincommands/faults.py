"""
plaincommands faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain (routing, registration, warnings) so logs and
  searches stay predictable.
- CommandException / CommandWarning: base types that carry a message plus
  options and know how to render themselves with rich.
- trigger(): central entry point to surface a fault (respecting shell/fancy/colorful).

Two families of faults
- Configuration faults (NotACommandError, ParameterBindingError,
  DuplicateCommandError) are detected while commands are registered. They are
  always raised; a broken command table is a programming error.
- Runtime faults (UsageError, UnknownCommandError, DeprecatedCommandWarning)
  are surfaced through trigger(): rendered on stderr in shell mode, raised or
  warned otherwise.
"""
import copy
import inspect
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - routing (1110x)
      • UNKNOWN_COMMAND, USAGE
    - registration (1120x)
      • NOT_A_COMMAND, PARAMETER_BINDING, DUPLICATE_COMMAND
    - warnings (121xx)
      • DEPRECATED_COMMAND
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND    = 11101
    USAGE              = 11102

    # --- registration errors (11xxx) ---
    NOT_A_COMMAND      = 11201
    PARAMETER_BINDING  = 11202
    DUPLICATE_COMMAND  = 11203

    # --- warnings (12xxx) ---
    DEPRECATED_COMMAND = 12101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _renderable(fault, palette):
    """
    Build the rich renderable shared by exceptions and warnings.

    Layout: "[ prog — code | title ]" header, the message, then a "→ hint" line.
    In fancy mode the message and hint sit inside a panel titled by the header.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", True)
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style] if colorful else "")

    code = options.get("code", type(fault).__code__)
    header = Text.assemble(
        "[ ",
        text(getattr(main, "__prog__", options.get("prog", "")), "prog-name"),
        " — ",
        text(code.normalize(), "code"),
        " | ",
        text(options.get("title", type(fault).__title__).title(), "title"),
        " ]"
    )
    message = text(fault.message, "message")
    body = [message]
    if hint := options.get("hint"):
        body.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if options.get("fancy", True):
        return Panel(Group(*body), title=header, title_align="left")
    return Group(header, *body)


class CommandException(Exception):
    """
    Base class of every plaincommands error.

    The message is the first positional argument; keyword options carry the
    rendering context (prog, title, hint, shell, fancy, colorful, ...) and any
    payload the fault wants to expose (parameter, name, status, ...).
    """
    __code__ = FaultCode.USAGE
    __title__ = "command error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else type(self).__title__

    @property
    def code(self):
        return self.options.get("code", type(self).__code__)

    def __rich__(self):
        return _renderable(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "title": "bold #FF4DA6",
            "message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        self.options.get("console", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class NotACommandError(CommandException):
    __code__ = FaultCode.NOT_A_COMMAND
    __title__ = "not a command"


class ParameterBindingError(CommandException):
    __code__ = FaultCode.PARAMETER_BINDING
    __title__ = "unbindable parameter"

    @property
    def parameter(self):
        return self.options.get("parameter")


class DuplicateCommandError(CommandException):
    __code__ = FaultCode.DUPLICATE_COMMAND
    __title__ = "duplicate command"


class UnknownCommandError(CommandException):
    __code__ = FaultCode.UNKNOWN_COMMAND
    __title__ = "unknown command"


class UsageError(CommandException):
    __code__ = FaultCode.USAGE
    __title__ = "invalid usage"

    @property
    def status(self):
        return self.options.get("status", 2)


class CommandWarning(ABC, Warning):
    """
    Base class of every plaincommands warning (same shape as CommandException).
    """
    __code__ = FaultCode.DEPRECATED_COMMAND
    __title__ = "command warning"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else type(self).__title__

    def __rich__(self):
        return _renderable(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        self.options.get("console", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DeprecatedCommandWarning(CommandWarning):
    __code__ = FaultCode.DEPRECATED_COMMAND
    __title__ = "deprecated command"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, rendering happens via the rich console; otherwise errors
      are raised and warnings go through warnings.warn.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "CommandException",
    "NotACommandError",
    "ParameterBindingError",
    "DuplicateCommandError",
    "UnknownCommandError",
    "UsageError",
    "CommandWarning",
    "DeprecatedCommandWarning",
    "trigger",
)

