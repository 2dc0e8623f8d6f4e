"""Turn a line of chat text into validated arguments and run the matching command."""

from .commands import ArgumentValue, Command, CommandRegistry, command
from .core import CommandDispatcher, CommandLoader
from .errors import ChatCommandError, CommandError, CommandLoadError, InvalidArgumentError

__version__ = "1.0.0"

__all__ = [
    "ArgumentValue",
    "ChatCommandError",
    "Command",
    "CommandDispatcher",
    "CommandError",
    "CommandLoadError",
    "CommandLoader",
    "CommandRegistry",
    "InvalidArgumentError",
    "command",
]
