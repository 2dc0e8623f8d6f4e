"""Command system: argument types, commands and the registry."""

from .argument_types import (
    ARGUMENT_TYPES,
    Argument,
    BooleanArgument,
    BytesArgument,
    ColorArgument,
    CommandReferenceArgument,
    CustomArgument,
    DurationArgument,
    IntegerArgument,
    StringArgument,
    SubredditArgument,
    URLArgument,
    UserArgument,
    resolve_argument,
)
from .command import Command
from .decorators import command
from .registry import CommandRegistry
from .values import ArgumentValue

__all__ = [
    "ARGUMENT_TYPES",
    "Argument",
    "ArgumentValue",
    "BooleanArgument",
    "BytesArgument",
    "ColorArgument",
    "Command",
    "CommandReferenceArgument",
    "CommandRegistry",
    "CustomArgument",
    "DurationArgument",
    "IntegerArgument",
    "StringArgument",
    "SubredditArgument",
    "URLArgument",
    "UserArgument",
    "command",
    "resolve_argument",
]
