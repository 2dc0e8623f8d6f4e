"""Exceptions raised (or returned) by the command system."""

from typing import Any, Callable, Mapping, Optional

from .messages import default_localize


class ChatCommandError(Exception):
    """Base class for every error of this package."""


class CommandError(ChatCommandError):
    """A command could not be defined or registered.

    These are programmer mistakes (a missing name, whitespace in a name, a
    spec that is not a mapping) and are always raised to the caller.
    """

    def __init__(self, message: str, code: str, command_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.command_name = command_name

    def __str__(self) -> str:
        text = type(self).__name__
        if self.command_name:
            text += f" [{self.command_name}]"
        if self.message or self.code:
            text += ":"
        if self.message:
            text += f" {self.message}"
        if self.code:
            text += f" ({self.code})"
        return text


class CommandLoadError(ChatCommandError):
    """A command definition file could not be imported."""

    def __init__(self, path: Any, reason: str) -> None:
        super().__init__(f"Failed to load commands from {path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidArgumentError(ChatCommandError):
    """A raw token is not acceptable for an argument.

    Instances are returned as data by the validation pipeline, never raised.
    The user-facing message is localized through the context's ``localize``
    collaborator when one is present.
    """

    def __init__(
        self,
        argument: Any,
        context: Optional[Mapping[str, Any]],
        localization_code: str,
        value: Any = None,
    ) -> None:
        self.argument = argument
        self.value = value
        self.localization_code = localization_code
        self.code = localization_code.upper()
        self.message = self._localize_message(context or {})
        super().__init__(self.message)

    def _localize_message(self, context: Mapping[str, Any]) -> str:
        localize: Callable[..., Optional[str]] = context.get("localize") or default_localize
        type_name = localize(f"argument_type_{self.argument.type_name}")

        message = localize(self.localization_code, self.argument, self.value, type_name)
        if not message:
            message = localize("argument_invalid", self.argument, self.value, type_name)
        if not message:
            message = default_localize(self.localization_code, self.argument, self.value, type_name)
        return message
