import logging
from typing import Any, Callable, Iterable, Mapping, Optional

from ..commands.command import Command
from ..commands.registry import CommandRegistry
from ..config import ChatCommandSettings, settings as default_settings
from .tokenizer import camel_case, split_arguments, split_command

logger = logging.getLogger(__name__)

Middleware = Callable[[dict[str, Any], str], None]


class CommandDispatcher:
    def __init__(
        self,
        registry: Optional[CommandRegistry] = None,
        settings: Optional[ChatCommandSettings] = None,
        middleware: Optional[Iterable[Middleware]] = None,
    ) -> None:
        self.registry = registry if registry is not None else CommandRegistry()
        self.settings = settings or default_settings
        self.middleware: list[Middleware] = list(middleware or [])

    def add_middleware(self, middleware: Middleware) -> None:
        self.middleware.append(middleware)

    def parse(self, line: Any, context: Optional[Mapping[str, Any]] = None) -> Optional[dict[str, Any]]:
        """
        Parse ``line`` and run the command it names.

        Returns the context object holding the parsed arguments (plus every
        field of ``context``) when the command was found, permitted and all
        arguments were valid, whether or not its checks let the handler run.
        Returns None otherwise.
        """
        name, remainder = split_command(line)
        if not name:
            return None

        command = self.registry.get(name)
        if command is None:
            logger.debug(f"No command named {name!r}")
            return None

        context = context or {}
        parsed: dict[str, Any] = dict(context)
        dispatch_context: dict[str, Any] = {
            "command_name": name,
            "command": command,
            "line": line,
            "success": False,
            "ran": False,
            "result": None,
            "error": None,
        }

        logger.info(f"Command called: {name} ({command.original_name})")
        self._run_middleware(dispatch_context, "pre")
        try:
            success = self._has_permission(command, context)
            if success:
                tokens = split_arguments(remainder, len(command.arguments))
                success = self._parse_arguments(command, tokens, context, parsed)

            dispatch_context["success"] = success
            if success and command.passes_checks(parsed):
                dispatch_context["ran"] = True
                dispatch_context["result"] = command.run(parsed)
        except Exception as e:
            dispatch_context["error"] = e
            raise
        finally:
            self._run_middleware(dispatch_context, "post")

        return parsed if success else None

    def _has_permission(self, command: Command, context: Mapping[str, Any]) -> bool:
        test_permission = context.get("test_permission")
        if not test_permission or command.permissionless:
            return True

        permission = command.permission(self.settings.permission_prefix)
        if test_permission(permission):
            return True

        logger.warning(f"Permission denied for {command.name}: {permission}")
        localize, send = context.get("localize"), context.get("send")
        if localize and send:
            send(localize("no_permission"))
        return False

    def _parse_arguments(
        self,
        command: Command,
        tokens: list[Optional[str]],
        context: Mapping[str, Any],
        parsed: dict[str, Any],
    ) -> bool:
        success = True

        # Every argument is validated so the user sees all errors at once
        for argument, token in zip(command.arguments, tokens):
            result = argument.get(
                token,
                context,
                self.registry,
                default_replaces_failure=self.settings.default_replaces_failure,
            )
            if self.settings.camel_case_keys:
                parsed[camel_case(argument.key)] = result.value
            parsed[argument.key] = result.value
            if not result.success:
                success = False

        return success

    def _run_middleware(self, dispatch_context: dict[str, Any], phase: str) -> None:
        for middleware in self.middleware:
            middleware(dispatch_context, phase)
