"""Command definitions."""

import re
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Union

from ..errors import CommandError
from .argument_types import Argument, resolve_argument

Check = Callable[[dict[str, Any]], Any]

_WHITESPACE = re.compile(r"\s")


class Command:
    """A named command with positional arguments, guards and a handler.

    A command registered under several names is materialized once per name
    (see :meth:`view`); ``original_name`` is the canonical name they share.
    """

    def __init__(
        self,
        name: str,
        handler: Optional[Callable[[dict[str, Any]], Any]] = None,
        description: str = "",
        long_description: Optional[str] = None,
        category: Optional[str] = None,
        hidden: bool = False,
        permissionless: bool = False,
        arguments: Optional[Iterable[Any]] = None,
        aliases: Optional[Iterable[str]] = None,
        check: Union[Check, Sequence[Check], None] = None,
        original_name: Optional[str] = None,
    ):
        if not isinstance(name, str) or not name:
            raise CommandError("Commands must have names.", "MISSING_COMMAND_NAME")
        if _WHITESPACE.search(name):
            raise CommandError(
                "Command names may not include whitespace.", "SPACE_IN_COMMAND_NAME", name
            )

        self.name = name
        self.original_name = original_name or name
        self.handler = handler
        self.description = description
        self.long_description = long_description
        self.category = category
        self.hidden = bool(hidden)
        self.permissionless = bool(permissionless)
        self.arguments: list[Argument] = [resolve_argument(arg) for arg in arguments or []]
        self.aliases: list[str] = list(aliases or [])
        self.check = check

    @classmethod
    def from_spec(cls, spec: Mapping[str, Any]) -> "Command":
        """Build a command from a plain mapping."""
        aliases = spec.get("aliases")
        return cls(
            name=spec.get("name") or spec.get("command"),
            handler=spec.get("handler"),
            description=spec.get("description") or spec.get("describe") or "",
            long_description=spec.get("long_description"),
            category=spec.get("category"),
            hidden=spec.get("hidden", False),
            permissionless=spec.get("permissionless", False),
            arguments=spec.get("arguments"),
            aliases=list(aliases) if aliases else None,
            check=spec.get("check"),
            original_name=spec.get("original_name"),
        )

    def view(self, name: str, hidden: bool, aliases: Iterable[str]) -> "Command":
        """Materialize this command as it is seen under ``name``."""
        alias_view = Command(
            name=name,
            handler=self.handler,
            description=self.description,
            long_description=self.long_description,
            category=self.category,
            hidden=hidden,
            permissionless=self.permissionless,
            aliases=aliases,
            check=self.check,
            original_name=self.original_name,
        )
        alias_view.arguments = self.arguments
        return alias_view

    @property
    def is_alias(self) -> bool:
        return self.name != self.original_name

    def permission(self, prefix: str = "commands") -> str:
        """The permission string guarding this command."""
        parts = [prefix]
        if self.category:
            parts.append(self.category)
        parts.append(self.original_name)
        return ".".join(parts)

    def usage(self, differentiate_required: bool = True) -> str:
        """Render ``name <required> [optional]``."""
        wrapped = [
            f"<{arg.key}>" if arg.required and differentiate_required else f"[{arg.key}]"
            for arg in self.arguments
        ]
        return " ".join([self.name, *wrapped])

    def passes_checks(self, context: dict[str, Any]) -> bool:
        if self.check is None:
            return True
        if callable(self.check):
            return bool(self.check(context))
        return all(check(context) for check in self.check)

    def run(self, context: dict[str, Any]) -> Any:
        """Call the handler if there is one."""
        if self.handler is not None:
            return self.handler(context)
        return None

    def __repr__(self) -> str:
        return f"Command(name={self.name!r}, original_name={self.original_name!r}, hidden={self.hidden})"
