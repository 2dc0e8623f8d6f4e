"""Command registration system."""

import logging
from typing import Any, Iterable, Iterator, Mapping, Optional

from ..errors import CommandError
from .command import Command

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Maps every command name and alias to a :class:`Command` view.

    Each alias gets its own view carrying its own ``name``, ``hidden`` and
    ``aliases``; all views of one command share ``original_name``.
    """

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(self, spec: Any) -> "CommandRegistry":
        """Register one command spec or a sequence of them."""
        if isinstance(spec, (list, tuple)):
            for single in spec:
                self.register_single(single)
        else:
            self.register_single(spec)
        return self

    def register_single(self, spec: Any) -> "CommandRegistry":
        """Register a command given as a mapping, a Command or a decorated function."""
        spec = getattr(spec, "_chat_command", spec)

        if isinstance(spec, Command):
            base = spec
            alias_flags = {alias: base.hidden for alias in base.aliases}
        elif isinstance(spec, Mapping):
            name = spec.get("name") or spec.get("command")
            if not name:
                raise CommandError("Commands must have names.", "MISSING_COMMAND_NAME")
            base = Command.from_spec({**spec, "name": name, "aliases": None, "original_name": None})
            alias_flags = self._alias_flags(spec.get("aliases"), base.hidden)
        else:
            raise CommandError(
                "Commands must be specified as a mapping or Command instance.",
                "INVALID_COMMAND_TYPE",
            )

        canonical = base.original_name
        names = {canonical: base.hidden}
        for alias, hidden in alias_flags.items():
            if alias != canonical:
                names[alias] = hidden

        # Build every view first so an invalid alias leaves the registry untouched
        views = {
            name: base.view(name, hidden, [other for other in names if other != name])
            for name, hidden in names.items()
        }
        self._commands.update(views)

        logger.debug(f"Registered command: {canonical} (aliases: {list(names)[1:]})")
        return self

    @staticmethod
    def _alias_flags(aliases: Any, hidden: bool) -> dict[str, bool]:
        if not aliases:
            return {}
        if isinstance(aliases, Mapping):
            # Each alias decides its own visibility
            return {alias: bool(alias_hidden) for alias, alias_hidden in aliases.items()}
        if isinstance(aliases, str):
            return {aliases: hidden}
        return {alias: hidden for alias in aliases}

    def deregister(self, name: str, include_aliases: bool = True) -> "CommandRegistry":
        """Remove ``name``; with ``include_aliases`` remove its whole alias group."""
        if include_aliases:
            command = self._commands.get(name)
            original_name = command.original_name if command is not None else name
            self._commands = {
                key: cmd for key, cmd in self._commands.items() if cmd.original_name != original_name
            }
        else:
            self._commands.pop(name, None)

        logger.debug(f"Deregistered command: {name} (aliases included: {include_aliases})")
        return self

    def clear(self) -> None:
        self._commands.clear()

    def get_command_registry(self) -> dict[str, Command]:
        """The live name -> command mapping."""
        return self._commands

    def get(self, name: str, default: Optional[Command] = None) -> Optional[Command]:
        return self._commands.get(name, default)

    def commands(self, include_hidden: bool = True) -> list[Command]:
        """One view per command: the one registered under its original name."""
        seen: dict[str, Command] = {}
        for command in self._commands.values():
            current = seen.get(command.original_name)
            if current is None or (current.is_alias and not command.is_alias):
                seen[command.original_name] = command
        return [cmd for cmd in seen.values() if include_hidden or not cmd.hidden]

    def names(self) -> Iterable[str]:
        return self._commands.keys()

    def __getitem__(self, name: str) -> Command:
        return self._commands[name]

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)
