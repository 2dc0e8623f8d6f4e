"""Command decorator for declaring commands on plain functions."""

from typing import Any, Iterable, Mapping, Optional, Union


def command(
    name: str,
    description: str = "",
    aliases: Union[Iterable[str], Mapping[str, bool], None] = None,
    arguments: Optional[list[Any]] = None,
    category: Optional[str] = None,
    hidden: bool = False,
    permissionless: bool = False,
    check: Any = None,
    long_description: Optional[str] = None,
):
    """
    Declare the decorated function as the handler of a command.

    The spec is stored on the function and picked up by
    ``CommandRegistry.register`` or the directory loader.
    """

    def decorator(func):
        func._chat_command = {
            "name": name,
            "description": description,
            "long_description": long_description,
            "aliases": aliases or [],
            "arguments": arguments or [],
            "category": category,
            "hidden": hidden,
            "permissionless": permissionless,
            "check": check,
            "handler": func,
        }
        return func

    return decorator
