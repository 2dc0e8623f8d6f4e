import logging
from typing import Any, List, Optional

import typer

from .commands import CommandRegistry
from .config import settings
from .core import CommandDispatcher, CommandLoader, split_command
from .messages import default_localize
from .middleware import analytics_middleware, error_handler_middleware, logging_middleware

app = typer.Typer(
    name="chatcommands",
    help="Parse and dispatch chat-style text commands",
    add_completion=False,
)

EXIT_WORDS = {"exit", "quit"}


def setup_logging(level: str = "INFO") -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def build_dispatcher(command_dirs: Optional[List[str]] = None) -> CommandDispatcher:
    """Load every configured command directory into a fresh dispatcher."""
    registry = CommandRegistry()
    loader = CommandLoader(registry)
    for directory in command_dirs or settings.command_directories:
        loader.load_directory(directory, recursive=settings.recursive_load)

    return CommandDispatcher(
        registry,
        settings,
        middleware=[logging_middleware, error_handler_middleware, analytics_middleware],
    )


def cli_context() -> dict[str, Any]:
    return {
        "localize": default_localize,
        "send": lambda message: typer.echo(f"❌ {message}"),
    }


def dispatch_line(dispatcher: CommandDispatcher, line: str) -> bool:
    """Dispatch one line and print what was parsed. Returns False if nothing ran."""
    name, _ = split_command(line)
    if not name:
        return False

    result = dispatcher.parse(line, cli_context())
    if result is None:
        if name not in dispatcher.registry:
            typer.echo(f"Unknown command: {name}")
        return False

    for argument in dispatcher.registry[name].arguments:
        typer.echo(f"  {argument.key} = {result[argument.key]!r}")
    return True


@app.command()
def parse(
    line: str = typer.Argument(help="The command line to dispatch"),
    commands_dir: Optional[List[str]] = typer.Option(
        None, "--commands-dir", "-d", help="Directory of command files (repeatable)"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Set log level"),
) -> None:
    """Parse and run a single command line."""
    setup_logging(log_level or settings.log_level)

    dispatcher = build_dispatcher(commands_dir)
    if not dispatch_line(dispatcher, line):
        raise typer.Exit(code=1)


@app.command(name="list")
def list_commands(
    commands_dir: Optional[List[str]] = typer.Option(
        None, "--commands-dir", "-d", help="Directory of command files (repeatable)"
    ),
    show_all: bool = typer.Option(False, "--all", help="Include hidden commands"),
) -> None:
    """List the available commands."""
    dispatcher = build_dispatcher(commands_dir)
    commands = dispatcher.registry.commands(include_hidden=show_all)

    if not commands:
        typer.echo("No commands registered.")
        return

    typer.echo("📦 Available Commands:")
    for command in sorted(commands, key=lambda cmd: cmd.original_name):
        line = f"  {command.usage()}"
        if command.description:
            line += f" - {command.description}"
        if command.aliases:
            line += f" (aliases: {', '.join(command.aliases)})"
        typer.echo(line)


@app.command()
def repl(
    commands_dir: Optional[List[str]] = typer.Option(
        None, "--commands-dir", "-d", help="Directory of command files (repeatable)"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Set log level"),
) -> None:
    """Read command lines until EOF or `exit`."""
    setup_logging(log_level or settings.log_level)
    dispatcher = build_dispatcher(commands_dir)

    while True:
        try:
            line = typer.prompt(">", default="", show_default=False, prompt_suffix=" ")
        except typer.Abort:
            break
        if line.strip().lower() in EXIT_WORDS:
            break
        dispatch_line(dispatcher, line)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
