"""Pytest configuration and shared fixtures."""

import logging
from unittest.mock import MagicMock

import pytest

from chatcommands.commands import CommandRegistry
from chatcommands.config import ChatCommandSettings
from chatcommands.core import CommandDispatcher
from chatcommands.messages import default_localize

# Disable logging during tests
logging.disable(logging.CRITICAL)


@pytest.fixture
def send():
    """Mock message delivery."""
    return MagicMock()


@pytest.fixture
def localize():
    """Localizer backed by the built-in English messages."""
    return MagicMock(side_effect=default_localize)


@pytest.fixture
def context(send, localize):
    """A context exposing the localize/send collaborators."""
    return {"send": send, "localize": localize}


@pytest.fixture
def chat_settings():
    """Settings with every default, independent of the environment."""
    return ChatCommandSettings(
        log_level="INFO",
        permission_prefix="commands",
        default_replaces_failure=True,
        camel_case_keys=True,
        command_directories=[],
        recursive_load=True,
    )


@pytest.fixture
def registry():
    """An empty command registry."""
    return CommandRegistry()


@pytest.fixture
def dispatcher(registry, chat_settings):
    """Dispatcher over the shared registry."""
    return CommandDispatcher(registry, chat_settings)


@pytest.fixture
def commands_dir(tmp_path):
    """A directory of command files."""
    directory = tmp_path / "commands"
    directory.mkdir()
    (directory / "echo.py").write_text(
        '''
from chatcommands import command


@command(
    "echo",
    description="Repeat some text",
    aliases=["say"],
    arguments=[{"key": "text", "required": True}],
)
def echo(ctx):
    return ctx["text"]
'''
    )
    (directory / "admin.py").write_text(
        '''
COMMANDS = [
    {
        "name": "ban",
        "category": "moderation",
        "arguments": [
            {"key": "user", "type": "user", "required": True},
            {"key": "reason"},
        ],
    },
    {"name": "debug", "hidden": True},
]
'''
    )
    return directory
