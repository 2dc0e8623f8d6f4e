import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping

from ..commands.command import Command
from ..commands.registry import CommandRegistry
from ..errors import CommandLoadError

logger = logging.getLogger(__name__)


class CommandLoader:
    """Registers the commands defined in every Python file of a directory.

    A command file may define a ``COMMANDS`` sequence of specs, a single
    ``COMMAND`` (or ``command``) spec, and functions decorated with
    ``@command``.
    """

    def __init__(self, registry: CommandRegistry) -> None:
        self.registry = registry
        self.loaded_files: Dict[str, List[str]] = {}

    def load_directory(self, directory: str | Path, recursive: bool = True) -> CommandRegistry:
        path = Path(directory)
        if not path.exists() or not path.is_dir():
            logger.warning(f"Command directory does not exist: {path}")
            return self.registry

        pattern = "**/*.py" if recursive else "*.py"
        for file_path in sorted(path.glob(pattern)):
            if any(part.startswith("_") for part in file_path.relative_to(path).parts):
                continue
            self.load_file(file_path)

        return self.registry

    def load_file(self, file_path: str | Path) -> List[str]:
        file_path = Path(file_path)
        module = self._load_module(file_path)

        names = []
        for spec in self._extract_commands(module):
            self.registry.register(spec)
            names.append(self._spec_name(spec))

        self.loaded_files[str(file_path)] = names
        logger.info(f"Loaded {len(names)} command(s) from {file_path}: {names}")
        return names

    def _load_module(self, file_path: Path) -> Any:
        module_name = f"chatcommands.loaded.{file_path.stem}_{abs(hash(str(file_path.resolve())))}"
        spec = importlib.util.spec_from_file_location(module_name, file_path)
        if not spec or not spec.loader:
            raise CommandLoadError(file_path, "not a Python module")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            del sys.modules[module_name]
            raise CommandLoadError(file_path, str(e)) from e
        return module

    def _extract_commands(self, module: Any) -> List[Any]:
        specs: List[Any] = list(getattr(module, "COMMANDS", []))

        for attr_name in ("COMMAND", "command"):
            value = getattr(module, attr_name, None)
            if isinstance(value, (Mapping, Command)):
                specs.append(value)

        for _, obj in inspect.getmembers(module, inspect.isfunction):
            if hasattr(obj, "_chat_command") and obj.__module__ == module.__name__:
                specs.append(obj)

        return specs

    @staticmethod
    def _spec_name(spec: Any) -> str:
        spec = getattr(spec, "_chat_command", spec)
        if isinstance(spec, Command):
            return spec.original_name
        return spec.get("name") or spec.get("command")
