"""
Command Loader
Discovers command modules grouped by category and builds their descriptors
"""

import importlib
import pkgutil
from types import ModuleType
from typing import Dict, List

from commands.descriptor import CommandDescriptor
from commands.errors import LoadError
from utils.logger import get_logger

# Package holding one subpackage per category
CATALOG_PACKAGE = "commands.catalog"


class CommandLoader:
    """
    Loads command modules from a package of categories.

    Layout::

        commands/catalog/
            util/
                build.py      -> data = {"name": "build", ...}; execute(ctx)
            info/
                server.py

    Each command module exposes ``data`` (command data in the registration
    API's shape) and ``execute`` (the handler), and may set ``default_hide``
    and ``guild_only``. The category only groups files; commands are keyed by
    ``data["name"]``.
    """

    def __init__(self, package: str = CATALOG_PACKAGE):
        self.package = package
        self.logger = get_logger("CommandLoader")

    def load(self) -> Dict[str, CommandDescriptor]:
        """
        Load every command module under the package.

        Returns:
            Mapping of command name to descriptor

        Raises:
            LoadError: If any module fails to import or declare a valid command
        """
        commands: Dict[str, CommandDescriptor] = {}

        for category in self._categories():
            for module_name in self._modules(category):
                descriptor = self._build(self._import(module_name))

                if descriptor.name in commands:
                    self.logger.warning(f"Command '{descriptor.name}' redefined by {module_name}")
                commands[descriptor.name] = descriptor

        self.logger.info(f"Loaded {len(commands)} commands from {self.package}")
        return commands

    def _categories(self) -> List[str]:
        package = self._import(self.package)
        path = getattr(package, "__path__", None)
        if path is None:
            raise LoadError("not a package", self.package)

        return [
            f"{self.package}.{info.name}"
            for info in sorted(pkgutil.iter_modules(path), key=lambda info: info.name)
            if info.ispkg and not info.name.startswith("_")
        ]

    def _modules(self, category: str) -> List[str]:
        package = self._import(category)

        return [
            f"{category}.{info.name}"
            for info in sorted(pkgutil.iter_modules(package.__path__), key=lambda info: info.name)
            if not info.ispkg and not info.name.startswith("_")
        ]

    @staticmethod
    def _import(module_name: str) -> ModuleType:
        try:
            return importlib.import_module(module_name)
        except Exception as e:
            raise LoadError(f"import failed: {e}", module_name) from e

    @staticmethod
    def _build(module: ModuleType) -> CommandDescriptor:
        """Turns a command module into a descriptor."""
        module_name = module.__name__

        data = getattr(module, "data", None)
        if data is None:
            raise LoadError("missing 'data'", module_name)

        handler = getattr(module, "execute", None)
        if not callable(handler):
            raise LoadError("missing callable 'execute'", module_name)

        default_hide = getattr(module, "default_hide", True)
        if not isinstance(default_hide, bool):
            raise LoadError("'default_hide' must be a bool", module_name)

        guild_only = getattr(module, "guild_only", False)
        if not isinstance(guild_only, bool):
            raise LoadError("'guild_only' must be a bool", module_name)

        try:
            return CommandDescriptor.from_data(
                data,
                handler=handler,
                default_hide=default_hide,
                guild_only=guild_only,
            )
        except LoadError as e:
            raise type(e)(str(e), module_name) from e
