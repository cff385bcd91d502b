"""Plugin manager for loading and managing plugins."""
import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Dict, Iterator, List, Optional, Tuple, Type
from lms.plugins.base import BasePlugin, PluginStatus
from lms.plugins.config_store import PluginConfigStore

logger = logging.getLogger(__name__)


class PluginManager:
    """
    Registry and lifecycle driver for plugins.

    Enabled/disabled state is written through to the config store so that
    every worker process agrees on which plugins are active.
    """

    def __init__(self, config_store: Optional[PluginConfigStore] = None):
        self._plugins: Dict[str, BasePlugin] = {}
        self._config_store = config_store

    def _require(self, name: str) -> BasePlugin:
        plugin = self._plugins.get(name)
        if not plugin:
            raise ValueError(f"Plugin '{name}' not found")
        return plugin

    def _persist(self, plugin: BasePlugin, status: str) -> None:
        if not self._config_store:
            return
        try:
            self._config_store.save(plugin.metadata.name, status, plugin.config)
        except OSError as e:
            logger.warning(
                f"Failed to persist {status} state for '{plugin.metadata.name}': {e}"
            )

    def register_plugin(self, plugin: BasePlugin) -> None:
        """
        Register a plugin.

        Raises:
            ValueError: If a plugin with the same name is already registered
        """
        name = plugin.metadata.name
        if name in self._plugins:
            raise ValueError(f"Plugin '{name}' already registered")

        self._plugins[name] = plugin

    def get_plugin(self, name: str) -> Optional[BasePlugin]:
        """Get plugin by name."""
        return self._plugins.get(name)

    def get_all_plugins(self) -> List[BasePlugin]:
        return list(self._plugins.values())

    def get_enabled_plugins(self) -> List[BasePlugin]:
        return [
            plugin
            for plugin in self._plugins.values()
            if plugin.status == PluginStatus.ENABLED
        ]

    def is_enabled(self, name: str) -> bool:
        """True when the plugin is registered and enabled."""
        plugin = self._plugins.get(name)
        return bool(plugin and plugin.status == PluginStatus.ENABLED)

    def initialize_plugin(self, name: str, config: Optional[Dict] = None) -> None:
        """
        Initialize plugin with configuration.

        Saved configuration from the config store is used when no
        explicit config is given.

        Raises:
            ValueError: If plugin not found
        """
        plugin = self._require(name)
        if config is None and self._config_store:
            config = self._config_store.get_config(name) or None
        plugin.initialize(config)

    def enable_plugin(self, name: str) -> None:
        """
        Enable plugin after checking its dependencies are enabled.

        Raises:
            ValueError: If plugin not found or a dependency is not enabled
        """
        plugin = self._require(name)

        missing = [
            dep for dep in plugin.metadata.dependencies or [] if not self.is_enabled(dep)
        ]
        if missing:
            raise ValueError(f"Dependency '{missing[0]}' not enabled")

        plugin.enable()
        self._persist(plugin, "enabled")
        logger.info(f"Plugin '{name}' enabled")

    def disable_plugin(self, name: str) -> None:
        """
        Disable plugin.

        Raises:
            ValueError: If plugin not found or enabled plugins depend on it
        """
        plugin = self._require(name)

        dependents = [
            p.metadata.name
            for p in self.get_enabled_plugins()
            if name in (p.metadata.dependencies or [])
        ]
        if dependents:
            raise ValueError(f"Cannot disable: plugins {dependents} depend on it")

        plugin.disable()
        self._persist(plugin, "disabled")
        logger.info(f"Plugin '{name}' disabled")

    def get_plugin_blueprints(self) -> List[Tuple]:
        """(blueprint, url_prefix) pairs of every registered plugin with routes."""
        result = []
        for plugin in self._plugins.values():
            bp = plugin.get_blueprint()
            if bp:
                result.append((bp, plugin.get_url_prefix()))
        return result

    @staticmethod
    def _plugin_classes(module: ModuleType) -> Iterator[Type[BasePlugin]]:
        """Concrete BasePlugin subclasses defined (not imported) in a module."""
        for _name, obj in inspect.getmembers(module, inspect.isclass):
            if (
                issubclass(obj, BasePlugin)
                and obj is not BasePlugin
                and not inspect.isabstract(obj)
                and obj.__module__ == module.__name__
            ):
                yield obj

    def discover(self, package_path: str) -> int:
        """
        Register and initialize every plugin found in a package.

        Each direct submodule (or subpackage ``__init__``) of the package
        is imported and scanned for plugin classes.

        Args:
            package_path: Dotted module path (e.g. 'plugins')

        Returns:
            Number of newly discovered plugins.
        """
        module_path = package_path.replace("/", ".").rstrip(".")

        try:
            package = importlib.import_module(module_path)
        except ImportError as e:
            logger.warning(f"Failed to import package '{module_path}': {e}")
            return 0

        package_dir = getattr(package, "__path__", None)
        if not package_dir:
            return 0

        count = 0
        for _finder, module_name, _ispkg in pkgutil.iter_modules(package_dir):
            full_module = f"{module_path}.{module_name}"
            try:
                module = importlib.import_module(full_module)
            except Exception as e:
                logger.warning(f"Failed to import module '{full_module}': {e}")
                continue

            for plugin_class in self._plugin_classes(module):
                instance = plugin_class()
                plugin_name = instance.metadata.name
                if plugin_name in self._plugins:
                    continue

                self.register_plugin(instance)
                self.initialize_plugin(plugin_name)
                count += 1
                logger.info(f"Discovered plugin: {plugin_name}")

        return count

    def load_persisted_state(self) -> None:
        """Enable the plugins the config store marks as enabled."""
        if not self._config_store:
            return

        for entry in self._config_store.get_enabled():
            plugin = self.get_plugin(entry.plugin_name)
            if not plugin:
                logger.warning(
                    f"Persisted plugin '{entry.plugin_name}' not found in registry, skipping"
                )
                continue

            if plugin.status != PluginStatus.INITIALIZED:
                continue
            try:
                plugin.enable()
                logger.info(f"Restored enabled state for plugin '{entry.plugin_name}'")
            except ValueError as e:
                logger.warning(f"Failed to restore plugin '{entry.plugin_name}': {e}")
