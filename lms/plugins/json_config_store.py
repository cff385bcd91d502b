"""JSON file-based plugin configuration store."""
import json
import logging
import os
import tempfile
from typing import Any, List, Optional

from lms.plugins.config_store import (
    PluginConfigStore,
    PluginConfigEntry,
    STATUS_ENABLED,
    STATUS_DISABLED,
)

logger = logging.getLogger(__name__)


class JsonFilePluginConfigStore(PluginConfigStore):
    """
    Persists plugin state as JSON files shared by all workers.

    Files:
      - <plugins_dir>/plugins.json  {"plugins": {name: {"enabled": bool, "version": str}}}
      - <plugins_dir>/config.json   {name: {...settings...}}
    """

    def __init__(self, plugins_dir: str):
        self._plugins_dir = plugins_dir
        self._registry_path = os.path.join(plugins_dir, "plugins.json")
        self._config_path = os.path.join(plugins_dir, "config.json")

    @staticmethod
    def _load(path: str) -> dict:
        try:
            with open(path, "r") as f:
                return json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable plugin state file '{path}': {e}")
            return {}

    def _dump(self, path: str, data: Any) -> None:
        """Write JSON through a temp file so readers never see partial content."""
        os.makedirs(self._plugins_dir, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self._plugins_dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, path)
        except Exception:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def _registry(self) -> dict:
        return self._load(self._registry_path).get("plugins", {})

    def _entry(self, name: str, info: dict, configs: dict) -> PluginConfigEntry:
        return PluginConfigEntry(
            plugin_name=name,
            status=STATUS_ENABLED if info.get("enabled") else STATUS_DISABLED,
            config=configs.get(name, {}),
        )

    def get_by_name(self, plugin_name: str) -> Optional[PluginConfigEntry]:
        info = self._registry().get(plugin_name)
        if info is None:
            return None
        return self._entry(plugin_name, info, self._load(self._config_path))

    def get_all(self) -> List[PluginConfigEntry]:
        configs = self._load(self._config_path)
        return [
            self._entry(name, info, configs) for name, info in self._registry().items()
        ]

    def save(
        self, plugin_name: str, status: str, config: Optional[dict] = None
    ) -> None:
        registry = self._registry()
        info = registry.setdefault(plugin_name, {"enabled": False, "version": "1.0.0"})
        info["enabled"] = status == STATUS_ENABLED
        self._dump(self._registry_path, {"plugins": registry})

        if config is not None:
            self.save_config(plugin_name, config)

    def get_config(self, plugin_name: str) -> dict:
        return self._load(self._config_path).get(plugin_name, {})

    def save_config(self, plugin_name: str, config: dict) -> None:
        configs = self._load(self._config_path)
        configs[plugin_name] = config
        self._dump(self._config_path, configs)
