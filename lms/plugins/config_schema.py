"""Plugin config schema reader.

Plugins describe their settings declaratively in JSON files inside their
directory:

  - ``config.json``           plugin-wide settings (type, default, description)
  - ``instance-config.json``  per-instance settings of block plugins
"""
import json
import logging
import os
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

PLUGIN_SCHEMA_FILE = "config.json"
INSTANCE_SCHEMA_FILE = "instance-config.json"


class PluginConfigSchemaReader:
    """Reads and applies per-plugin setting schemas."""

    def __init__(self, search_dirs: List[str]):
        self._search_dirs = search_dirs

    def _find_plugin_dir(self, plugin_name: str) -> Optional[str]:
        """Directory of a plugin, matching names with dashes/underscores ignored."""
        normalized = plugin_name.replace("-", "").replace("_", "").lower()
        for search_dir in self._search_dirs:
            if not os.path.isdir(search_dir):
                continue
            for entry in sorted(os.listdir(search_dir)):
                full_path = os.path.join(search_dir, entry)
                if not os.path.isdir(full_path):
                    continue
                if entry.replace("-", "").replace("_", "").lower() == normalized:
                    return full_path
        return None

    def _read(self, plugin_name: str, filename: str) -> dict:
        plugin_dir = self._find_plugin_dir(plugin_name)
        if not plugin_dir:
            return {}

        path = os.path.join(plugin_dir, filename)
        if not os.path.exists(path):
            return {}

        try:
            with open(path, "r") as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to read {filename} for '{plugin_name}': {e}")
            return {}

    def get_config_schema(self, plugin_name: str) -> dict:
        """Plugin-wide setting definitions."""
        return self._read(plugin_name, PLUGIN_SCHEMA_FILE)

    def get_instance_schema(self, plugin_name: str) -> dict:
        """Per-instance setting definitions."""
        return self._read(plugin_name, INSTANCE_SCHEMA_FILE)

    @staticmethod
    def defaults_of(schema: Dict[str, dict]) -> Dict[str, Any]:
        """Map each field of a schema to its declared default."""
        return {
            key: field.get("default")
            for key, field in schema.items()
            if isinstance(field, dict) and "default" in field
        }

    def get_defaults(self, plugin_name: str) -> Dict[str, Any]:
        """Default plugin-wide settings."""
        return self.defaults_of(self.get_config_schema(plugin_name))

    def validate_instance_config(self, plugin_name: str, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Check a block instance config against the instance schema.

        Unknown keys are rejected; fields with an ``options`` list only
        accept listed values; missing fields take their defaults.

        Returns:
            Config with defaults filled in

        Raises:
            ValueError: If a key is unknown or a value is not allowed
        """
        schema = self.get_instance_schema(plugin_name)
        result = self.defaults_of(schema)

        for key, value in config.items():
            field = schema.get(key)
            if field is None:
                raise ValueError(f"Unknown setting '{key}' for '{plugin_name}'")
            options = field.get("options")
            if options and value not in options:
                raise ValueError(
                    f"Invalid value '{value}' for '{key}'; expected one of {options}"
                )
            result[key] = value

        return result
