"""Plugin configuration persistence interface."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

STATUS_ENABLED = "enabled"
STATUS_DISABLED = "disabled"


@dataclass
class PluginConfigEntry:
    """Persisted state of one plugin."""

    plugin_name: str
    status: str  # "enabled" | "disabled"
    config: Dict = field(default_factory=dict)

    @property
    def is_enabled(self) -> bool:
        return self.status == STATUS_ENABLED


class PluginConfigStore(ABC):
    """Where plugin enabled state and settings survive restarts."""

    @abstractmethod
    def get_by_name(self, plugin_name: str) -> Optional[PluginConfigEntry]:
        ...

    @abstractmethod
    def get_all(self) -> List[PluginConfigEntry]:
        ...

    @abstractmethod
    def save(self, plugin_name: str, status: str, config: Optional[dict] = None) -> None:
        """Save plugin status and, when given, its config."""
        ...

    @abstractmethod
    def get_config(self, plugin_name: str) -> dict:
        ...

    @abstractmethod
    def save_config(self, plugin_name: str, config: dict) -> None:
        ...

    def get_enabled(self) -> List[PluginConfigEntry]:
        """All entries whose status is enabled."""
        return [entry for entry in self.get_all() if entry.is_enabled]
