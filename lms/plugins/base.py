"""Plugin base class and lifecycle types."""
import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from flask import Blueprint


class PluginStatus(enum.Enum):
    """Plugin lifecycle state."""

    DISCOVERED = "discovered"
    INITIALIZED = "initialized"
    ENABLED = "enabled"
    DISABLED = "disabled"


@dataclass
class PluginMetadata:
    """Static description of a plugin."""

    name: str
    version: str
    author: str
    description: str = ""
    dependencies: List[str] = field(default_factory=list)


class BasePlugin(ABC):
    """
    Base class for host plugins.

    Lifecycle: DISCOVERED -> initialize() -> INITIALIZED -> enable() ->
    ENABLED <-> disable() -> DISABLED. Subclasses hook into transitions
    through on_enable / on_disable.
    """

    def __init__(self):
        self._status = PluginStatus.DISCOVERED
        self._config: Dict[str, Any] = {}

    @property
    @abstractmethod
    def metadata(self) -> PluginMetadata:
        """Plugin name, version and dependencies."""
        ...

    @property
    def status(self) -> PluginStatus:
        return self._status

    @property
    def config(self) -> Dict[str, Any]:
        return self._config

    def initialize(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Store configuration and mark the plugin ready to enable."""
        self._config = dict(config or {})
        self._status = PluginStatus.INITIALIZED

    def enable(self) -> None:
        """
        Enable the plugin.

        Raises:
            ValueError: If the plugin was never initialized
        """
        if self._status not in (PluginStatus.INITIALIZED, PluginStatus.DISABLED):
            raise ValueError(
                f"Cannot enable plugin '{self.metadata.name}' from state "
                f"{self._status.value}"
            )
        self.on_enable()
        self._status = PluginStatus.ENABLED

    def disable(self) -> None:
        """Disable the plugin."""
        self.on_disable()
        self._status = PluginStatus.DISABLED

    def on_enable(self) -> None:
        pass

    def on_disable(self) -> None:
        pass

    def get_blueprint(self) -> Optional["Blueprint"]:
        """Blueprint with the plugin's routes, if any."""
        return None

    def get_url_prefix(self) -> Optional[str]:
        return None
