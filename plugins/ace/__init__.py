"""ACE engagement analytics block."""
import os
from typing import Optional, Dict, Any, TYPE_CHECKING
from lms.plugins.base import BasePlugin, PluginMetadata
from lms.plugins.config_schema import PluginConfigSchemaReader
from plugins.ace.src.graph_client import AnalyticsGraphClient, GraphProvider
from plugins.ace.src.resolver import AceSettings, CAP_VIEW, CAP_VIEW_OWN

if TYPE_CHECKING:
    from flask import Blueprint

PLUGIN_NAME = "ace"
PLUGINS_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class AcePlugin(BasePlugin):
    """Block showing engagement graphs for a student, course or activity.

    Class MUST be defined in __init__.py (not re-exported) due to
    discovery check obj.__module__ == module.__name__ in manager.py.
    """

    # Capability -> roles that get it on install
    capabilities = {
        CAP_VIEW: ["manager", "teacher"],
        CAP_VIEW_OWN: ["manager", "teacher", "student", "user"],
    }

    @property
    def metadata(self) -> PluginMetadata:
        return PluginMetadata(
            name=PLUGIN_NAME,
            version="1.0.0",
            author="University of Canterbury",
            description="Engagement analytics graphs block",
            dependencies=[],
        )

    def initialize(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Initialize with schema defaults merged with provided config."""
        merged = PluginConfigSchemaReader([PLUGINS_ROOT]).get_defaults(PLUGIN_NAME)
        if config:
            merged.update(config)
        super().initialize(merged)

    def get_blueprint(self) -> Optional["Blueprint"]:
        from plugins.ace.src.routes import ace_bp
        return ace_bp

    def get_url_prefix(self) -> Optional[str]:
        return "/api/v1/plugins/ace"

    def build_graph_provider(self, config: Optional[Dict[str, Any]] = None) -> GraphProvider:
        """Analytics service client for the given (or current) settings."""
        config = config if config is not None else self.config
        return AnalyticsGraphClient(
            api_endpoint=config.get("analytics_api_endpoint", ""),
            api_key=config.get("analytics_api_key", ""),
            timeout=int(config.get("request_timeout", 10)),
        )

    def build_settings(
        self,
        site_course_id: int,
        bundled_image_url: str,
        config: Optional[Dict[str, Any]] = None,
    ) -> AceSettings:
        config = config if config is not None else self.config
        return AceSettings(
            teacher_dashboard_url=config.get("teacher_dashboard_url", ""),
            user_dashboard_url=config.get("user_dashboard_url", ""),
            graph_image_url=config.get("graph_image_url") or bundled_image_url,
            site_course_id=site_course_id,
        )
