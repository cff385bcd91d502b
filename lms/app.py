"""Flask application factory."""
import logging
import os
from flask import Flask, jsonify, make_response
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_PLUGIN_PACKAGE = "plugins"


def _init_plugins(app: Flask) -> None:
    """Discover plugins, restore their persisted state and mount their routes."""
    from lms.plugins.json_config_store import JsonFilePluginConfigStore
    from lms.plugins.config_schema import PluginConfigSchemaReader
    from lms.plugins.manager import PluginManager

    config_store = JsonFilePluginConfigStore(app.config["PLUGINS_DIR"])
    schema_reader = PluginConfigSchemaReader(app.config["PLUGIN_SEARCH_DIRS"])
    plugin_manager = PluginManager(config_store=config_store)

    app.config_store = config_store
    app.schema_reader = schema_reader
    app.plugin_manager = plugin_manager

    count = plugin_manager.discover(app.config["PLUGIN_PACKAGE"])
    logger.info(f"Discovered {count} plugin(s)")
    plugin_manager.load_persisted_state()

    for blueprint, url_prefix in plugin_manager.get_plugin_blueprints():
        app.register_blueprint(blueprint, url_prefix=url_prefix)


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Optional configuration dictionary to override defaults.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Load configuration
    from lms.config import get_config
    config_class = get_config()
    app.config.from_object(config_class if config else config_class())
    app.config.setdefault(
        "PLUGIN_SEARCH_DIRS", [os.path.join(PROJECT_ROOT, DEFAULT_PLUGIN_PACKAGE)]
    )
    app.config.setdefault("PLUGIN_PACKAGE", DEFAULT_PLUGIN_PACKAGE)
    if config:
        app.config.update(config)

    # Initialize extensions
    from lms.extensions import db, limiter, jwt
    db.init_app(app)
    limiter.init_app(app)
    jwt.init_app(app)

    # Initialize DI container
    from lms.container import Container
    container = Container()
    container.config.from_dict({
        "plugin_search_dirs": app.config["PLUGIN_SEARCH_DIRS"],
        "default_language": app.config["DEFAULT_LANGUAGE"],
        "site_course_id": app.config["SITE_COURSE_ID"],
    })
    app.container = container

    # The session is overridden per-request via before_request hook
    container.db_session.override(db.session)

    @app.before_request
    def inject_db_session():
        """Inject db session into container for each request."""
        container.db_session.override(db.session)

    # Register blueprints
    from lms.routes.user_preferences import user_preferences_bp
    app.register_blueprint(user_preferences_bp)

    _init_plugins(app)

    # CLI commands
    from lms.cli.plugins import plugins_cli
    from lms.cli.blocks import blocks_cli
    app.cli.add_command(plugins_cli)
    app.cli.add_command(blocks_cli)

    # Health check endpoint
    @app.route("/api/v1/health")
    def health():
        """Health check endpoint."""
        return jsonify({
            "status": "ok",
            "service": "lms-api",
            "version": "0.1.0"
        }), 200

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        return jsonify({"error": "Internal server error"}), 500

    @app.errorhandler(429)
    def ratelimit_handler(error):
        """Handle rate limit exceeded errors with JSON response."""
        response = make_response(jsonify({
            "error": "Rate limit exceeded",
            "message": str(error.description)
        }), 429)
        response.headers["Retry-After"] = "60"
        return response

    return app
