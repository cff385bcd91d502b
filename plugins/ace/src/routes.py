"""ACE block API routes."""
import logging
from flask import Blueprint, jsonify, request, current_app, g, url_for

from lms.middleware.auth import require_auth
from plugins.ace.src.resolver import (
    ViewerContext,
    WidgetConfig,
    WidgetContentResolver,
    WidgetOutput,
)

logger = logging.getLogger(__name__)

PLUGIN_NAME = "ace"

ace_bp = Blueprint(
    "ace_plugin", __name__, static_folder="../static", static_url_path="/static"
)


def _check_ace_enabled():
    """Check the ACE plugin is enabled and return its effective config.

    Returns:
        (config_dict, None) if enabled
        (None, (json_response, status_code)) if disabled
    """
    config_store = getattr(current_app, "config_store", None)
    plugin_manager = getattr(current_app, "plugin_manager", None)
    if not config_store or not plugin_manager:
        return None, (jsonify({"error": "Plugin system not available"}), 503)

    entry = config_store.get_by_name(PLUGIN_NAME)
    if not entry or not entry.is_enabled:
        return None, (jsonify({"error": "ACE plugin not enabled"}), 404)

    plugin = plugin_manager.get_plugin(PLUGIN_NAME)
    if not plugin:
        return None, (jsonify({"error": "ACE plugin not found"}), 404)

    return {**plugin.config, **entry.config}, None


def _build_resolver(config) -> WidgetContentResolver:
    """Build the resolver from plugin config and the DI container."""
    container = current_app.container
    plugin = current_app.plugin_manager.get_plugin(PLUGIN_NAME)
    settings = plugin.build_settings(
        site_course_id=current_app.config["SITE_COURSE_ID"],
        bundled_image_url=url_for("ace_plugin.static", filename="graph.svg"),
        config=config,
    )
    return WidgetContentResolver(
        capability_service=container.capability_service(),
        graph_provider=plugin.build_graph_provider(config),
        preference_service=container.preference_service(),
        string_service=container.string_service(),
        context_repository=container.context_repository(),
        user_repository=container.user_repository(),
        settings=settings,
    )


@ace_bp.route("/blocks/<int:instance_id>/content", methods=["GET"])
@require_auth
def get_block_content(instance_id):
    """GET /api/v1/plugins/ace/blocks/<instance_id>/content

    Query: pagecontextid (defaults to the block's context), contextid, course
    Response: {"title", "help_text", "text", "items", "icons", "footer", "toggle"}
    """
    config, err = _check_ace_enabled()
    if err:
        return err

    container = current_app.container
    instance = container.block_instance_repository().find_for_block(
        instance_id, PLUGIN_NAME
    )
    if instance is None:
        return jsonify(WidgetOutput().to_dict()), 200

    contexts = container.context_repository()
    page_context_id = request.args.get(
        "pagecontextid", instance.parent_context_id, type=int
    )
    page_context = contexts.instance_by_id(page_context_id)
    if page_context is None:
        return jsonify({"error": "Page context not found"}), 404

    viewer = ViewerContext(
        user_id=g.user_id,
        page_context=page_context,
        course_id=contexts.course_id_for(
            page_context, current_app.config["SITE_COURSE_ID"]
        ),
        requested_context_id=request.args.get("contextid", 0, type=int),
        requested_course_id=request.args.get("course", 0, type=int),
    )

    resolver = _build_resolver(config)
    output = resolver.resolve_content(
        WidgetConfig.from_instance_config(instance.config), viewer
    )
    return jsonify(output.to_dict()), 200
