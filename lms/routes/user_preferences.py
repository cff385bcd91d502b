"""User preference routes used by client-side controls."""
import logging
from flask import Blueprint, jsonify, request, current_app, g
from marshmallow import Schema, fields, ValidationError, validate
from lms.middleware.auth import require_auth
from lms.extensions import limiter
from lms.services.preference_service import PreferenceNotUpdatableError

logger = logging.getLogger(__name__)

user_preferences_bp = Blueprint(
    "user_preferences", __name__, url_prefix="/api/v1/user/preferences"
)


class PreferenceUpdateSchema(Schema):
    """Schema for a single preference write."""

    name = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    value = fields.Raw(required=True, allow_none=False)


preference_update_schema = PreferenceUpdateSchema()


@user_preferences_bp.route("", methods=["POST"])
@require_auth
@limiter.limit("120 per minute")
def update_preference():
    """
    Store one preference of the current user.

    Only preferences that a rendered component opened for this user
    are accepted.

    ---
    Request body:
        {"name": "block_ace_student_hidden_graph", "value": true}

    Returns:
        200: {"name": ..., "value": "<stored text>"}
        400: Validation error
        403: Preference is not updatable from the client
    """
    try:
        data = preference_update_schema.load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({"error": "Invalid request", "details": e.messages}), 400

    service = current_app.container.preference_service()
    try:
        stored = service.update_from_client(g.user_id, data["name"], data["value"])
    except PreferenceNotUpdatableError as e:
        return jsonify({"error": str(e)}), 403
    except ValidationError as e:
        return jsonify({"error": "Invalid value", "details": {"value": e.messages}}), 400

    return jsonify({"name": data["name"], "value": stored}), 200


@user_preferences_bp.route("", methods=["GET"])
@require_auth
def list_preferences():
    """Return all preferences of the current user."""
    repo = current_app.container.user_preference_repository()
    return jsonify({"preferences": repo.get_all(g.user_id)}), 200
