"""User preference service with per-user client-update grants."""
import logging
from typing import Any
from marshmallow import fields, ValidationError
from lms.models import ParamType
from lms.repositories.ajax_preference_repository import AjaxPreferenceRepository
from lms.repositories.user_preference_repository import UserPreferenceRepository

logger = logging.getLogger(__name__)

# Field each preference type is deserialized with
PARAM_FIELDS = {
    ParamType.BOOL: fields.Boolean(),
    ParamType.INT: fields.Integer(strict=True),
    ParamType.TEXT: fields.Str(),
}


class PreferenceNotUpdatableError(Exception):
    """Raised when a client tries to write a preference not opened for ajax."""

    pass


def clean_param(value: Any, param_type: ParamType) -> str:
    """
    Normalize a raw client value to its stored text form.

    Booleans are stored as "1" / "0".

    Raises:
        ValidationError: If the value does not fit the type
    """
    cleaned = PARAM_FIELDS[param_type].deserialize(value)
    if param_type == ParamType.BOOL:
        return "1" if cleaned else "0"
    return str(cleaned)


class PreferenceService:
    """Reads and writes per-user preferences."""

    def __init__(
        self,
        preference_repository: UserPreferenceRepository,
        ajax_preference_repository: AjaxPreferenceRepository,
    ):
        self.preference_repo = preference_repository
        self.ajax_repo = ajax_preference_repository

    def get_bool(self, user_id: int, name: str, default: bool = False) -> bool:
        """Get a preference interpreted as a boolean."""
        value = self.preference_repo.get_value(user_id, name)
        if value is None:
            return default
        try:
            return PARAM_FIELDS[ParamType.BOOL].deserialize(value)
        except ValidationError:
            logger.warning(f"Preference '{name}' of user {user_id} is not a boolean: {value!r}")
            return default

    def allow_ajax_update(self, user_id: int, name: str, param_type: ParamType) -> None:
        """Let the user's browser write a preference."""
        self.ajax_repo.allow(user_id, name, param_type)

    def update_from_client(self, user_id: int, name: str, value: Any) -> str:
        """
        Store a preference sent by the browser.

        Args:
            user_id: Current user id
            name: Preference name
            value: Raw value from the request body

        Returns:
            The stored text value

        Raises:
            PreferenceNotUpdatableError: If the name was never opened for this user
            ValidationError: If the value does not match the granted type
        """
        param_type = self.ajax_repo.get_type(user_id, name)
        if param_type is None:
            raise PreferenceNotUpdatableError(
                f"Preference '{name}' is not updatable from the client"
            )

        cleaned = clean_param(value, param_type)
        self.preference_repo.set_value(user_id, name, cleaned)
        logger.info(f"User {user_id} updated preference '{name}'")
        return cleaned
