"""Repositories package."""
from lms.repositories.base import BaseRepository, RecordNotFoundError
from lms.repositories.user_repository import UserRepository
from lms.repositories.context_repository import ContextRepository
from lms.repositories.role_repository import RoleRepository
from lms.repositories.user_preference_repository import UserPreferenceRepository
from lms.repositories.ajax_preference_repository import AjaxPreferenceRepository
from lms.repositories.block_instance_repository import BlockInstanceRepository

__all__ = [
    "BaseRepository",
    "RecordNotFoundError",
    "UserRepository",
    "ContextRepository",
    "RoleRepository",
    "UserPreferenceRepository",
    "AjaxPreferenceRepository",
    "BlockInstanceRepository",
]
