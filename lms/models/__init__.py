"""Domain models package."""
from lms.models.user import User
from lms.models.context import Context
from lms.models.role import Role, Permission, RoleAssignment, role_permissions
from lms.models.user_preference import UserPreference
from lms.models.ajax_preference import AjaxPreference
from lms.models.block_instance import BlockInstance
from lms.models.enums import UserStatus, ContextLevel, ParamType

__all__ = [
    # Models
    "User",
    "Context",
    "Role",
    "Permission",
    "RoleAssignment",
    "UserPreference",
    "AjaxPreference",
    "BlockInstance",
    # Association tables
    "role_permissions",
    # Enums
    "UserStatus",
    "ContextLevel",
    "ParamType",
]
