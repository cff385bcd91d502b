"""Capability service: context-aware permission checks."""
import logging
from typing import Optional, Set
from lms.models import Context
from lms.repositories.role_repository import RoleRepository

logger = logging.getLogger(__name__)


class CapabilityService:
    """
    Service answering "may this user do X here?".

    A capability holds in a context when the user has a role assignment
    granting it in that context or in any of its ancestors.
    """

    # Admin role has all capabilities everywhere
    ADMIN_ROLE = "admin"

    def __init__(self, role_repository: RoleRepository):
        """
        Initialize capability service.

        Args:
            role_repository: Repository for role operations
        """
        self.role_repo = role_repository

    def has_capability(
        self, user_id: int, capability: str, context: Optional[Context]
    ) -> bool:
        """
        Check if user has a capability in a context.

        Admin users have all capabilities.

        Args:
            user_id: User id
            capability: Capability name (e.g. "ace.view")
            context: Context to evaluate in; None never grants anything

        Returns:
            True if user has the capability
        """
        if not user_id or context is None:
            return False

        if self.role_repo.user_has_role(user_id, self.ADMIN_ROLE):
            return True

        granted = capability in self.get_user_capabilities(user_id, context)
        logger.debug(
            f"Capability '{capability}' for user {user_id} in context "
            f"{context.id}: {granted}"
        )
        return granted

    def get_user_capabilities(self, user_id: int, context: Context) -> Set[str]:
        """
        Get all capabilities a user holds in a context.

        Args:
            user_id: User id
            context: Context to evaluate in

        Returns:
            Set of capability names
        """
        return self.role_repo.get_user_permissions(user_id, context.ancestor_ids())
