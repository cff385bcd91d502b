"""Role repository for capability lookups."""
from typing import Iterable, List, Optional, Set
from lms.repositories.base import BaseRepository
from lms.models import Role, RoleAssignment


class RoleRepository(BaseRepository[Role]):
    """Repository for Role, Permission and RoleAssignment operations."""

    def __init__(self, session):
        super().__init__(session, Role)

    def find_by_name(self, name: str) -> Optional[Role]:
        """Find role by name."""
        return self._session.query(Role).filter(Role.name == name).first()

    def get_user_roles(
        self, user_id: int, context_ids: Optional[Iterable[int]] = None
    ) -> List[Role]:
        """
        Get roles assigned to a user.

        Args:
            user_id: User id
            context_ids: Restrict to assignments made in these contexts.
                None means assignments in any context.

        Returns:
            Distinct list of roles
        """
        query = (
            self._session.query(Role)
            .join(RoleAssignment, RoleAssignment.role_id == Role.id)
            .filter(RoleAssignment.user_id == user_id)
        )
        if context_ids is not None:
            query = query.filter(RoleAssignment.context_id.in_(list(context_ids)))
        return query.distinct().all()

    def get_user_permissions(
        self, user_id: int, context_ids: Optional[Iterable[int]] = None
    ) -> Set[str]:
        """Get permission names granted to a user in the given contexts."""
        permissions = set()
        for role in self.get_user_roles(user_id, context_ids):
            for perm in role.permissions:
                permissions.add(perm.name)
        return permissions

    def user_has_role(self, user_id: int, role_name: str) -> bool:
        """Check if user holds a role in any context."""
        return (
            self._session.query(RoleAssignment)
            .join(Role, RoleAssignment.role_id == Role.id)
            .filter(RoleAssignment.user_id == user_id, Role.name == role_name)
            .count()
            > 0
        )

    def assign_role(self, user_id: int, role_name: str, context_id: int) -> bool:
        """
        Assign a role to a user in a context.

        Returns:
            True if assigned (or already assigned), False if role not found
        """
        role = self.find_by_name(role_name)
        if not role:
            return False

        existing = (
            self._session.query(RoleAssignment)
            .filter(
                RoleAssignment.user_id == user_id,
                RoleAssignment.role_id == role.id,
                RoleAssignment.context_id == context_id,
            )
            .first()
        )
        if existing:
            return True

        self._session.add(
            RoleAssignment(user_id=user_id, role_id=role.id, context_id=context_id)
        )
        self._session.commit()
        return True
