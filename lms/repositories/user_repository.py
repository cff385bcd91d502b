"""User repository implementation."""
from typing import Optional
from lms.repositories.base import BaseRepository
from lms.models import User


class UserRepository(BaseRepository[User]):
    """Repository for User entity operations."""

    def __init__(self, session):
        super().__init__(session=session, model=User)

    def find_by_username(self, username: str) -> Optional[User]:
        """Find user by username."""
        return self._session.query(User).filter(User.username == username).first()
