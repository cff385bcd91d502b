"""User preference repository."""
from typing import Dict, Optional
from lms.repositories.base import BaseRepository
from lms.models import UserPreference


class UserPreferenceRepository(BaseRepository[UserPreference]):
    """Repository for reading and writing user preferences."""

    def __init__(self, session):
        super().__init__(session, UserPreference)

    def _find(self, user_id: int, name: str) -> Optional[UserPreference]:
        return (
            self._session.query(UserPreference)
            .filter(UserPreference.user_id == user_id, UserPreference.name == name)
            .first()
        )

    def get_value(self, user_id: int, name: str) -> Optional[str]:
        """Get the stored text value of a preference, or None if unset."""
        row = self._find(user_id, name)
        return row.value if row else None

    def get_all(self, user_id: int) -> Dict[str, str]:
        """Get every preference of a user as a name -> value dict."""
        rows = (
            self._session.query(UserPreference)
            .filter(UserPreference.user_id == user_id)
            .all()
        )
        return {row.name: row.value for row in rows}

    def set_value(self, user_id: int, name: str, value: str) -> None:
        """Create or update a preference value."""
        row = self._find(user_id, name)
        if row:
            row.value = value
        else:
            self._session.add(UserPreference(user_id=user_id, name=name, value=value))
        self._session.commit()
