"""Ajax preference grant repository."""
import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from lms.repositories.base import BaseRepository
from lms.models import AjaxPreference, ParamType

logger = logging.getLogger(__name__)


class AjaxPreferenceRepository(BaseRepository[AjaxPreference]):
    """Per-user grants for client-side preference writes."""

    def __init__(self, session):
        super().__init__(session, AjaxPreference)

    def _find(self, user_id: int, name: str) -> Optional[AjaxPreference]:
        return (
            self._session.query(AjaxPreference)
            .filter(AjaxPreference.user_id == user_id, AjaxPreference.name == name)
            .first()
        )

    def get_type(self, user_id: int, name: str) -> Optional[ParamType]:
        """Value type the user may write for a preference, or None if not granted."""
        row = self._find(user_id, name)
        return row.param_type if row else None

    def allow(self, user_id: int, name: str, param_type: ParamType) -> None:
        """Grant (or retype) a client-side write of a preference."""
        row = self._find(user_id, name)
        if row:
            if row.param_type != param_type:
                row.param_type = param_type
                self._session.commit()
            return

        self._session.add(AjaxPreference(user_id=user_id, name=name, param_type=param_type))
        try:
            self._session.commit()
        except IntegrityError:
            # Another worker granted it first
            self._session.rollback()
            logger.debug(f"Ajax preference '{name}' already granted to user {user_id}")
