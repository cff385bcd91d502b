"""Generic repository base."""
from typing import Generic, Optional, Type, TypeVar

T = TypeVar("T")


class RecordNotFoundError(Exception):
    """Raised when a record that must exist is missing."""

    pass


class BaseRepository(Generic[T]):
    """Shared CRUD operations over a single model."""

    def __init__(self, session, model: Type[T]):
        self._session = session
        self._model = model

    def find_by_id(self, id: int) -> Optional[T]:
        """Find entity by primary key."""
        return self._session.get(self._model, id)

    def get_required(self, id: int) -> T:
        """
        Find entity by primary key, raising if it does not exist.

        Raises:
            RecordNotFoundError: If no row has the given id
        """
        entity = self.find_by_id(id)
        if entity is None:
            raise RecordNotFoundError(
                f"{self._model.__name__} with id {id} does not exist"
            )
        return entity

    def save(self, entity: T) -> T:
        """Add or update entity and commit."""
        self._session.add(entity)
        self._session.commit()
        return entity
