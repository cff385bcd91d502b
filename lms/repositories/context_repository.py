"""Context repository: lookups over the context tree."""
from typing import Optional
from lms.repositories.base import BaseRepository, RecordNotFoundError
from lms.models import Context, ContextLevel


class ContextRepository(BaseRepository[Context]):
    """Repository for Context lookups."""

    def __init__(self, session):
        super().__init__(session=session, model=Context)

    def instance_by_id(self, context_id: Optional[int]) -> Optional[Context]:
        """Find a context by id, returning None when missing or id is falsy."""
        if not context_id:
            return None
        return self.find_by_id(context_id)

    def find_by_instance(self, level: ContextLevel, instance_id: int) -> Optional[Context]:
        """Find the context for a record at the given level."""
        return (
            self._session.query(Context)
            .filter(
                Context.contextlevel == int(level),
                Context.instanceid == instance_id,
            )
            .first()
        )

    def system(self) -> Context:
        """Return the root system context."""
        context = self.find_by_instance(ContextLevel.SYSTEM, 0)
        if context is None:
            raise RecordNotFoundError("System context does not exist")
        return context

    def course(self, course_id: int) -> Optional[Context]:
        """Return the context of a course."""
        return self.find_by_instance(ContextLevel.COURSE, course_id)

    def create(
        self, level: ContextLevel, instance_id: int, parent: Optional[Context] = None
    ) -> Context:
        """
        Create a context below ``parent`` and fill in its path.

        Args:
            level: Context level of the new node
            instance_id: Id of the record the context belongs to
            parent: Parent context (None for the system context)

        Returns:
            The persisted context
        """
        context = Context(
            contextlevel=int(level),
            instanceid=instance_id,
            parent_id=parent.id if parent else None,
        )
        self._session.add(context)
        self._session.flush()
        parent_path = parent.path if parent else ""
        context.path = f"{parent_path}/{context.id}"
        self._session.commit()
        return context

    def course_id_for(self, context: Optional[Context], site_course_id: int) -> int:
        """
        Resolve the course a page context belongs to.

        Walks up the tree to the nearest course context. Pages outside
        any course (system, user, category) belong to the site course.
        """
        current = context
        while current is not None:
            if current.contextlevel == int(ContextLevel.COURSE):
                return current.instanceid
            current = current.parent
        return site_course_id
