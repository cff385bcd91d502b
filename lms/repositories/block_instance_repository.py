"""Block instance repository."""
from typing import List, Optional
from lms.repositories.base import BaseRepository
from lms.models import BlockInstance


class BlockInstanceRepository(BaseRepository[BlockInstance]):
    """Repository for block placements."""

    def __init__(self, session):
        super().__init__(session, BlockInstance)

    def find_for_block(self, instance_id: int, block_name: str) -> Optional[BlockInstance]:
        """Find an instance by id, only if it belongs to the named block."""
        instance = self.find_by_id(instance_id)
        if instance is None or instance.block_name != block_name:
            return None
        return instance

    def find_by_context(self, context_id: int) -> List[BlockInstance]:
        """List instances placed in a context."""
        return (
            self._session.query(BlockInstance)
            .filter(BlockInstance.parent_context_id == context_id)
            .all()
        )

    def create(
        self, block_name: str, parent_context_id: int, config: Optional[dict] = None
    ) -> BlockInstance:
        """Add a block to a context."""
        instance = BlockInstance(
            block_name=block_name,
            parent_context_id=parent_context_id,
            config=config or {},
        )
        return self.save(instance)
