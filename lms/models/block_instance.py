"""Block instance model: a configured block placed on a page."""
from lms.extensions import db
from lms.models.base import BaseModel


class BlockInstance(BaseModel):
    """
    One placement of a block plugin.

    ``config`` holds the per-instance settings chosen by the
    administrator who added the block (e.g. ``{"graphtype": "course"}``).
    """

    __tablename__ = "block_instance"

    block_name = db.Column(db.String(100), nullable=False, index=True)
    parent_context_id = db.Column(
        db.Integer, db.ForeignKey("context.id"), nullable=False
    )
    config = db.Column(db.JSON, nullable=False, default=dict)

    parent_context = db.relationship("Context", lazy="joined")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "block_name": self.block_name,
            "parent_context_id": self.parent_context_id,
            "config": self.config or {},
        }

    def __repr__(self) -> str:
        return f"<BlockInstance(id={self.id}, block='{self.block_name}')>"
