"""Context model: the host scopes capabilities are checked against."""
from typing import List
from lms.extensions import db
from lms.models.base import BaseModel


class Context(BaseModel):
    """
    A node in the context tree (system > category > course > module).

    ``instanceid`` points at the owning record for the level: the user id
    for user contexts, the course id for course contexts, the course
    module id for module contexts. ``path`` lists ancestor ids from the
    root, e.g. ``/1/3/12``.
    """

    __tablename__ = "context"

    contextlevel = db.Column(db.Integer, nullable=False, index=True)
    instanceid = db.Column(db.Integer, nullable=False, default=0)
    parent_id = db.Column(db.Integer, db.ForeignKey("context.id"), nullable=True)
    path = db.Column(db.String(255), nullable=False, default="")

    __table_args__ = (
        db.UniqueConstraint("contextlevel", "instanceid", name="uq_context_level_instance"),
    )

    parent = db.relationship("Context", remote_side="Context.id", lazy="joined")

    def ancestor_ids(self) -> List[int]:
        """Ids on the path from the root down to and including this context."""
        ids = [int(part) for part in (self.path or "").split("/") if part]
        if self.id is not None and (not ids or ids[-1] != self.id):
            ids.append(self.id)
        return ids

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "contextlevel": self.contextlevel,
            "instanceid": self.instanceid,
            "parent_id": self.parent_id,
            "path": self.path,
        }

    def __repr__(self) -> str:
        return f"<Context(id={self.id}, level={self.contextlevel}, instance={self.instanceid})>"
