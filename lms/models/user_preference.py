"""Per-user preference storage."""
from lms.extensions import db
from lms.models.base import BaseModel


class UserPreference(BaseModel):
    """A single named preference value for a user, stored as text."""

    __tablename__ = "user_preference"

    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    value = db.Column(db.Text, nullable=False, default="")

    __table_args__ = (
        db.UniqueConstraint("user_id", "name", name="uq_user_preference_name"),
    )

    def __repr__(self) -> str:
        return f"<UserPreference(user={self.user_id}, name='{self.name}')>"
