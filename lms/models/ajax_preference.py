"""Preferences a user's browser may write."""
from lms.extensions import db
from lms.models.base import BaseModel
from lms.models.enums import ParamType


class AjaxPreference(BaseModel):
    """
    Grant letting one user update one preference from the client.

    Written when a component renders a control that flips the
    preference, read when the browser posts the new value.
    """

    __tablename__ = "ajax_preference"

    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    param_type = db.Column(db.Enum(ParamType), nullable=False)

    __table_args__ = (
        db.UniqueConstraint("user_id", "name", name="uq_ajax_preference_name"),
    )

    def __repr__(self) -> str:
        return f"<AjaxPreference(user={self.user_id}, name='{self.name}')>"
