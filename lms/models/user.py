"""User domain model."""
from lms.extensions import db
from lms.models.base import BaseModel
from lms.models.enums import UserStatus


class User(BaseModel):
    """User account model."""

    __tablename__ = "user"

    username = db.Column(db.String(100), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    status = db.Column(
        db.Enum(UserStatus),
        nullable=False,
        default=UserStatus.ACTIVE,
    )

    preferences = db.relationship(
        "UserPreference",
        backref="user",
        lazy="dynamic",
        cascade="all, delete-orphan",
    )

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "status": self.status.value,
        }

    def __repr__(self) -> str:
        return f"<User(username='{self.username}')>"
