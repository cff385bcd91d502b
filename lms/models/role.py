"""Role, Permission and RoleAssignment models for capability checks."""
from lms.extensions import db
from lms.models.base import BaseModel


# Association table for role-permission many-to-many
role_permissions = db.Table(
    "role_permissions",
    db.Column("role_id", db.Integer, db.ForeignKey("role.id"), primary_key=True),
    db.Column(
        "permission_id", db.Integer, db.ForeignKey("permission.id"), primary_key=True
    ),
)


class Role(BaseModel):
    """
    Role model.

    Roles group permissions together and are assigned to users
    within a context.
    """

    __tablename__ = "role"

    name = db.Column(db.String(50), unique=True, nullable=False, index=True)
    description = db.Column(db.String(255))

    permissions = db.relationship(
        "Permission",
        secondary=role_permissions,
        backref=db.backref("roles", lazy="dynamic"),
        lazy="joined",
    )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "permissions": [p.name for p in self.permissions],
        }

    def __repr__(self) -> str:
        return f"<Role(name='{self.name}')>"


class Permission(BaseModel):
    """
    Permission (capability) model.

    Format: resource.action (e.g., ace.view, ace.viewown)
    """

    __tablename__ = "permission"

    name = db.Column(db.String(100), unique=True, nullable=False, index=True)
    description = db.Column(db.String(255))
    resource = db.Column(db.String(50), nullable=False, index=True)
    action = db.Column(db.String(50), nullable=False)

    def __repr__(self) -> str:
        return f"<Permission(name='{self.name}')>"


class RoleAssignment(BaseModel):
    """A role granted to a user in one context (and everything below it)."""

    __tablename__ = "role_assignment"

    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    role_id = db.Column(db.Integer, db.ForeignKey("role.id"), nullable=False)
    context_id = db.Column(
        db.Integer, db.ForeignKey("context.id"), nullable=False, index=True
    )

    __table_args__ = (
        db.UniqueConstraint(
            "user_id", "role_id", "context_id", name="uq_role_assignment"
        ),
    )

    role = db.relationship("Role", lazy="joined")

    def __repr__(self) -> str:
        return (
            f"<RoleAssignment(user={self.user_id}, role={self.role_id}, "
            f"context={self.context_id})>"
        )
