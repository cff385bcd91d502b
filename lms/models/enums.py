"""Enumeration types for models."""
import enum


class UserStatus(enum.Enum):
    """User account status."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    DELETED = "deleted"


class ContextLevel(enum.IntEnum):
    """
    Scope against which capabilities are evaluated.

    Values are stored as integers on the context table.
    """

    SYSTEM = 10
    USER = 30
    COURSECAT = 40
    COURSE = 50
    MODULE = 70
    BLOCK = 80


class ParamType(enum.Enum):
    """Value type accepted for an ajax-updatable user preference."""

    BOOL = "bool"
    INT = "int"
    TEXT = "text"
