"""Graph display modes of the ACE block."""
import enum
import logging
from typing import Optional

logger = logging.getLogger(__name__)

GRAPH_TYPE_SETTING = "graphtype"


class GraphMode(enum.Enum):
    """Display variant chosen per block instance (the ``graphtype`` setting)."""

    STUDENT = "student"
    COURSE = "course"
    STUDENT_WITH_TABS = "studentwithtabs"
    TEACHER_COURSE = "teachercourse"
    ACTIVITY = "activity"
    STUDENT_TEACHER_AUTO = "studentteachergraph"

    @property
    def help_string_key(self) -> str:
        """Language string holding the help popover text for this mode."""
        return f"{self.value}titlehelper"

    @classmethod
    def from_setting(cls, value: Optional[str]) -> Optional["GraphMode"]:
        """
        Parse the ``graphtype`` setting.

        Unset or empty means STUDENT. Any other unrecognised value
        yields None, which renders nothing.
        """
        if value is None or value == "":
            return cls.STUDENT
        try:
            return cls(value)
        except ValueError:
            logger.warning(f"Unknown ACE graph type '{value}'")
            return None
