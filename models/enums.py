from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# MASTER CODE STATUS
# -----------------------------------------------------
class MasterCodeStatus(BaseStrEnum):
    """A master code creates exactly one company."""

    available = "available"
    used = "used"


# -----------------------------------------------------
# LANGUAGE
# -----------------------------------------------------
class Language(BaseStrEnum):
    """Languages of user-facing messages."""

    sr = "sr"
    en = "en"
