"""Shared enums for models, auth and grading."""
import enum


class Role(enum.Enum):
    ADMIN = "ADMIN"
    SUPERVISOR = "SUPERVISOR"
    STUDENT = "STUDENT"


class Step(enum.Enum):
    """Sequential evaluation stages; each needs the previous one passed."""
    A = "A"
    B = "B"
    C = "C"


class Level(enum.Enum):
    """Graded outcome of a submission, lowest to highest."""
    FAIL = "FAIL"
    ONE = "ONE"
    TWO = "TWO"
    READY_TO_PROCEED = "READY_TO_PROCEED"


ALL_ROLES = (Role.ADMIN, Role.SUPERVISOR, Role.STUDENT)
