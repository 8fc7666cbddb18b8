"""SQLAlchemy models for Boostly."""

from .endorsement import Endorsement
from .recognition import Recognition
from .redemption import Redemption
from .student import Student

__all__ = [
    "Endorsement",
    "Recognition",
    "Redemption",
    "Student",
]
