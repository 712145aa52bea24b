# Models package (re-export feature modules for stable imports)
from .students.student import Student

__all__ = [
    "Student",
]
