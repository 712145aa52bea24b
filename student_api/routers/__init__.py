# Routers package
from . import auth_router
from . import students_router

__all__ = [
    "auth_router",
    "students_router",
]
