"""Lab type domain - Lab categories and their weekly meeting count"""

from .router import router

__all__ = ["router"]
