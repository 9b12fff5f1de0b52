"""Lab domain - Labs, their weekly meetings and the calendar view"""

from .router import router

__all__ = ["router"]
