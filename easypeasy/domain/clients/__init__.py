"""Client domain - Families and institutions"""

from .router import router

__all__ = ["router"]
