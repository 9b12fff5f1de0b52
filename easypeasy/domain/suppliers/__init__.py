"""Supplier domain - Suppliers and the venues they rent out"""

from .router import router

__all__ = ["router"]
