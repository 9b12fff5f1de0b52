"""Enrollment domain - Clients signed up for labs and their absences"""

from .router import router

__all__ = ["router"]
