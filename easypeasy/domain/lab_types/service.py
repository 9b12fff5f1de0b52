"""Lab type service - Business logic for lab type operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import LabType
from .repository import LabTypeRepository
from .schemas import LabTypeCreate, LabTypeUpdate

logger = logging.getLogger(__name__)


class LabTypeService:
    """Service layer for lab type business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = LabTypeRepository()

    def get_lab_types(self) -> list[LabType]:
        return self.repo.get_lab_types(self.db)

    def get_lab_type(self, lab_type_id: int) -> LabType:
        lab_type = self.repo.get_lab_type_by_id(self.db, lab_type_id)
        if not lab_type:
            raise HTTPException(status_code=404, detail="Lab type not found")
        return lab_type

    def count_labs(self, lab_type: LabType) -> int:
        return self.repo.count_labs(self.db, lab_type.id)

    def create_lab_type(self, data: LabTypeCreate) -> LabType:
        """Create a new lab type; codes are unique"""
        if self.repo.get_lab_type_by_code(self.db, data.code):
            logger.warning(f"⚠️ Lab type code already in use: {data.code}")
            raise HTTPException(status_code=409, detail=f"Lab type code {data.code} already exists")

        lab_type = self.repo.create_lab_type(
            self.db,
            name=data.name,
            code=data.code,
            meeting_count=data.meetingCount,
            notes=data.notes,
        )
        logger.info(f"✅ Created lab type {lab_type.code} ({lab_type.meeting_count} meetings)")
        return lab_type

    def update_lab_type(self, lab_type_id: int, data: LabTypeUpdate) -> LabType:
        """
        Update a lab type.

        Existing labs keep their meetings: a new meeting count only applies to
        labs created or regenerated afterwards.
        """
        lab_type = self.get_lab_type(lab_type_id)

        if data.code is not None and data.code != lab_type.code:
            existing = self.repo.get_lab_type_by_code(self.db, data.code)
            if existing and existing.id != lab_type.id:
                raise HTTPException(status_code=409, detail=f"Lab type code {data.code} already exists")

        updates = {
            "name": data.name,
            "code": data.code,
            "meeting_count": data.meetingCount,
            "notes": data.notes,
        }
        return self.repo.update_lab_type(self.db, lab_type, **updates)

    def delete_lab_type(self, lab_type_id: int) -> dict:
        lab_type = self.get_lab_type(lab_type_id)

        lab_count = self.repo.count_labs(self.db, lab_type.id)
        if lab_count:
            raise HTTPException(
                status_code=409,
                detail=f"Lab type is used by {lab_count} lab(s) and cannot be deleted",
            )

        self.repo.delete_lab_type(self.db, lab_type)
        logger.info(f"🗑️ Deleted lab type {lab_type_id}")
        return {"message": "Lab type deleted"}
