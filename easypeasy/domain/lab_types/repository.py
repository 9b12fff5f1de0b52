"""Lab type repository - Database operations for lab types"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Lab, LabType


class LabTypeRepository:
    """Repository for lab type database operations"""

    @staticmethod
    def get_lab_types(db: Session) -> list[LabType]:
        return db.query(LabType).order_by(LabType.name).all()

    @staticmethod
    def get_lab_type_by_id(db: Session, lab_type_id: int) -> Optional[LabType]:
        return db.query(LabType).filter(LabType.id == lab_type_id).first()

    @staticmethod
    def get_lab_type_by_code(db: Session, code: str) -> Optional[LabType]:
        return db.query(LabType).filter(LabType.code == code).first()

    @staticmethod
    def count_labs(db: Session, lab_type_id: int) -> int:
        """Number of labs referencing the type"""
        return db.query(func.count(Lab.id)).filter(Lab.lab_type_id == lab_type_id).scalar() or 0

    @staticmethod
    def create_lab_type(db: Session, **lab_type_data) -> LabType:
        lab_type = LabType(**lab_type_data)
        db.add(lab_type)
        db.commit()
        db.refresh(lab_type)
        return lab_type

    @staticmethod
    def update_lab_type(db: Session, lab_type: LabType, **updates) -> LabType:
        """Update a lab type with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(lab_type, key):
                setattr(lab_type, key, value)

        db.commit()
        db.refresh(lab_type)
        return lab_type

    @staticmethod
    def delete_lab_type(db: Session, lab_type: LabType) -> None:
        db.delete(lab_type)
        db.commit()
