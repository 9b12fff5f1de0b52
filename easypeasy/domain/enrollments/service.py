"""Enrollment service - Business logic for enrollments and absence tracking"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Client, Enrollment, Lab, Meeting
from .repository import EnrollmentRepository
from .schemas import EnrollmentCreate, EnrollmentUpdate

logger = logging.getLogger(__name__)

# Labs that no longer take new participants
CLOSED_LAB_STATUSES = ("completed", "cancelled")


class EnrollmentService:
    """Service layer for enrollment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = EnrollmentRepository()

    def get_enrollments(
        self,
        client_id: Optional[int] = None,
        lab_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[Enrollment]:
        return self.repo.get_enrollments(self.db, client_id, lab_id, status)

    def get_client_enrollments(self, client_id: int) -> list[Enrollment]:
        """Enrollments of one client; 404 when the client does not exist"""
        self._get_client(client_id)
        return self.repo.get_enrollments(self.db, client_id=client_id)

    def get_enrollment(self, enrollment_id: int) -> Enrollment:
        enrollment = self.repo.get_enrollment_by_id(self.db, enrollment_id)
        if not enrollment:
            raise HTTPException(status_code=404, detail="Enrollment not found")
        return enrollment

    def _get_client(self, client_id: int) -> Client:
        client = self.repo.get_client(self.db, client_id)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
        return client

    def _get_lab(self, lab_id: int) -> Lab:
        lab = self.repo.get_lab(self.db, lab_id)
        if not lab:
            raise HTTPException(status_code=404, detail="Lab not found")
        return lab

    @staticmethod
    def _get_meeting(lab: Lab, order: int) -> Meeting:
        meeting = next((m for m in lab.meetings if m.order == order), None)
        if not meeting:
            raise HTTPException(status_code=404, detail=f"Meeting #{order} not found")
        return meeting

    def _write(self, action: str, operation, *args, **kwargs):
        """Run a repository write, rolling back on database errors"""
        try:
            return operation(self.db, *args, **kwargs)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to {action}: {str(e)}")
            logger.exception(e)
            raise HTTPException(status_code=500, detail=f"Failed to {action}. Please try again.")

    def create_enrollment(self, data: EnrollmentCreate) -> Enrollment:
        """Enroll a client in a lab; clients in the trash cannot enroll"""
        client = self._get_client(data.clientId)
        if client.is_deleted:
            raise HTTPException(status_code=409, detail="Cannot enroll a deleted client")

        lab = self._get_lab(data.labId)
        if lab.status in CLOSED_LAB_STATUSES:
            raise HTTPException(status_code=409, detail=f"Cannot enroll in a {lab.status} lab")

        logger.info(f"📥 Enrolling client {client.id} in lab {lab.id}")
        enrollment = self._write(
            "create enrollment",
            self.repo.create_enrollment,
            client,
            lab,
            child_name=data.childName,
            price=data.price,
            status=data.status,
            notes=data.notes,
        )
        logger.info(f"✅ Created enrollment {enrollment.id}")
        return enrollment

    def update_enrollment(self, enrollment_id: int, data: EnrollmentUpdate) -> Enrollment:
        enrollment = self.get_enrollment(enrollment_id)

        updates = {
            "child_name": data.childName,
            "price": data.price,
            "status": data.status,
            "notes": data.notes,
        }
        return self._write("update enrollment", self.repo.update_enrollment, enrollment, **updates)

    def delete_enrollment(self, enrollment_id: int) -> dict:
        enrollment = self.get_enrollment(enrollment_id)
        self._write("delete enrollment", self.repo.delete_enrollment, enrollment)
        logger.info(f"🗑️ Deleted enrollment {enrollment_id}")
        return {"message": "Enrollment deleted"}

    # ------------------------------------------------------------------
    # Absences
    # ------------------------------------------------------------------

    def register_absence(self, enrollment_id: int, meeting_order: int) -> Enrollment:
        """
        Mark the enrollment absent from one meeting of its lab.

        The meeting's absent counter goes up by one. Registering the same
        absence twice is a conflict. Make-up meetings are added to the lab
        explicitly, not here.
        """
        enrollment = self.get_enrollment(enrollment_id)
        meeting = self._get_meeting(enrollment.lab, meeting_order)

        if self.repo.find_absence(enrollment, meeting):
            raise HTTPException(
                status_code=409,
                detail=f"Absence from meeting #{meeting_order} already registered",
            )

        self._write("register absence", self.repo.add_absence, enrollment, meeting)
        logger.info(
            f"📝 Enrollment {enrollment_id} absent from meeting #{meeting_order} of lab {enrollment.lab_id}"
        )
        return enrollment

    def cancel_absence(self, enrollment_id: int, meeting_order: int) -> Enrollment:
        enrollment = self.get_enrollment(enrollment_id)
        meeting = self._get_meeting(enrollment.lab, meeting_order)

        absence = self.repo.find_absence(enrollment, meeting)
        if not absence:
            raise HTTPException(status_code=404, detail="Absence not found")

        self._write("cancel absence", self.repo.remove_absence, enrollment, absence)
        return enrollment
