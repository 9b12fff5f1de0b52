"""Enrollment repository - Database operations for enrollments and absences"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Absence, Client, Enrollment, Lab, Meeting


class EnrollmentRepository:
    """Repository for enrollment database operations"""

    @staticmethod
    def get_enrollments(
        db: Session,
        client_id: Optional[int] = None,
        lab_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[Enrollment]:
        """Get enrollments with client, lab and absences loaded"""
        query = db.query(Enrollment).options(
            joinedload(Enrollment.client),
            joinedload(Enrollment.lab),
            selectinload(Enrollment.absences).joinedload(Absence.meeting),
        )

        if client_id:
            query = query.filter(Enrollment.client_id == client_id)

        if lab_id:
            query = query.filter(Enrollment.lab_id == lab_id)

        if status:
            query = query.filter(Enrollment.status == status)

        return query.order_by(Enrollment.created_at.desc(), Enrollment.id.desc()).all()

    @staticmethod
    def get_enrollment_by_id(db: Session, enrollment_id: int) -> Optional[Enrollment]:
        return db.query(Enrollment).filter(Enrollment.id == enrollment_id).first()

    @staticmethod
    def get_client(db: Session, client_id: int) -> Optional[Client]:
        return db.query(Client).filter(Client.id == client_id).first()

    @staticmethod
    def get_lab(db: Session, lab_id: int) -> Optional[Lab]:
        return db.query(Lab).filter(Lab.id == lab_id).first()

    @staticmethod
    def create_enrollment(db: Session, client: Client, lab: Lab, **enrollment_data) -> Enrollment:
        # Attach through the relationships: Lab owns its enrollments
        enrollment = Enrollment(client=client, lab=lab, **enrollment_data)
        db.add(enrollment)
        db.commit()
        db.refresh(enrollment)
        return enrollment

    @staticmethod
    def update_enrollment(db: Session, enrollment: Enrollment, **updates) -> Enrollment:
        """Update an enrollment with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(enrollment, key):
                setattr(enrollment, key, value)

        db.commit()
        db.refresh(enrollment)
        return enrollment

    @staticmethod
    def find_absence(enrollment: Enrollment, meeting: Meeting) -> Optional[Absence]:
        return next((a for a in enrollment.absences if a.meeting_id == meeting.id), None)

    @staticmethod
    def add_absence(db: Session, enrollment: Enrollment, meeting: Meeting) -> Absence:
        """Record the absence and count it on the meeting, in one commit"""
        absence = Absence(enrollment=enrollment, meeting=meeting)
        meeting.absent_count = (meeting.absent_count or 0) + 1
        db.commit()
        db.refresh(enrollment)
        return absence

    @staticmethod
    def remove_absence(db: Session, enrollment: Enrollment, absence: Absence) -> None:
        meeting = absence.meeting
        meeting.absent_count = max((meeting.absent_count or 0) - 1, 0)
        enrollment.absences.remove(absence)
        db.commit()
        db.refresh(enrollment)

    @staticmethod
    def delete_enrollment(db: Session, enrollment: Enrollment) -> None:
        """Delete the enrollment; its absences stop counting on their meetings"""
        for absence in enrollment.absences:
            absence.meeting.absent_count = max((absence.meeting.absent_count or 0) - 1, 0)
        db.delete(enrollment)
        db.commit()
