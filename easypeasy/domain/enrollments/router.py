"""Enrollment router - FastAPI endpoints for enrollments and absences"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Enrollment
from .schemas import (
    AbsenceCreate,
    AbsenceResponse,
    EnrollmentCreate,
    EnrollmentResponse,
    EnrollmentStatus,
    EnrollmentUpdate,
)
from .service import EnrollmentService

router = APIRouter(tags=["Enrollments"])


def get_enrollment_service(db: Session = Depends(get_db)) -> EnrollmentService:
    """Dependency injection for EnrollmentService"""
    return EnrollmentService(db)


def to_response(e: Enrollment) -> EnrollmentResponse:
    absences = sorted(e.absences, key=lambda a: a.meeting.order)
    return EnrollmentResponse(
        id=e.id,
        clientId=e.client_id,
        clientName=e.client.display_name if e.client else None,
        labId=e.lab_id,
        labCode=e.lab.code if e.lab else None,
        childName=e.child_name,
        price=e.price,
        status=e.status,
        notes=e.notes,
        lessonsTotal=len(e.lab.meetings) if e.lab else 0,
        absences=[
            AbsenceResponse(
                id=a.id,
                meetingId=a.meeting_id,
                meetingOrder=a.meeting.order,
                meetingDate=a.meeting.date,
            )
            for a in absences
        ],
        created_at=e.created_at,
    )


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("/enrollments", response_model=list[EnrollmentResponse])
async def get_enrollments(
    client_id: Optional[int] = Query(None),
    lab_id: Optional[int] = Query(None),
    status: Optional[EnrollmentStatus] = Query(None),
    service: EnrollmentService = Depends(get_enrollment_service),
):
    return [to_response(e) for e in service.get_enrollments(client_id, lab_id, status)]


@router.get("/clients/{client_id}/enrollments", response_model=list[EnrollmentResponse])
async def get_client_enrollments(
    client_id: int,
    service: EnrollmentService = Depends(get_enrollment_service),
):
    """Every lab a client (or their children) is enrolled in"""
    return [to_response(e) for e in service.get_client_enrollments(client_id)]


@router.get("/enrollments/{enrollment_id}", response_model=EnrollmentResponse)
async def get_enrollment(
    enrollment_id: int,
    service: EnrollmentService = Depends(get_enrollment_service),
):
    return to_response(service.get_enrollment(enrollment_id))


@router.post("/enrollments", response_model=EnrollmentResponse, status_code=201)
async def create_enrollment(
    data: EnrollmentCreate,
    service: EnrollmentService = Depends(get_enrollment_service),
):
    return to_response(service.create_enrollment(data))


@router.patch("/enrollments/{enrollment_id}", response_model=EnrollmentResponse)
async def update_enrollment(
    enrollment_id: int,
    data: EnrollmentUpdate,
    service: EnrollmentService = Depends(get_enrollment_service),
):
    return to_response(service.update_enrollment(enrollment_id, data))


@router.delete("/enrollments/{enrollment_id}")
async def delete_enrollment(
    enrollment_id: int,
    service: EnrollmentService = Depends(get_enrollment_service),
):
    """Delete an enrollment; its absences no longer count on the meetings"""
    return service.delete_enrollment(enrollment_id)


# ============================================================================
# ABSENCES
# ============================================================================


@router.post("/enrollments/{enrollment_id}/absences", response_model=EnrollmentResponse, status_code=201)
async def register_absence(
    enrollment_id: int,
    data: AbsenceCreate,
    service: EnrollmentService = Depends(get_enrollment_service),
):
    return to_response(service.register_absence(enrollment_id, data.meetingOrder))


@router.delete("/enrollments/{enrollment_id}/absences/{meeting_order}", response_model=EnrollmentResponse)
async def cancel_absence(
    enrollment_id: int,
    meeting_order: int,
    service: EnrollmentService = Depends(get_enrollment_service),
):
    return to_response(service.cancel_absence(enrollment_id, meeting_order))
