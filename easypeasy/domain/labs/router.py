"""Lab router - FastAPI endpoints for labs, meetings and the calendar"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Lab, Meeting
from ...shared.holidays import holiday_name
from .schemas import (
    CalendarEntry,
    LabCreate,
    LabResponse,
    LabStatus,
    LabUpdate,
    MeetingCreate,
    MeetingResponse,
    MeetingUpdate,
    MoveMeetingRequest,
)
from .service import LabService

router = APIRouter(prefix="/labs", tags=["Labs"])


def get_lab_service(db: Session = Depends(get_db)) -> LabService:
    """Dependency injection for LabService"""
    return LabService(db)


def meeting_response(meeting: Meeting) -> MeetingResponse:
    return MeetingResponse(
        id=meeting.id,
        order=meeting.order,
        date=meeting.date,
        status=meeting.status,
        presentCount=meeting.present_count,
        absentCount=meeting.absent_count,
        holidayName=holiday_name(meeting.date),
    )


def lab_response(lab: Lab) -> LabResponse:
    meetings = sorted(lab.meetings, key=lambda m: m.order)
    return LabResponse(
        id=lab.id,
        code=lab.code,
        venueId=lab.venue_id,
        venueName=lab.venue.name if lab.venue else None,
        labTypeId=lab.lab_type_id,
        labTypeCode=lab.lab_type.code if lab.lab_type else None,
        labTypeName=lab.lab_type.name if lab.lab_type else None,
        status=lab.status,
        startDate=lab.start_date,
        startTime=lab.start_time,
        endDate=lab.end_date,
        listPrice=lab.list_price,
        activityCost=lab.activity_cost,
        logisticsCost=lab.logistics_cost,
        version=lab.version,
        meetingCount=len(meetings),
        meetings=[meeting_response(m) for m in meetings],
        created_at=lab.created_at,
    )


# ============================================================================
# CALENDAR
# ============================================================================


@router.get("/calendar", response_model=list[CalendarEntry])
async def get_calendar(
    start: date = Query(..., description="First day, YYYY-MM-DD"),
    end: date = Query(..., description="Last day, YYYY-MM-DD"),
    service: LabService = Depends(get_lab_service),
):
    """Meetings of every lab in the range, flagged when they fall on a holiday"""
    return [
        CalendarEntry(
            labId=m.lab_id,
            labCode=m.lab.code,
            venueName=m.lab.venue.name if m.lab.venue else None,
            meetingId=m.id,
            order=m.order,
            date=m.date,
            status=m.status,
            startTime=m.lab.start_time,
            holidayName=holiday_name(m.date),
        )
        for m in service.get_calendar(start, end)
    ]


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=list[LabResponse])
async def get_labs(
    status: Optional[LabStatus] = Query(None),
    venue_id: Optional[int] = Query(None),
    service: LabService = Depends(get_lab_service),
):
    """Get all labs with their meetings"""
    return [lab_response(lab) for lab in service.get_labs(status, venue_id)]


@router.get("/{lab_id}", response_model=LabResponse)
async def get_lab(
    lab_id: int,
    service: LabService = Depends(get_lab_service),
):
    return lab_response(service.get_lab(lab_id))


@router.post("", response_model=LabResponse, status_code=201)
async def create_lab(
    data: LabCreate,
    service: LabService = Depends(get_lab_service),
):
    """Create a lab; its meetings and end date are generated from the lab type"""
    return lab_response(service.create_lab(data))


@router.patch("/{lab_id}", response_model=LabResponse)
async def update_lab(
    lab_id: int,
    data: LabUpdate,
    service: LabService = Depends(get_lab_service),
):
    return lab_response(service.update_lab(lab_id, data))


@router.delete("/{lab_id}")
async def delete_lab(
    lab_id: int,
    service: LabService = Depends(get_lab_service),
):
    """Delete a lab and all its meetings"""
    return service.delete_lab(lab_id)


@router.post("/{lab_id}/regenerate", response_model=LabResponse)
async def regenerate_lab(
    lab_id: int,
    version: Optional[int] = Query(None),
    service: LabService = Depends(get_lab_service),
):
    """Rebuild every meeting from the lab's start date and type"""
    return lab_response(service.regenerate_lab(lab_id, version))


# ============================================================================
# MEETINGS
# ============================================================================


@router.post("/{lab_id}/meetings/{order}/move", response_model=LabResponse)
async def move_meeting(
    lab_id: int,
    order: int,
    data: MoveMeetingRequest,
    service: LabService = Depends(get_lab_service),
):
    """Calendar drag-and-drop: move one meeting, later meetings shift with it"""
    return lab_response(service.move_meeting(lab_id, order, data.newDate, data.version))


@router.post("/{lab_id}/meetings", response_model=LabResponse, status_code=201)
async def add_meeting(
    lab_id: int,
    data: MeetingCreate,
    service: LabService = Depends(get_lab_service),
):
    return lab_response(service.add_meeting(lab_id, data))


@router.patch("/{lab_id}/meetings/{order}", response_model=LabResponse)
async def update_meeting(
    lab_id: int,
    order: int,
    data: MeetingUpdate,
    service: LabService = Depends(get_lab_service),
):
    """Update status or attendance of one meeting"""
    return lab_response(service.update_meeting(lab_id, order, data))


@router.delete("/{lab_id}/meetings/{order}", response_model=LabResponse)
async def delete_meeting(
    lab_id: int,
    order: int,
    version: Optional[int] = Query(None),
    service: LabService = Depends(get_lab_service),
):
    return lab_response(service.delete_meeting(lab_id, order, version))
