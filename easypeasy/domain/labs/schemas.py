"""Lab domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_time

LabStatus = Literal["planned", "active", "paused", "completed", "cancelled"]
MeetingStatus = Literal["scheduled", "completed", "cancelled"]


class LabCreate(BaseModel):
    """Schema for creating a new lab; meetings are generated from the type"""

    venueId: int
    labTypeId: int
    startDate: date
    startTime: str = "10:00"
    status: LabStatus = "planned"
    listPrice: float = Field(0, ge=0)
    activityCost: float = Field(0, ge=0)
    logisticsCost: float = Field(0, ge=0)

    @field_validator("startTime")
    @classmethod
    def normalize_start_time(cls, v):
        return validate_time(v)


class LabUpdate(BaseModel):
    """
    Schema for updating an existing lab.

    A new startDate or labTypeId regenerates every meeting. `version` is the
    lab version the caller last saw; when given it must still be current.
    """

    venueId: Optional[int] = None
    labTypeId: Optional[int] = None
    startDate: Optional[date] = None
    startTime: Optional[str] = None
    status: Optional[LabStatus] = None
    listPrice: Optional[float] = Field(None, ge=0)
    activityCost: Optional[float] = Field(None, ge=0)
    logisticsCost: Optional[float] = Field(None, ge=0)
    version: Optional[int] = None

    @field_validator("startTime")
    @classmethod
    def normalize_start_time(cls, v):
        return validate_time(v)


class MoveMeetingRequest(BaseModel):
    """Drag-and-drop move of one meeting; later meetings follow"""

    newDate: date
    version: Optional[int] = None


class MeetingCreate(BaseModel):
    """Schema for appending a meeting to a lab"""

    date: date
    status: MeetingStatus = "scheduled"
    version: Optional[int] = None


class MeetingUpdate(BaseModel):
    """Status and attendance only; dates change through the move endpoint"""

    status: Optional[MeetingStatus] = None
    presentCount: Optional[int] = Field(None, ge=0)
    absentCount: Optional[int] = Field(None, ge=0)


class MeetingResponse(BaseModel):
    """Schema for meeting response"""

    id: int
    order: int
    date: date
    status: str
    presentCount: int
    absentCount: int
    holidayName: Optional[str] = None

    class Config:
        from_attributes = True


class LabResponse(BaseModel):
    """Schema for lab response"""

    id: int
    code: Optional[str]
    venueId: int
    venueName: Optional[str] = None
    labTypeId: int
    labTypeCode: Optional[str] = None
    labTypeName: Optional[str] = None
    status: str
    startDate: date
    startTime: Optional[str]
    endDate: Optional[date]
    listPrice: float
    activityCost: float
    logisticsCost: float
    version: int
    meetingCount: int
    meetings: list[MeetingResponse] = []
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CalendarEntry(BaseModel):
    """One meeting in the cross-lab calendar view"""

    labId: int
    labCode: Optional[str]
    venueName: Optional[str]
    meetingId: int
    order: int
    date: date
    status: str
    startTime: Optional[str]
    holidayName: Optional[str] = None
