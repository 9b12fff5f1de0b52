"""Enrollment domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

EnrollmentStatus = Literal["pending", "active", "completed", "expired"]


class EnrollmentCreate(BaseModel):
    """Schema for enrolling a client in a lab"""

    clientId: int
    labId: int
    childName: Optional[str] = Field(None, max_length=255)
    price: float = Field(0, ge=0)
    status: EnrollmentStatus = "pending"
    notes: Optional[str] = None


class EnrollmentUpdate(BaseModel):
    """Client and lab are fixed; enroll again to change them"""

    childName: Optional[str] = Field(None, max_length=255)
    price: Optional[float] = Field(None, ge=0)
    status: Optional[EnrollmentStatus] = None
    notes: Optional[str] = None


class AbsenceCreate(BaseModel):
    """Meeting of the enrolled lab, by its order"""

    meetingOrder: int = Field(..., ge=1)


class AbsenceResponse(BaseModel):
    id: int
    meetingId: int
    meetingOrder: int
    meetingDate: date

    class Config:
        from_attributes = True


class EnrollmentResponse(BaseModel):
    """Schema for enrollment response"""

    id: int
    clientId: int
    clientName: Optional[str] = None
    labId: int
    labCode: Optional[str] = None
    childName: Optional[str]
    price: float
    status: str
    notes: Optional[str]
    lessonsTotal: int
    absences: list[AbsenceResponse] = []
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
