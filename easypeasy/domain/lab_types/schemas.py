"""Lab type domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_lab_type_code


class LabTypeCreate(BaseModel):
    """Schema for creating a new lab type"""

    name: str = Field(..., min_length=1, max_length=255)
    code: str
    meetingCount: int = Field(0, ge=0)
    notes: Optional[str] = None

    @field_validator("code")
    @classmethod
    def validate_code(cls, v):
        return validate_lab_type_code(v)


class LabTypeUpdate(BaseModel):
    """Schema for updating an existing lab type"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    code: Optional[str] = None
    meetingCount: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None

    @field_validator("code")
    @classmethod
    def validate_code(cls, v):
        if v is not None:
            return validate_lab_type_code(v)
        return v


class LabTypeResponse(BaseModel):
    """Schema for lab type response"""

    id: int
    name: str
    code: str
    meetingCount: int
    notes: Optional[str] = None
    labCount: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
