"""Supplier domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email, validate_hex_color, validate_phone


class SupplierCreate(BaseModel):
    """Schema for creating a new supplier"""

    companyName: str = Field(..., min_length=1, max_length=255)
    vatNumber: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = Field(None, max_length=10)
    zipCode: Optional[str] = Field(None, max_length=10)
    notes: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v):
        if v:
            return validate_phone(v)
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        if v:
            return validate_email(v)
        return v


class SupplierUpdate(SupplierCreate):
    """Schema for updating an existing supplier"""

    companyName: Optional[str] = Field(None, min_length=1, max_length=255)


class VenueCreate(BaseModel):
    """Schema for adding a venue to a supplier"""

    name: str = Field(..., min_length=1, max_length=255)
    address: Optional[str] = None
    city: Optional[str] = None
    capacity: int = Field(0, ge=0)
    rentalCost: float = Field(0, ge=0)
    color: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("color")
    @classmethod
    def normalize_color(cls, v):
        return validate_hex_color(v)


class VenueUpdate(VenueCreate):
    """Schema for updating a venue"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    capacity: Optional[int] = Field(None, ge=0)
    rentalCost: Optional[float] = Field(None, ge=0)


class VenueResponse(BaseModel):
    """Schema for venue response"""

    id: int
    supplierId: int
    supplierName: Optional[str] = None
    name: str
    address: Optional[str]
    city: Optional[str]
    capacity: int
    rentalCost: float
    color: Optional[str]
    notes: Optional[str]

    class Config:
        from_attributes = True


class SupplierResponse(BaseModel):
    """Schema for supplier response"""

    id: int
    companyName: str
    vatNumber: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    city: Optional[str]
    province: Optional[str]
    zipCode: Optional[str]
    notes: Optional[str]
    isDeleted: bool = False
    venues: list[VenueResponse] = []
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
