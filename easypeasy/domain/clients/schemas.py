"""Client domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import validate_email, validate_phone

ClientType = Literal["parent", "institutional"]
ClientStatus = Literal["lead", "active", "inactive"]


class ClientBase(BaseModel):
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    taxCode: Optional[str] = None
    companyName: Optional[str] = None
    vatNumber: Optional[str] = None
    numberOfChildren: Optional[int] = Field(None, ge=0)
    ageRange: Optional[str] = None
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

    @field_validator("taxCode")
    @classmethod
    def normalize_tax_code(cls, v):
        if v:
            return v.strip().upper()
        return v


class ClientCreate(ClientBase):
    """Schema for creating a new client"""

    clientType: ClientType
    status: ClientStatus = "lead"

    @model_validator(mode="after")
    def check_required_names(self):
        if self.clientType == "parent" and not (self.firstName and self.lastName):
            raise ValueError("Parent clients need a first and last name")
        if self.clientType == "institutional" and not self.companyName:
            raise ValueError("Institutional clients need a company name")
        return self


class ClientUpdate(ClientBase):
    """Schema for updating an existing client"""

    status: Optional[ClientStatus] = None


class ClientResponse(BaseModel):
    """Schema for client response"""

    id: int
    public_id: Optional[str] = None
    clientType: str
    displayName: str
    firstName: Optional[str]
    lastName: Optional[str]
    taxCode: Optional[str]
    companyName: Optional[str]
    vatNumber: Optional[str]
    numberOfChildren: Optional[int]
    ageRange: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    city: Optional[str]
    province: Optional[str]
    zipCode: Optional[str]
    status: str
    notes: Optional[str]
    isDeleted: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BatchDeleteRequest(BaseModel):
    """Schema for batch delete operation"""

    clientIds: list[int]
