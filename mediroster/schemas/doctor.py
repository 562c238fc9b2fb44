from pydantic import BaseModel, Field, field_validator
from typing import Optional
from uuid import UUID
from datetime import datetime

class DoctorBase(BaseModel):
    name: str = Field(min_length=1)
    department_id: Optional[UUID] = None
    specialization: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

class DoctorCreate(DoctorBase):
    @field_validator("name")
    @classmethod
    def _strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Doctor name is required")
        return v

class DoctorResponse(DoctorBase):
    id: UUID
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
