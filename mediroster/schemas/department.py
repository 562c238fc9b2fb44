from pydantic import BaseModel, Field, field_validator
from typing import Optional
from uuid import UUID
from datetime import datetime

class DepartmentBase(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None

class DepartmentCreate(DepartmentBase):
    @field_validator("name")
    @classmethod
    def _strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Department name is required")
        return v

class DepartmentResponse(DepartmentBase):
    id: UUID
    created_at: datetime

    class Config:
        from_attributes = True
