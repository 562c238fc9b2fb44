from pydantic import BaseModel
from typing import Optional
from uuid import UUID
from datetime import date, datetime

class LeaveCreate(BaseModel):
    leave_date: date
    note: Optional[str] = None

class LeaveResponse(LeaveCreate):
    id: UUID
    doctor_id: UUID
    created_at: datetime

    class Config:
        from_attributes = True
