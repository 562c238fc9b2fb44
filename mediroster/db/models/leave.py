from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import UniqueConstraint
from typing import Optional, TYPE_CHECKING
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from .doctor import Doctor

class Leave(SQLModel, table=True):
    __tablename__ = "leaves"
    __table_args__ = (UniqueConstraint("doctor_id", "leave_date", name="uq_leave_doctor_date"),)
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    doctor_id: UUID = Field(foreign_key="doctors.id", index=True)
    leave_date: date
    note: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    doctor: "Doctor" = Relationship(back_populates="leaves")
