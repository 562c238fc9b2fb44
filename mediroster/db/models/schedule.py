from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import JSON, Column
from typing import Optional, List, TYPE_CHECKING
from datetime import date, datetime, time, timezone
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from .doctor import Doctor

class Schedule(SQLModel, table=True):
    __tablename__ = "schedules"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    doctor_id: UUID = Field(foreign_key="doctors.id", index=True)
    working_days: List[str] = Field(default=[], sa_column=Column(JSON)) # monday..sunday
    start_time: time
    end_time: time
    slot_duration: int = Field(default=30) # minutes
    max_patients_per_session: int = Field(default=10)
    consultation_mode: str = Field(default="in-person") # in-person, online, both
    room_number: Optional[str] = None
    valid_from: date
    valid_to: Optional[date] = None # open-ended when missing
    status: str = Field(default="active") # active, inactive
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    doctor: "Doctor" = Relationship(back_populates="schedules")

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    def is_valid_on(self, day: date) -> bool:
        if day < self.valid_from:
            return False
        return self.valid_to is None or day <= self.valid_to
