from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, timezone
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from .department import Department
    from .schedule import Schedule
    from .leave import Leave

class Doctor(SQLModel, table=True):
    __tablename__ = "doctors"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    department_id: Optional[UUID] = Field(default=None, foreign_key="departments.id", index=True)
    name: str
    specialization: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    department: Optional["Department"] = Relationship(back_populates="doctors")
    schedules: List["Schedule"] = Relationship(back_populates="doctor")
    leaves: List["Leave"] = Relationship(back_populates="doctor")
