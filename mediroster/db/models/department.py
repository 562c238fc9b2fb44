from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, timezone
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from .doctor import Doctor

class Department(SQLModel, table=True):
    __tablename__ = "departments"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(unique=True, index=True)
    description: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    doctors: List["Doctor"] = Relationship(back_populates="department")
