from sqlmodel import SQLModel
from .department import Department
from .doctor import Doctor
from .schedule import Schedule
from .leave import Leave
from .user import User

__all__ = [
    "SQLModel",
    "Department",
    "Doctor",
    "Schedule",
    "Leave",
    "User",
]
