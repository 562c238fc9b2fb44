from pydantic import BaseModel, Field, ValidationInfo, field_validator
from datetime import date, datetime, time
from typing import List, Literal, Optional
from uuid import UUID

from mediroster.core.utils import on_reference_date, sort_weekdays

Weekday = Literal["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
ConsultationMode = Literal["in-person", "online", "both"]
ScheduleStatus = Literal["active", "inactive"]

MIN_SLOT_DURATION = 10

class ScheduleCreate(BaseModel):
    """
    A schedule as submitted from the schedule form.

    Field order matters: validators read earlier fields from info.data.
    """
    doctor_id: UUID
    working_days: List[Weekday]
    start_time: time
    end_time: time
    slot_duration: int = 30
    max_patients_per_session: int = 10
    consultation_mode: ConsultationMode = "in-person"
    room_number: Optional[str] = Field(default=None, validate_default=True)
    valid_from: date
    valid_to: Optional[date] = None
    status: ScheduleStatus = "active"

    @field_validator("working_days")
    @classmethod
    def _at_least_one_day(cls, v):
        if not v:
            raise ValueError("Please select at least one working day")
        return sort_weekdays(v)

    @field_validator("end_time")
    @classmethod
    def _end_after_start(cls, v, info: ValidationInfo):
        start = info.data.get("start_time")
        if start is not None and on_reference_date(v) <= on_reference_date(start):
            raise ValueError("End time must be after start time")
        return v

    @field_validator("slot_duration")
    @classmethod
    def _min_slot_duration(cls, v):
        if v < MIN_SLOT_DURATION:
            raise ValueError(f"Slot duration must be at least {MIN_SLOT_DURATION} minutes")
        return v

    @field_validator("max_patients_per_session")
    @classmethod
    def _min_patients(cls, v):
        if v < 1:
            raise ValueError("Must allow at least 1 patient per session")
        return v

    @field_validator("room_number")
    @classmethod
    def _room_for_in_person(cls, v, info: ValidationInfo):
        if v is not None:
            v = v.strip() or None
        mode = info.data.get("consultation_mode")
        if mode in ("in-person", "both") and not v:
            raise ValueError("Room number is required for in-person consultations")
        return v

    @field_validator("valid_to")
    @classmethod
    def _valid_range(cls, v, info: ValidationInfo):
        start = info.data.get("valid_from")
        if v is not None and start is not None and v < start:
            raise ValueError("Valid to must be on or after valid from")
        return v

class ScheduleUpdate(BaseModel):
    doctor_id: Optional[UUID] = None
    working_days: Optional[List[Weekday]] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    slot_duration: Optional[int] = None
    max_patients_per_session: Optional[int] = None
    consultation_mode: Optional[ConsultationMode] = None
    room_number: Optional[str] = None
    valid_from: Optional[date] = None
    valid_to: Optional[date] = None
    status: Optional[ScheduleStatus] = None

class ScheduleDraft(BaseModel):
    # In-progress form state; every field may still be missing
    doctor_id: Optional[UUID] = None
    working_days: List[Weekday] = []
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    status: ScheduleStatus = "active"

class ScheduleResponse(BaseModel):
    id: UUID
    doctor_id: UUID
    working_days: List[str]
    start_time: time
    end_time: time
    slot_duration: int
    max_patients_per_session: int
    consultation_mode: str
    room_number: Optional[str]
    valid_from: date
    valid_to: Optional[date]
    status: str
    created_at: datetime

    class Config:
        from_attributes = True

class ConflictCheckRequest(BaseModel):
    draft: ScheduleDraft
    exclude_id: Optional[UUID] = None

class ConflictCheckResponse(BaseModel):
    has_conflict: bool
    conflicts: List[ScheduleResponse]

class ScheduleStats(BaseModel):
    total_schedules: int
    active_schedules: int
    inactive_schedules: int
    doctors_with_schedules: int
    leaves_marked: int

class TimeSlot(BaseModel):
    start_time: time
    end_time: time
    is_available: bool = True

class SlotPreviewRequest(BaseModel):
    start_time: time
    end_time: time
    slot_duration: int = Field(ge=MIN_SLOT_DURATION)
    max_patients_per_session: int = Field(default=1, ge=1)

class SlotPreviewResponse(BaseModel):
    slots: List[TimeSlot]
    total_slots: int
    total_capacity: int
    total_minutes: int

class SessionSlots(BaseModel):
    schedule_id: UUID
    consultation_mode: str
    room_number: Optional[str]
    max_patients_per_session: int
    slots: List[TimeSlot]

class DoctorSlotsResponse(BaseModel):
    doctor_id: UUID
    slot_date: date
    weekday: str
    on_leave: bool
    sessions: List[SessionSlots]
