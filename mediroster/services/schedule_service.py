from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import func, select

from mediroster.core.logger import get_logger
from mediroster.core.utils import format_working_days, weekday_token
from mediroster.db.models import Doctor, Leave, Schedule
from mediroster.db.repository import ScheduleRepository
from mediroster.schemas.schedule import (
    DoctorSlotsResponse,
    ScheduleCreate,
    ScheduleResponse,
    ScheduleStats,
    ScheduleUpdate,
    SessionSlots,
)
from mediroster.services.overlap import check_overlaps
from mediroster.services.slots import generate_time_slots

logger = get_logger("schedules")

SCHEDULE_FIELDS = set(ScheduleCreate.model_fields)

def conflict_error(conflicts: List[Schedule]) -> HTTPException:
    return HTTPException(
        status_code=409,
        detail={
            "message": "Schedule overlaps with existing active schedules for this doctor",
            "conflicts": [
                ScheduleResponse.model_validate(s).model_dump(mode="json") for s in conflicts
            ],
        },
    )

class ScheduleService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = ScheduleRepository(session)

    async def get_schedule(self, schedule_id: UUID) -> Schedule:
        schedule = await self.repository.get(schedule_id)
        if not schedule:
            raise HTTPException(status_code=404, detail="Schedule not found")
        return schedule

    async def check_conflicts(self, draft, exclude_id: Optional[UUID] = None) -> List[Schedule]:
        if not draft.doctor_id:
            return []
        existing = await self.repository.list_by_doctor(draft.doctor_id)
        return check_overlaps(draft, existing, exclude_id)

    async def _lock_doctor(self, doctor_id: UUID) -> Doctor:
        doctor = await self.repository.lock_doctor(doctor_id)
        if not doctor:
            raise HTTPException(status_code=404, detail="Doctor not found")
        return doctor

    async def _ensure_no_conflicts(self, draft, exclude_id: Optional[UUID] = None) -> None:
        conflicts = await self.check_conflicts(draft, exclude_id)
        if conflicts:
            logger.warning(
                f"Rejected schedule for doctor {draft.doctor_id} "
                f"({format_working_days(draft.working_days)} {draft.start_time}-{draft.end_time}): "
                f"{len(conflicts)} conflict(s)"
            )
            raise conflict_error(conflicts)

    async def create_schedule(self, data: ScheduleCreate) -> Schedule:
        # Row lock is held until commit so concurrent writers re-check after us
        await self._lock_doctor(data.doctor_id)
        await self._ensure_no_conflicts(data)

        schedule = Schedule(**data.model_dump())
        self.repository.add(schedule)
        await self.session.commit()
        await self.session.refresh(schedule)
        logger.info(
            f"Created schedule {schedule.id} for doctor {schedule.doctor_id} "
            f"({format_working_days(schedule.working_days)} {schedule.start_time}-{schedule.end_time})"
        )
        return schedule

    async def update_schedule(self, schedule_id: UUID, schedule_update: ScheduleUpdate) -> Schedule:
        schedule = await self.get_schedule(schedule_id)

        merged = schedule.model_dump(include=SCHEDULE_FIELDS)
        merged.update(schedule_update.model_dump(exclude_unset=True))
        try:
            data = ScheduleCreate.model_validate(merged)
        except ValidationError as e:
            errors = e.errors(include_url=False, include_context=False)
            for error in errors:
                error["loc"] = ("body",) + tuple(error["loc"])
            raise RequestValidationError(errors)

        await self._lock_doctor(data.doctor_id)
        await self._ensure_no_conflicts(data, exclude_id=schedule.id)

        for key, value in data.model_dump().items():
            setattr(schedule, key, value)
        self.repository.add(schedule)
        await self.session.commit()
        await self.session.refresh(schedule)
        logger.info(f"Updated schedule {schedule.id}")
        return schedule

    async def _set_status(self, schedule_id: UUID, status: str) -> Schedule:
        schedule = await self.get_schedule(schedule_id)
        if status == "active" and schedule.status != "active":
            # Re-entering the active set, so it must not collide with anything
            await self._lock_doctor(schedule.doctor_id)
            await self._ensure_no_conflicts(schedule, exclude_id=schedule.id)

        schedule.status = status
        self.repository.add(schedule)
        await self.session.commit()
        await self.session.refresh(schedule)
        logger.info(f"Schedule {schedule.id} set to {status}")
        return schedule

    async def deactivate_schedule(self, schedule_id: UUID) -> Schedule:
        return await self._set_status(schedule_id, "inactive")

    async def activate_schedule(self, schedule_id: UUID) -> Schedule:
        return await self._set_status(schedule_id, "active")

    async def delete_schedule(self, schedule_id: UUID) -> dict:
        schedule = await self.get_schedule(schedule_id)
        await self.repository.delete(schedule)
        await self.session.commit()
        logger.info(f"Deleted schedule {schedule_id}")
        return {"message": "Schedule deleted successfully"}

    async def list_schedules(
        self,
        doctor_id: Optional[UUID] = None,
        department_id: Optional[UUID] = None,
        day_of_week: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Schedule]:
        schedules = await self.repository.search(
            doctor_id=doctor_id, department_id=department_id, status=status
        )
        if day_of_week:
            # working_days is a JSON column, filtered here to stay portable
            schedules = [s for s in schedules if day_of_week in s.working_days]
        return schedules

    async def get_stats(self) -> ScheduleStats:
        schedules = await self.repository.search()
        active = sum(1 for s in schedules if s.is_active)
        leaves = await self.session.execute(select(func.count()).select_from(Leave))
        return ScheduleStats(
            total_schedules=len(schedules),
            active_schedules=active,
            inactive_schedules=len(schedules) - active,
            doctors_with_schedules=len({s.doctor_id for s in schedules}),
            leaves_marked=leaves.scalar_one(),
        )

    async def get_doctor_slots(self, doctor_id: UUID, day: date) -> DoctorSlotsResponse:
        doctor = await self.session.get(Doctor, doctor_id)
        if not doctor:
            raise HTTPException(status_code=404, detail="Doctor not found")

        weekday = weekday_token(day)
        stmt = select(Leave).where(Leave.doctor_id == doctor_id, Leave.leave_date == day)
        result = await self.session.execute(stmt)
        on_leave = result.scalars().first() is not None

        sessions = []
        if not on_leave:
            for schedule in await self.repository.list_by_doctor(doctor_id):
                if not schedule.is_active or weekday not in schedule.working_days:
                    continue
                if not schedule.is_valid_on(day):
                    continue
                sessions.append(SessionSlots(
                    schedule_id=schedule.id,
                    consultation_mode=schedule.consultation_mode,
                    room_number=schedule.room_number,
                    max_patients_per_session=schedule.max_patients_per_session,
                    slots=generate_time_slots(
                        schedule.start_time, schedule.end_time, schedule.slot_duration
                    ),
                ))

        return DoctorSlotsResponse(
            doctor_id=doctor_id,
            slot_date=day,
            weekday=weekday,
            on_leave=on_leave,
            sessions=sessions,
        )

