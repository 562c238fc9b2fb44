from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from mediroster.db.models import Doctor, Schedule

class ScheduleRepository:
    """Storage boundary for schedules; the overlap check reads through it."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, schedule_id: UUID) -> Optional[Schedule]:
        return await self.session.get(Schedule, schedule_id)

    async def list_by_doctor(self, doctor_id: UUID) -> List[Schedule]:
        stmt = (
            select(Schedule)
            .where(Schedule.doctor_id == doctor_id)
            .order_by(Schedule.start_time, Schedule.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search(
        self,
        doctor_id: Optional[UUID] = None,
        department_id: Optional[UUID] = None,
        status: Optional[str] = None,
    ) -> List[Schedule]:
        stmt = select(Schedule)
        if doctor_id:
            stmt = stmt.where(Schedule.doctor_id == doctor_id)
        if department_id:
            stmt = stmt.join(Doctor, Doctor.id == Schedule.doctor_id).where(
                Doctor.department_id == department_id
            )
        if status:
            stmt = stmt.where(Schedule.status == status)
        stmt = stmt.order_by(Schedule.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def lock_doctor(self, doctor_id: UUID) -> Optional[Doctor]:
        # Serialises schedule writers of one doctor until commit
        stmt = select(Doctor).where(Doctor.id == doctor_id).with_for_update()
        result = await self.session.execute(stmt)
        return result.scalars().first()

    def add(self, schedule: Schedule) -> None:
        self.session.add(schedule)

    async def delete(self, schedule: Schedule) -> None:
        await self.session.delete(schedule)
