from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import or_, select

from mediroster.core.logger import get_logger
from mediroster.db.models import Department, Doctor, Leave
from mediroster.schemas.doctor import DoctorCreate
from mediroster.schemas.leave import LeaveCreate

logger = get_logger("doctors")

class DoctorService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_doctor(self, data: DoctorCreate) -> Doctor:
        if data.department_id:
            department = await self.session.get(Department, data.department_id)
            if not department:
                raise HTTPException(status_code=404, detail="Department not found")

        doctor = Doctor(**data.model_dump())
        self.session.add(doctor)
        await self.session.commit()
        await self.session.refresh(doctor)
        logger.info(f"Registered doctor {doctor.name} ({doctor.id})")
        return doctor

    async def get_doctors(self, department_id: Optional[UUID] = None, search: Optional[str] = None) -> List[Doctor]:
        query = select(Doctor)
        if department_id:
            query = query.where(Doctor.department_id == department_id)
        if search:
            term = f"%{search.strip()}%"
            query = query.where(or_(Doctor.name.ilike(term), Doctor.specialization.ilike(term)))
        result = await self.session.execute(query.order_by(Doctor.name))
        return result.scalars().all()

    async def get_doctor(self, doctor_id: UUID) -> Doctor:
        doctor = await self.session.get(Doctor, doctor_id)
        if not doctor:
            raise HTTPException(status_code=404, detail="Doctor not found")
        return doctor

    async def _find_leave(self, doctor_id: UUID, leave_date: date) -> Optional[Leave]:
        stmt = select(Leave).where(Leave.doctor_id == doctor_id, Leave.leave_date == leave_date)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def add_leave(self, doctor_id: UUID, data: LeaveCreate) -> Leave:
        await self.get_doctor(doctor_id)
        if await self._find_leave(doctor_id, data.leave_date):
            raise HTTPException(status_code=409, detail="Leave already marked for this date")

        leave = Leave(doctor_id=doctor_id, leave_date=data.leave_date, note=data.note)
        self.session.add(leave)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            logger.warning(f"Duplicate leave for doctor {doctor_id} on {data.leave_date} rejected on commit")
            raise HTTPException(status_code=409, detail="Leave already marked for this date")
        await self.session.refresh(leave)
        logger.info(f"Marked leave for doctor {doctor_id} on {leave.leave_date}")
        return leave

    async def get_leaves(self, doctor_id: UUID) -> List[Leave]:
        await self.get_doctor(doctor_id)
        stmt = select(Leave).where(Leave.doctor_id == doctor_id).order_by(Leave.leave_date)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def delete_leave(self, leave_id: UUID) -> dict:
        leave = await self.session.get(Leave, leave_id)
        if not leave:
            raise HTTPException(status_code=404, detail="Leave not found")
        await self.session.delete(leave)
        await self.session.commit()
        return {"message": "Leave deleted successfully"}
