from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from uuid import UUID

from mediroster.api.deps import get_current_user, require_admin
from mediroster.db.session import get_session
from mediroster.schemas.doctor import DoctorCreate, DoctorResponse
from mediroster.schemas.leave import LeaveCreate, LeaveResponse
from mediroster.schemas.schedule import DoctorSlotsResponse, ScheduleResponse
from mediroster.services.doctor_service import DoctorService
from mediroster.services.schedule_service import ScheduleService

router = APIRouter()

async def get_doctor_service(session: AsyncSession = Depends(get_session)) -> DoctorService:
    return DoctorService(session)

@router.post("/", response_model=DoctorResponse, status_code=201, dependencies=[Depends(require_admin)])
async def create_doctor(
    data: DoctorCreate,
    service: DoctorService = Depends(get_doctor_service)
):
    return await service.create_doctor(data)

@router.get("/", response_model=List[DoctorResponse], dependencies=[Depends(get_current_user)])
async def read_doctors(
    department_id: Optional[UUID] = None,
    search: Optional[str] = None,
    service: DoctorService = Depends(get_doctor_service)
):
    return await service.get_doctors(department_id, search)

@router.delete("/leaves/{leave_id}", dependencies=[Depends(require_admin)])
async def delete_leave(
    leave_id: UUID,
    service: DoctorService = Depends(get_doctor_service)
):
    return await service.delete_leave(leave_id)

@router.get("/{doctor_id}", response_model=DoctorResponse, dependencies=[Depends(get_current_user)])
async def read_doctor(
    doctor_id: UUID,
    service: DoctorService = Depends(get_doctor_service)
):
    return await service.get_doctor(doctor_id)

@router.get("/{doctor_id}/schedules", response_model=List[ScheduleResponse], dependencies=[Depends(get_current_user)])
async def read_doctor_schedules(
    doctor_id: UUID,
    session: AsyncSession = Depends(get_session)
):
    await DoctorService(session).get_doctor(doctor_id)
    return await ScheduleService(session).list_schedules(doctor_id=doctor_id)

@router.get("/{doctor_id}/slots", response_model=DoctorSlotsResponse, dependencies=[Depends(get_current_user)])
async def get_doctor_slots(
    doctor_id: UUID,
    date: str, # YYYY-MM-DD
    session: AsyncSession = Depends(get_session)
):
    try:
        query_date = datetime.strptime(date, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")

    return await ScheduleService(session).get_doctor_slots(doctor_id, query_date)

@router.get("/{doctor_id}/leaves", response_model=List[LeaveResponse], dependencies=[Depends(get_current_user)])
async def read_leaves(
    doctor_id: UUID,
    service: DoctorService = Depends(get_doctor_service)
):
    return await service.get_leaves(doctor_id)

@router.post("/{doctor_id}/leaves", response_model=LeaveResponse, status_code=201, dependencies=[Depends(require_admin)])
async def add_leave(
    doctor_id: UUID,
    data: LeaveCreate,
    service: DoctorService = Depends(get_doctor_service)
):
    return await service.add_leave(doctor_id, data)
