from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Literal, Optional, Union
from uuid import UUID

from mediroster.api.deps import get_current_user, require_admin
from mediroster.db.session import get_session
from mediroster.schemas.schedule import (
    ConflictCheckRequest,
    ConflictCheckResponse,
    ScheduleCreate,
    ScheduleResponse,
    ScheduleStats,
    ScheduleStatus,
    ScheduleUpdate,
    SlotPreviewRequest,
    SlotPreviewResponse,
    Weekday,
)
from mediroster.services.schedule_service import ScheduleService
from mediroster.services.slots import preview_slots

router = APIRouter()

async def get_schedule_service(session: AsyncSession = Depends(get_session)) -> ScheduleService:
    return ScheduleService(session)

@router.get("/", response_model=List[ScheduleResponse], dependencies=[Depends(get_current_user)])
async def read_schedules(
    doctor_id: Union[UUID, Literal["all"], None] = None,
    department_id: Union[UUID, Literal["all"], None] = None,
    day_of_week: Union[Weekday, Literal["all"], None] = None,
    status: Union[ScheduleStatus, Literal["all"], None] = None,
    service: ScheduleService = Depends(get_schedule_service)
):
    # "all" is what the filter bar sends for an unset filter
    def selected(value):
        return None if value == "all" else value

    return await service.list_schedules(
        doctor_id=selected(doctor_id),
        department_id=selected(department_id),
        day_of_week=selected(day_of_week),
        status=selected(status),
    )

@router.post("/", response_model=ScheduleResponse, status_code=201, dependencies=[Depends(require_admin)])
async def create_schedule(
    data: ScheduleCreate,
    service: ScheduleService = Depends(get_schedule_service)
):
    return await service.create_schedule(data)

@router.post("/check", response_model=ConflictCheckResponse, dependencies=[Depends(get_current_user)])
async def check_schedule_conflicts(
    request: ConflictCheckRequest,
    service: ScheduleService = Depends(get_schedule_service)
):
    conflicts = await service.check_conflicts(request.draft, request.exclude_id)
    return ConflictCheckResponse(
        has_conflict=bool(conflicts),
        conflicts=[ScheduleResponse.model_validate(s) for s in conflicts],
    )

@router.post("/preview-slots", response_model=SlotPreviewResponse, dependencies=[Depends(get_current_user)])
async def preview_schedule_slots(request: SlotPreviewRequest):
    return preview_slots(
        request.start_time,
        request.end_time,
        request.slot_duration,
        request.max_patients_per_session,
    )

@router.get("/stats", response_model=ScheduleStats, dependencies=[Depends(get_current_user)])
async def read_schedule_stats(service: ScheduleService = Depends(get_schedule_service)):
    return await service.get_stats()

@router.get("/{schedule_id}", response_model=ScheduleResponse, dependencies=[Depends(get_current_user)])
async def read_schedule(
    schedule_id: UUID,
    service: ScheduleService = Depends(get_schedule_service)
):
    return await service.get_schedule(schedule_id)

@router.patch("/{schedule_id}", response_model=ScheduleResponse, dependencies=[Depends(require_admin)])
async def update_schedule(
    schedule_id: UUID,
    schedule_update: ScheduleUpdate,
    service: ScheduleService = Depends(get_schedule_service)
):
    return await service.update_schedule(schedule_id, schedule_update)

@router.post("/{schedule_id}/deactivate", response_model=ScheduleResponse, dependencies=[Depends(require_admin)])
async def deactivate_schedule(
    schedule_id: UUID,
    service: ScheduleService = Depends(get_schedule_service)
):
    return await service.deactivate_schedule(schedule_id)

@router.post("/{schedule_id}/activate", response_model=ScheduleResponse, dependencies=[Depends(require_admin)])
async def activate_schedule(
    schedule_id: UUID,
    service: ScheduleService = Depends(get_schedule_service)
):
    return await service.activate_schedule(schedule_id)

@router.delete("/{schedule_id}", dependencies=[Depends(require_admin)])
async def delete_schedule(
    schedule_id: UUID,
    service: ScheduleService = Depends(get_schedule_service)
):
    return await service.delete_schedule(schedule_id)
