from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from uuid import UUID

from mediroster.api.deps import get_current_user, require_admin
from mediroster.db.session import get_session
from mediroster.schemas.department import DepartmentCreate, DepartmentResponse
from mediroster.services.department_service import DepartmentService

router = APIRouter()

async def get_department_service(session: AsyncSession = Depends(get_session)) -> DepartmentService:
    return DepartmentService(session)

@router.post("/", response_model=DepartmentResponse, status_code=201, dependencies=[Depends(require_admin)])
async def create_department(
    data: DepartmentCreate,
    service: DepartmentService = Depends(get_department_service)
):
    return await service.create_department(data)

@router.get("/", response_model=List[DepartmentResponse], dependencies=[Depends(get_current_user)])
async def read_departments(service: DepartmentService = Depends(get_department_service)):
    return await service.get_departments()

@router.get("/{department_id}", response_model=DepartmentResponse, dependencies=[Depends(get_current_user)])
async def read_department(
    department_id: UUID,
    service: DepartmentService = Depends(get_department_service)
):
    return await service.get_department(department_id)
