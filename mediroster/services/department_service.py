from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from mediroster.core.logger import get_logger
from mediroster.db.models import Department
from mediroster.schemas.department import DepartmentCreate

logger = get_logger("departments")

class DepartmentService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _find_by_name(self, name: str) -> Optional[Department]:
        result = await self.session.execute(select(Department).where(Department.name == name))
        return result.scalars().first()

    async def create_department(self, data: DepartmentCreate) -> Department:
        if await self._find_by_name(data.name):
            raise HTTPException(status_code=409, detail="Department already exists")

        department = Department(name=data.name, description=data.description)
        self.session.add(department)
        try:
            await self.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent insert of the same name
            await self.session.rollback()
            logger.warning(f"Duplicate department {data.name} rejected on commit")
            raise HTTPException(status_code=409, detail="Department already exists")
        await self.session.refresh(department)
        logger.info(f"Created department {department.name}")
        return department

    async def get_departments(self) -> List[Department]:
        result = await self.session.execute(select(Department).order_by(Department.name))
        return result.scalars().all()

    async def get_department(self, department_id: UUID) -> Department:
        department = await self.session.get(Department, department_id)
        if not department:
            raise HTTPException(status_code=404, detail="Department not found")
        return department
