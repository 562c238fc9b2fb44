from datetime import date, time

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from mediroster.core.security import create_access_token
from mediroster.db.models import Department, Doctor, Schedule
from mediroster.db.session import get_session, init_db
from mediroster.main import app
from mediroster.services.user_service import UserService

@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    await init_db(engine)
    yield engine
    await engine.dispose()

@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session

@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

async def _headers_for(session, username, role):
    user = await UserService(session).create_user(
        username=username, password="secret-pass", name=username.title(), role=role
    )
    token = create_access_token(data={"sub": str(user.id), "role": user.role})
    return {"Authorization": f"Bearer {token}"}

@pytest_asyncio.fixture
async def admin_headers(session):
    return await _headers_for(session, "admin1", "admin")

@pytest_asyncio.fixture
async def receptionist_headers(session):
    return await _headers_for(session, "desk1", "receptionist")

@pytest_asyncio.fixture
async def department(session):
    department = Department(name="Cardiology")
    session.add(department)
    await session.commit()
    await session.refresh(department)
    return department

@pytest_asyncio.fixture
async def doctor(session, department):
    doctor = Doctor(
        name="Dr. Sarah Johnson",
        department_id=department.id,
        specialization="Interventional Cardiology",
        email="sarah.johnson@hospital.com",
    )
    session.add(doctor)
    await session.commit()
    await session.refresh(doctor)
    return doctor

@pytest_asyncio.fixture
async def morning_schedule(session, doctor):
    """Active Monday/Wednesday 09:00-12:00 block."""
    schedule = Schedule(
        doctor_id=doctor.id,
        working_days=["monday", "wednesday"],
        start_time=time(9, 0),
        end_time=time(12, 0),
        slot_duration=30,
        max_patients_per_session=15,
        consultation_mode="both",
        room_number="C-101",
        valid_from=date(2025, 1, 1),
    )
    session.add(schedule)
    await session.commit()
    await session.refresh(schedule)
    return schedule

@pytest.fixture
def make_payload():
    def schedule_payload(doctor_id, **overrides):
        payload = {
            "doctor_id": str(doctor_id),
            "working_days": ["monday", "wednesday"],
            "start_time": "09:00",
            "end_time": "12:00",
            "slot_duration": 30,
            "max_patients_per_session": 10,
            "consultation_mode": "in-person",
            "room_number": "C-101",
            "valid_from": "2025-01-01",
            "status": "active",
        }
        payload.update(overrides)
        return payload

    return schedule_payload
