from datetime import date, time
from uuid import uuid4

import pytest

from mediroster.db.models import Department, Schedule
from mediroster.services.department_service import DepartmentService
from mediroster.services.doctor_service import DoctorService

API = "/api/v1"

@pytest.mark.asyncio
async def test_departments(client, admin_headers, receptionist_headers):
    response = await client.post(
        f"{API}/departments/", json={"name": "Neurology", "description": "Brain and nerves"}, headers=admin_headers
    )
    assert response.status_code == 201
    department_id = response.json()["id"]

    duplicate = await client.post(f"{API}/departments/", json={"name": "Neurology"}, headers=admin_headers)
    assert duplicate.status_code == 409

    forbidden = await client.post(f"{API}/departments/", json={"name": "Pediatrics"}, headers=receptionist_headers)
    assert forbidden.status_code == 403

    listing = await client.get(f"{API}/departments/", headers=receptionist_headers)
    assert [d["name"] for d in listing.json()] == ["Neurology"]

    single = await client.get(f"{API}/departments/{department_id}", headers=receptionist_headers)
    assert single.json()["description"] == "Brain and nerves"

    missing = await client.get(f"{API}/departments/{uuid4()}", headers=receptionist_headers)
    assert missing.status_code == 404

@pytest.mark.asyncio
async def test_created_at_is_timezone_aware(session):
    department = Department(name="Oncology")
    assert department.created_at.tzinfo is not None

    session.add(department)
    await session.commit()
    await session.refresh(department)
    assert department.created_at is not None

@pytest.mark.asyncio
async def test_blank_department_name_is_rejected(client, admin_headers):
    response = await client.post(f"{API}/departments/", json={"name": "   "}, headers=admin_headers)
    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"] == ["body", "name"]

    listing = await client.get(f"{API}/departments/", headers=admin_headers)
    assert listing.json() == []

    padded = await client.post(f"{API}/departments/", json={"name": "  Neurology "}, headers=admin_headers)
    assert padded.json()["name"] == "Neurology"

@pytest.mark.asyncio
async def test_duplicate_department_caught_on_commit(client, admin_headers, department, monkeypatch):
    async def not_found(self, name):
        return None

    # Another request inserted the same name after our lookup
    monkeypatch.setattr(DepartmentService, "_find_by_name", not_found)
    response = await client.post(f"{API}/departments/", json={"name": "Cardiology"}, headers=admin_headers)
    assert response.status_code == 409

    listing = await client.get(f"{API}/departments/", headers=admin_headers)
    assert [d["name"] for d in listing.json()] == ["Cardiology"]

@pytest.mark.asyncio
async def test_register_doctor(client, admin_headers, department):
    body = {"name": "Dr. Lisa Wang", "department_id": str(department.id), "specialization": "Pediatric Cardiology"}
    response = await client.post(f"{API}/doctors/", json=body, headers=admin_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["is_active"] is True
    assert data["department_id"] == str(department.id)

    body["department_id"] = str(uuid4())
    response = await client.post(f"{API}/doctors/", json=body, headers=admin_headers)
    assert response.status_code == 404

@pytest.mark.asyncio
async def test_blank_doctor_name_is_rejected(client, admin_headers, department):
    body = {"name": " ", "department_id": str(department.id)}
    response = await client.post(f"{API}/doctors/", json=body, headers=admin_headers)
    assert response.status_code == 422

    listing = await client.get(f"{API}/doctors/", headers=admin_headers)
    assert listing.json() == []

@pytest.mark.asyncio
async def test_list_and_search_doctors(client, admin_headers, doctor):
    await client.post(f"{API}/doctors/", json={"name": "Dr. Michael Chen", "specialization": "Neurosurgery"}, headers=admin_headers)

    response = await client.get(f"{API}/doctors/", headers=admin_headers)
    assert [d["name"] for d in response.json()] == ["Dr. Michael Chen", "Dr. Sarah Johnson"]

    response = await client.get(f"{API}/doctors/", params={"search": "neuro"}, headers=admin_headers)
    assert [d["name"] for d in response.json()] == ["Dr. Michael Chen"]

    response = await client.get(f"{API}/doctors/", params={"department_id": str(doctor.department_id)}, headers=admin_headers)
    assert [d["name"] for d in response.json()] == ["Dr. Sarah Johnson"]

    response = await client.get(f"{API}/doctors/{doctor.id}", headers=admin_headers)
    assert response.json()["email"] == "sarah.johnson@hospital.com"

@pytest.mark.asyncio
async def test_doctor_schedules(client, admin_headers, doctor, morning_schedule):
    response = await client.get(f"{API}/doctors/{doctor.id}/schedules", headers=admin_headers)
    assert [s["id"] for s in response.json()] == [str(morning_schedule.id)]

    response = await client.get(f"{API}/doctors/{uuid4()}/schedules", headers=admin_headers)
    assert response.status_code == 404

@pytest.mark.asyncio
async def test_leaves(client, admin_headers, doctor):
    body = {"leave_date": "2025-03-10", "note": "Medical conference"}
    response = await client.post(f"{API}/doctors/{doctor.id}/leaves", json=body, headers=admin_headers)
    assert response.status_code == 201
    leave_id = response.json()["id"]

    duplicate = await client.post(f"{API}/doctors/{doctor.id}/leaves", json=body, headers=admin_headers)
    assert duplicate.status_code == 409

    listing = await client.get(f"{API}/doctors/{doctor.id}/leaves", headers=admin_headers)
    assert [l["leave_date"] for l in listing.json()] == ["2025-03-10"]

    deleted = await client.delete(f"{API}/doctors/leaves/{leave_id}", headers=admin_headers)
    assert deleted.status_code == 200
    listing = await client.get(f"{API}/doctors/{doctor.id}/leaves", headers=admin_headers)
    assert listing.json() == []

@pytest.mark.asyncio
async def test_duplicate_leave_caught_on_commit(client, admin_headers, doctor, monkeypatch):
    body = {"leave_date": "2025-03-10"}
    first = await client.post(f"{API}/doctors/{doctor.id}/leaves", json=body, headers=admin_headers)
    assert first.status_code == 201

    async def not_found(self, doctor_id, leave_date):
        return None

    monkeypatch.setattr(DoctorService, "_find_leave", not_found)
    second = await client.post(f"{API}/doctors/{doctor.id}/leaves", json=body, headers=admin_headers)
    assert second.status_code == 409

    listing = await client.get(f"{API}/doctors/{doctor.id}/leaves", headers=admin_headers)
    assert len(listing.json()) == 1

@pytest.mark.asyncio
async def test_doctor_slots_for_date(client, admin_headers, doctor, morning_schedule, session):
    # 2025-03-10 is a Monday
    response = await client.get(f"{API}/doctors/{doctor.id}/slots", params={"date": "2025-03-10"}, headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["weekday"] == "monday"
    assert data["on_leave"] is False
    assert len(data["sessions"]) == 1
    assert data["sessions"][0]["room_number"] == "C-101"
    assert len(data["sessions"][0]["slots"]) == 6

    tuesday = await client.get(f"{API}/doctors/{doctor.id}/slots", params={"date": "2025-03-11"}, headers=admin_headers)
    assert tuesday.json()["sessions"] == []

    before_validity = await client.get(f"{API}/doctors/{doctor.id}/slots", params={"date": "2024-12-30"}, headers=admin_headers)
    assert before_validity.json()["sessions"] == []

    await client.post(f"{API}/doctors/{doctor.id}/leaves", json={"leave_date": "2025-03-10"}, headers=admin_headers)
    on_leave = await client.get(f"{API}/doctors/{doctor.id}/slots", params={"date": "2025-03-10"}, headers=admin_headers)
    assert on_leave.json()["on_leave"] is True
    assert on_leave.json()["sessions"] == []

@pytest.mark.asyncio
async def test_doctor_slots_skip_expired_and_inactive(client, admin_headers, doctor, session):
    session.add(Schedule(
        doctor_id=doctor.id,
        working_days=["friday"],
        start_time=time(9),
        end_time=time(10),
        consultation_mode="online",
        valid_from=date(2025, 1, 1),
        valid_to=date(2025, 1, 31),
    ))
    session.add(Schedule(
        doctor_id=doctor.id,
        working_days=["friday"],
        start_time=time(14),
        end_time=time(15),
        consultation_mode="online",
        valid_from=date(2025, 1, 1),
        status="inactive",
    ))
    await session.commit()

    # 2025-01-31 is a Friday, last valid day of the first block
    response = await client.get(f"{API}/doctors/{doctor.id}/slots", params={"date": "2025-01-31"}, headers=admin_headers)
    assert len(response.json()["sessions"]) == 1

    response = await client.get(f"{API}/doctors/{doctor.id}/slots", params={"date": "2025-02-07"}, headers=admin_headers)
    assert response.json()["sessions"] == []

@pytest.mark.asyncio
async def test_doctor_slots_bad_date(client, admin_headers, doctor):
    response = await client.get(f"{API}/doctors/{doctor.id}/slots", params={"date": "10/03/2025"}, headers=admin_headers)
    assert response.status_code == 400
