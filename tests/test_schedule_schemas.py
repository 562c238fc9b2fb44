from datetime import time
from uuid import uuid4

import pytest
from pydantic import ValidationError

from mediroster.schemas.schedule import ScheduleCreate

def payload(**overrides):
    data = {
        "doctor_id": uuid4(),
        "working_days": ["friday", "monday", "friday"],
        "start_time": "10:00",
        "end_time": "14:00",
        "slot_duration": 15,
        "max_patients_per_session": 4,
        "consultation_mode": "in-person",
        "room_number": " N-205 ",
        "valid_from": "2025-01-01",
    }
    data.update(overrides)
    return data

def error_fields(exc_info):
    return {error["loc"][0] for error in exc_info.value.errors()}

def test_valid_schedule_is_normalised():
    schedule = ScheduleCreate(**payload())
    assert schedule.working_days == ["monday", "friday"]
    assert schedule.start_time == time(10)
    assert schedule.room_number == "N-205"
    assert schedule.valid_to is None
    assert schedule.status == "active"

def test_working_days_required():
    with pytest.raises(ValidationError) as exc_info:
        ScheduleCreate(**payload(working_days=[]))
    assert error_fields(exc_info) == {"working_days"}
    assert "at least one working day" in str(exc_info.value)

def test_unknown_weekday_rejected():
    with pytest.raises(ValidationError) as exc_info:
        ScheduleCreate(**payload(working_days=["funday"]))
    assert error_fields(exc_info) == {"working_days"}

@pytest.mark.parametrize("end", ["10:00", "09:30"])
def test_end_time_must_follow_start_time(end):
    with pytest.raises(ValidationError) as exc_info:
        ScheduleCreate(**payload(end_time=end))
    assert error_fields(exc_info) == {"end_time"}
    assert "End time must be after start time" in str(exc_info.value)

def test_slot_duration_minimum():
    with pytest.raises(ValidationError) as exc_info:
        ScheduleCreate(**payload(slot_duration=5))
    assert error_fields(exc_info) == {"slot_duration"}
    assert ScheduleCreate(**payload(slot_duration=10)).slot_duration == 10

def test_max_patients_minimum():
    with pytest.raises(ValidationError) as exc_info:
        ScheduleCreate(**payload(max_patients_per_session=0))
    assert error_fields(exc_info) == {"max_patients_per_session"}

@pytest.mark.parametrize("mode", ["in-person", "both"])
def test_room_required_for_in_person_modes(mode):
    with pytest.raises(ValidationError) as exc_info:
        ScheduleCreate(**payload(consultation_mode=mode, room_number="  "))
    assert error_fields(exc_info) == {"room_number"}

    data = payload(consultation_mode=mode)
    del data["room_number"]
    with pytest.raises(ValidationError):
        ScheduleCreate(**data)

def test_online_schedule_needs_no_room():
    data = payload(consultation_mode="online")
    del data["room_number"]
    assert ScheduleCreate(**data).room_number is None

def test_valid_from_required():
    data = payload()
    del data["valid_from"]
    with pytest.raises(ValidationError) as exc_info:
        ScheduleCreate(**data)
    assert error_fields(exc_info) == {"valid_from"}

def test_valid_to_not_before_valid_from():
    with pytest.raises(ValidationError) as exc_info:
        ScheduleCreate(**payload(valid_to="2024-12-31"))
    assert error_fields(exc_info) == {"valid_to"}
    assert ScheduleCreate(**payload(valid_to="2025-01-01")).valid_to.isoformat() == "2025-01-01"

def test_status_values():
    assert ScheduleCreate(**payload(status="inactive")).status == "inactive"
    with pytest.raises(ValidationError):
        ScheduleCreate(**payload(status="temporary"))
