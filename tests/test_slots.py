from datetime import time

from mediroster.services.slots import generate_time_slots, preview_slots

def test_slots_split_the_session_evenly():
    slots = generate_time_slots(time(9), time(11), 30)
    assert [(s.start_time, s.end_time) for s in slots] == [
        (time(9), time(9, 30)),
        (time(9, 30), time(10)),
        (time(10), time(10, 30)),
        (time(10, 30), time(11)),
    ]
    assert all(s.is_available for s in slots)

def test_trailing_partial_slot_is_dropped():
    slots = generate_time_slots(time(9), time(10), 45)
    assert len(slots) == 1
    assert slots[0].end_time == time(9, 45)

def test_no_slots_when_duration_exceeds_session():
    assert generate_time_slots(time(9), time(9, 20), 30) == []

def test_no_slots_for_inverted_range():
    assert generate_time_slots(time(12), time(9), 15) == []

def test_session_ending_at_midnight_edge():
    slots = generate_time_slots(time(23, 0), time(23, 59), 20)
    assert [s.start_time for s in slots] == [time(23, 0), time(23, 20)]

def test_preview_totals():
    preview = preview_slots(time(10), time(14), 20, 3)
    assert preview.total_slots == 12
    assert preview.total_capacity == 36
    assert preview.total_minutes == 240
