from datetime import time
from typing import List

from mediroster.core.utils import add_minutes, on_reference_date
from mediroster.schemas.schedule import SlotPreviewResponse, TimeSlot

def generate_time_slots(start_time: time, end_time: time, slot_duration: int) -> List[TimeSlot]:
    """Split [start_time, end_time) into slots; a trailing partial slot is dropped."""
    if slot_duration <= 0:
        return []

    slots = []
    end = on_reference_date(end_time)
    current = start_time
    while on_reference_date(current) < end:
        slot_end = add_minutes(current, slot_duration)
        # add_minutes wraps at midnight; a wrapped slot can never fit
        if on_reference_date(slot_end) <= on_reference_date(current):
            break
        if on_reference_date(slot_end) > end:
            break
        slots.append(TimeSlot(start_time=current, end_time=slot_end))
        current = slot_end
    return slots

def preview_slots(
    start_time: time,
    end_time: time,
    slot_duration: int,
    max_patients_per_session: int,
) -> SlotPreviewResponse:
    slots = generate_time_slots(start_time, end_time, slot_duration)
    return SlotPreviewResponse(
        slots=slots,
        total_slots=len(slots),
        total_capacity=len(slots) * max_patients_per_session,
        total_minutes=len(slots) * slot_duration,
    )
