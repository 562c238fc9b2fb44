"""
Schedule overlap detection.

Two weekly schedules conflict when they belong to the same doctor, the
existing one is active, their working days share at least one weekday and
their time ranges intersect. Time ranges are half-open, so a schedule that
starts exactly when another ends does not conflict with it.
"""

from datetime import time
from typing import Iterable, List, Optional, Sequence, TypeVar
from uuid import UUID

from mediroster.core.utils import on_reference_date

T = TypeVar("T")

def times_overlap(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    return (
        on_reference_date(start_a) < on_reference_date(end_b)
        and on_reference_date(end_a) > on_reference_date(start_b)
    )

def share_working_day(days_a: Iterable[str], days_b: Iterable[str]) -> bool:
    return not set(days_a).isdisjoint(days_b)

def check_overlaps(draft, existing: Sequence[T], exclude_id: Optional[UUID] = None) -> List[T]:
    """
    Return the existing schedules that conflict with the draft.

    Args:
        draft: anything exposing doctor_id, working_days, start_time and
            end_time (a ScheduleDraft, ScheduleCreate or Schedule)
        existing: schedules to compare against, usually the doctor's own
        exclude_id: id of the schedule being edited, never reported

    Returns:
        The conflicting schedules in input order. An incomplete draft
        (no doctor, start or end time) has nothing to conflict with.
    """
    if not draft.doctor_id or draft.start_time is None or draft.end_time is None:
        return []

    conflicts = []
    for schedule in existing:
        if exclude_id is not None and schedule.id == exclude_id:
            continue
        if schedule.doctor_id != draft.doctor_id:
            continue
        if schedule.status != "active":
            continue
        if not share_working_day(schedule.working_days, draft.working_days or []):
            continue
        if times_overlap(draft.start_time, draft.end_time, schedule.start_time, schedule.end_time):
            conflicts.append(schedule)
    return conflicts
