from datetime import date, datetime, time, timedelta
from typing import Iterable, List

# Time-of-day values are compared on this fixed date.
REFERENCE_DATE = date(2000, 1, 1)

WEEKDAY_TOKENS = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]

def on_reference_date(value: time) -> datetime:
    return datetime.combine(REFERENCE_DATE, value.replace(tzinfo=None))

def add_minutes(value: time, minutes: int) -> time:
    return (on_reference_date(value) + timedelta(minutes=minutes)).time()

def weekday_token(day: date) -> str:
    # date.weekday() is 0=Monday..6=Sunday, same order as WEEKDAY_TOKENS
    return WEEKDAY_TOKENS[day.weekday()]

def sort_weekdays(days: Iterable[str]) -> List[str]:
    unique = set(days)
    return [token for token in WEEKDAY_TOKENS if token in unique]

def format_working_days(days: Iterable[str]) -> str:
    ordered = sort_weekdays(days)
    if not ordered:
        return "No days selected"
    return ", ".join(token[:3].capitalize() for token in ordered)
