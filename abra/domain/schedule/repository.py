"""Schedule repository - load/save of the schedule document"""

import logging
from typing import Any, Optional

from ...shared.constants import SCHEDULE_KEY, TeamId
from ...shared.datekeys import date_keys_from, parse_date_key
from ...shared.exceptions import StorageError
from ...shared.records import decode_record
from ...storage.base import JSONStore
from ...storage.locks import key_lock
from .schemas import Job, Schedule, TeamDaySlot

logger = logging.getLogger(__name__)

# Stand-ins for required fields missing from a malformed stored job
JOB_PLACEHOLDERS = {"id": "", "street": "", "house_number": ""}


def decode_slot(raw: Any) -> TeamDaySlot:
    """
    Decode a stored team slot.

    Older data stored a team's day as a bare list of jobs with no worker
    assignment; that shape is read as {assigned_workers: [], addresses: <list>}.
    Jobs are decoded one by one so a single malformed job never hides the rest.
    """
    if isinstance(raw, list):
        raw = {"assigned_workers": [], "addresses": raw}
    if not isinstance(raw, dict):
        raise StorageError(f"Malformed team slot in schedule: expected list or object, got {type(raw).__name__}")

    addresses = raw.get("addresses") or []
    if not isinstance(addresses, list):
        raise StorageError("Malformed team slot in schedule: addresses must be a list")
    workers = raw.get("assigned_workers")

    slot = {
        **raw,
        "assigned_workers": workers if isinstance(workers, list) else [],
        "addresses": [decode_record(Job, job, JOB_PLACEHOLDERS) for job in addresses],
    }
    return decode_record(TeamDaySlot, slot, {})


def decode_schedule(raw: Any) -> Schedule:
    if not isinstance(raw, dict):
        raise StorageError("Malformed schedule: expected an object keyed by date")

    schedule: Schedule = {}
    for date_key, teams in raw.items():
        if not isinstance(teams, dict):
            raise StorageError(f"Malformed schedule entry for {date_key}")
        schedule[date_key] = {team: decode_slot(slot) for team, slot in teams.items()}
    return schedule


def encode_schedule(schedule: Schedule) -> dict:
    return {
        date_key: {team: slot.to_json() for team, slot in teams.items()}
        for date_key, teams in schedule.items()
    }


def empty_day() -> dict[str, TeamDaySlot]:
    return {team.value: TeamDaySlot() for team in TeamId}


def ensure_slot(schedule: Schedule, date_key: str, team_id: str) -> TeamDaySlot:
    """Return the slot for date/team, creating the day (both teams) or slot if absent"""
    day = schedule.get(date_key)
    if day is None:
        day = schedule[date_key] = empty_day()
    slot = day.get(team_id)
    if slot is None:
        slot = day[team_id] = TeamDaySlot()
    return slot


def find_slot(schedule: Schedule, date_key: str, team_id: str) -> Optional[TeamDaySlot]:
    return schedule.get(date_key, {}).get(team_id)


def default_window(start_key: str, num_days: int) -> Schedule:
    """Empty slots for both teams over num_days consecutive days from start_key"""
    start = parse_date_key(start_key)
    return {date_key: empty_day() for date_key in date_keys_from(start, num_days)}


class ScheduleRepository:
    """Read-modify-write access to the schedule document"""

    def __init__(self, store: JSONStore):
        self.store = store
        self.lock = key_lock(SCHEDULE_KEY)

    def load(self) -> Schedule:
        return decode_schedule(self.store.read(SCHEDULE_KEY))

    def save(self, schedule: Schedule, description: str) -> None:
        self.store.write(SCHEDULE_KEY, encode_schedule(schedule), description)
