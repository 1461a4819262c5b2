"""Schedule service - Business logic for jobs and worker assignments"""

import logging
from datetime import date
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ...config import DEFAULT_WINDOW_DAYS
from ...shared.constants import JobStatus, TeamId
from ...shared.datekeys import format_date_key, is_valid_date_key, parse_date_key
from ...shared.exceptions import NotFoundError, StorageError, ValidationError
from ...shared.maps import build_maps_url, generate_id
from ...shared.validators import (
    optional_text,
    require_text,
    validate_date_key,
    validate_hours,
    validate_status,
    validate_team_id,
    validate_workers,
)
from ...storage.base import JSONStore
from ..recurring.repository import RecurringJobRepository
from .projection import project_recurring_jobs
from .repository import ScheduleRepository, default_window, ensure_slot, find_slot
from .schemas import AddressFields, Job, Schedule, TeamDaySlot

logger = logging.getLogger(__name__)

MAX_RANGE_DAYS = 366


def _chronological(schedule: Schedule) -> Schedule:
    """Order days by calendar date; keys that do not parse go last"""

    def sort_key(date_key: str):
        if is_valid_date_key(date_key):
            return (0, parse_date_key(date_key), date_key)
        return (1, date.min, date_key)

    return {date_key: schedule[date_key] for date_key in sorted(schedule, key=sort_key)}


class ScheduleService:
    """Service layer for the team schedule"""

    def __init__(self, store: JSONStore):
        self.repo = ScheduleRepository(store)
        self.recurring_repo = RecurringJobRepository(store)

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------

    def get_schedule(
        self,
        start: Optional[str] = None,
        days: Optional[int] = None,
        today: Optional[date] = None,
    ) -> Schedule:
        """
        Schedule snapshot including projected recurring jobs.

        With a range (start and/or days) only those days are returned, padded
        with empty slots. Without one, the whole stored schedule is returned
        padded with the default window from today. A failed or empty read
        falls back to empty slots rather than an error.
        """
        if start is not None:
            validate_date_key(start, "start")
        if days is not None and not 1 <= days <= MAX_RANGE_DAYS:
            raise ValidationError("days", f'"days" must be between 1 and {MAX_RANGE_DAYS}.')

        today_key = format_date_key(today or date.today())

        try:
            stored = self.repo.load()
        except StorageError as e:
            logger.error(f"❌ Error reading schedule, using default template: {e}")
            stored = {}
        if not stored:
            logger.info("Schedule not found in store, generating default template")

        if start is not None or days is not None:
            window = default_window(start or today_key, days or DEFAULT_WINDOW_DAYS)
            schedule = {date_key: stored.get(date_key, empty) for date_key, empty in window.items()}
        else:
            schedule = {**default_window(today_key, DEFAULT_WINDOW_DAYS), **stored}

        # A stored day may lack a team; absence reads as an empty slot
        for date_key in schedule:
            for team in TeamId:
                ensure_slot(schedule, date_key, team.value)

        try:
            rules = self.recurring_repo.load()
        except StorageError as e:
            logger.warning(f"⚠️ Recurring jobs unavailable, showing schedule without them: {e}")
            rules = []

        return _chronological(project_recurring_jobs(schedule, rules, list(schedule)))

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------

    def add_job(
        self,
        date_key: Any,
        team_id: Any,
        address: Union[AddressFields, dict, None],
        selected_workers: Optional[list] = None,
        time_interval: Optional[str] = None,
        expected_hours: Any = None,
    ) -> Job:
        """
        Add a job to a team's day.

        A non-empty selected_workers replaces the slot's assigned workers.
        Nothing is written if any field is invalid.
        """
        date_key = validate_date_key(date_key)
        team = validate_team_id(team_id)

        if isinstance(address, dict):
            try:
                address = AddressFields.model_validate(address)
            except PydanticValidationError:
                raise ValidationError("address", "Address must be an object of text fields.")
        if address is None:
            raise ValidationError("address", "Address must be an object.")

        street = require_text(address.street, "street")
        house_number = require_text(address.house_number, "house_number")
        status = validate_status(address.status) if address.status else JobStatus.PENDING
        if selected_workers is not None:
            selected_workers = validate_workers(selected_workers, "selected_workers")
        hours = validate_hours(expected_hours)

        job = Job(
            id=generate_id(),
            street=street,
            house_number=house_number,
            status=status,
            maps_url=build_maps_url(street, house_number),
            expected_hours=hours,
            client_name=optional_text(address.client_name) or None,
            notes=optional_text(address.notes) or None,
            time_interval=optional_text(time_interval) or None,
            recurring_id=optional_text(address.recurring_id) or None,
        )

        with self.repo.lock:
            schedule = self.repo.load()
            slot = ensure_slot(schedule, date_key, team.value)
            slot.addresses.append(job)
            if selected_workers:
                slot.assigned_workers = selected_workers
            self.repo.save(schedule, f"Add job: {job.house_number} {job.street}")

        logger.info(f"📥 Added job {job.id} for {team.value} on {date_key}")
        return job

    def cancel_job(self, date_key: Any, team_id: Any, job_id: Any) -> Job:
        """Mark a job cancelled; cancelling an already cancelled job writes nothing"""
        date_key, team, job_id = self._validate_reference(date_key, team_id, job_id)

        with self.repo.lock:
            schedule = self.repo.load()
            slot = self._get_slot(schedule, date_key, team)
            job = self._get_job(slot, job_id)
            if job.status == JobStatus.CANCELLED:
                logger.info(f"Job {job_id} already cancelled")
                return job
            job.status = JobStatus.CANCELLED
            self.repo.save(schedule, f"Cancel job {job_id}")

        logger.info(f"🚫 Cancelled job {job_id} for {team} on {date_key}")
        return job

    def delete_job(self, date_key: Any, team_id: Any, job_id: Any) -> Job:
        """Permanently remove a job"""
        date_key, team, job_id = self._validate_reference(date_key, team_id, job_id)

        with self.repo.lock:
            schedule = self.repo.load()
            slot = self._get_slot(schedule, date_key, team)
            job = self._get_job(slot, job_id)
            slot.addresses.remove(job)
            self.repo.save(schedule, f"Delete job {job_id}")

        logger.info(f"🗑️ Deleted job {job_id} for {team} on {date_key}")
        return job

    # ------------------------------------------------------------------
    # Worker assignments
    # ------------------------------------------------------------------

    def update_workers(self, date_key: Any, team_id: Any, workers: Any) -> list[str]:
        """Replace the assigned workers of a slot, creating it if absent"""
        date_key = validate_date_key(date_key)
        team = validate_team_id(team_id)
        workers = validate_workers(workers)

        with self.repo.lock:
            schedule = self.repo.load()
            slot = ensure_slot(schedule, date_key, team.value)
            slot.assigned_workers = workers
            self.repo.save(schedule, f"Update workers for {team.value} on {date_key}")

        return workers

    def clear_assignments(self, dates: Any) -> int:
        """
        Clear both teams' workers for every listed day in one write.

        Days missing from the schedule are skipped. Returns the number of days
        cleared.
        """
        if not isinstance(dates, list) or not dates:
            raise ValidationError("dates", '"dates" must be a non-empty array of DD-MM-YYYY strings.')
        for date_key in dates:
            validate_date_key(date_key, "dates")

        with self.repo.lock:
            schedule = self.repo.load()
            cleared = 0
            for date_key in dict.fromkeys(dates):
                day = schedule.get(date_key)
                if day is None:
                    continue
                for slot in day.values():
                    slot.assigned_workers = []
                cleared += 1
            if cleared:
                self.repo.save(schedule, f"Clear assignments for {len(dates)} days")

        logger.info(f"🧹 Cleared assignments on {cleared} of {len(dates)} days")
        return cleared

    # ------------------------------------------------------------------
    # Window maintenance
    # ------------------------------------------------------------------

    def extend_window(self, num_days: int, today: Optional[date] = None) -> int:
        """Persist empty slots for the next num_days days, keeping existing days"""
        start_key = format_date_key(today or date.today())

        with self.repo.lock:
            schedule = self.repo.load()
            missing = {
                date_key: day
                for date_key, day in default_window(start_key, num_days).items()
                if date_key not in schedule
            }
            if missing:
                schedule.update(missing)
                self.repo.save(_chronological(schedule), f"Pre-populate {len(missing)} days")

        return len(missing)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_reference(date_key: Any, team_id: Any, job_id: Any) -> tuple[str, str, str]:
        date_key = validate_date_key(date_key)
        team = validate_team_id(team_id)
        job_id = require_text(job_id, "job_id")
        return date_key, team.value, job_id

    @staticmethod
    def _get_slot(schedule: Schedule, date_key: str, team: str) -> TeamDaySlot:
        slot = find_slot(schedule, date_key, team)
        if slot is None:
            raise NotFoundError(f"No schedule entry found for {date_key} / {team}")
        return slot

    @staticmethod
    def _get_job(slot: TeamDaySlot, job_id: str) -> Job:
        job = next((job for job in slot.addresses if job.id == job_id), None)
        if job is None:
            raise NotFoundError(f'Job with id "{job_id}" not found')
        return job
