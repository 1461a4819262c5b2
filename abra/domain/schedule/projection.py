"""
Recurring job projection.

Recurring rules are never expanded into stored jobs. Every schedule read
projects them onto the requested days instead, so pausing a rule, editing it
or cancelling one occurrence (an exception date) changes all later reads
without any backfill.

An occurrence is due on a date when the rule is not paused, the date falls on
the same weekday as the rule's start date, is not before it, is a whole number
of intervals (7 or 14 days) after it and is not listed in the rule's
exceptions. At most one instance per rule and date appears in a snapshot: a job
already carrying the rule's id on that day (stored or projected) suppresses a
new one.
"""

import logging
from collections.abc import Iterable

from pydantic import ValidationError as PydanticValidationError

from ...shared.constants import INTERVAL_DAYS, JobStatus
from ...shared.datekeys import day_of_week, days_between, is_valid_date_key
from ...shared.maps import build_maps_url
from ..recurring.schemas import RecurringRule
from .repository import ensure_slot
from .schemas import Job, Schedule

logger = logging.getLogger(__name__)


def instance_id(rule_id: str, date_key: str) -> str:
    return f"{rule_id}_{date_key}"


def is_occurrence(rule: RecurringRule, date_key: str) -> bool:
    """Whether the rule is due on date_key"""
    if rule.paused:
        return False
    if day_of_week(date_key) != day_of_week(rule.start_date):
        return False

    diff_days = days_between(rule.start_date, date_key)
    if diff_days < 0:
        return False
    if diff_days % INTERVAL_DAYS[rule.frequency] != 0:
        return False
    return date_key not in rule.exceptions


def build_instance(rule: RecurringRule, date_key: str) -> Job:
    """Virtual job for one occurrence of a rule"""
    return Job(
        id=instance_id(rule.id, date_key),
        street=rule.street,
        house_number=rule.house_number,
        status=JobStatus.PENDING,
        maps_url=build_maps_url(rule.street, rule.house_number),
        expected_hours=rule.expected_hours,
        client_name=rule.client_name or None,
        notes=rule.notes or None,
        time_interval=rule.time_interval or None,
        recurring_id=rule.id,
        is_recurring=True,
        frequency=rule.frequency,
    )


def copy_schedule(schedule: Schedule) -> Schedule:
    return {
        date_key: {team: slot.model_copy(deep=True) for team, slot in teams.items()}
        for date_key, teams in schedule.items()
    }


def project_recurring_jobs(
    schedule: Schedule, rules: Iterable[RecurringRule], date_keys: Iterable[str]
) -> Schedule:
    """
    Merge recurring instances into a copy of schedule for the given days.

    Neither schedule nor rules are modified, and nothing is persisted.
    """
    projected = copy_schedule(schedule)
    date_keys = [key for key in date_keys if is_valid_date_key(key)]

    for rule in rules:
        if rule.paused:
            continue
        if not is_valid_date_key(rule.start_date):
            logger.warning(f"⚠️ Skipping recurring job {rule.id}: invalid start_date {rule.start_date!r}")
            continue
        try:
            # Stored rules that failed validation on read are not projected
            rule = RecurringRule.model_validate(rule.model_dump())
        except PydanticValidationError as e:
            logger.warning(f"⚠️ Skipping recurring job {rule.id}: {e.error_count()} invalid field(s)")
            continue

        for date_key in date_keys:
            if not is_occurrence(rule, date_key):
                continue

            slot = ensure_slot(projected, date_key, rule.team_id.value)
            if any(job.recurring_id == rule.id for job in slot.addresses):
                continue
            slot.addresses.append(build_instance(rule, date_key))

    return projected
