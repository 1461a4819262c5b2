"""Shared validation utilities"""

import math
from typing import Any, Optional

from .constants import WORKER_ROSTER, Frequency, JobStatus, TeamId
from .datekeys import DATE_KEY_FORMAT, is_valid_date_key
from .exceptions import ValidationError


def validate_date_key(value: Any, field: str = "date") -> str:
    """
    Validate a DD-MM-YYYY date key.

    Raises:
        ValidationError: If the key is malformed or not a calendar date
    """
    if not is_valid_date_key(value):
        raise ValidationError(
            field, f'Invalid or missing "{field}" field. Must be in {DATE_KEY_FORMAT} format.'
        )
    return value


def validate_team_id(value: Any, field: str = "team_id") -> TeamId:
    try:
        return TeamId(value)
    except ValueError:
        choices = " or ".join(f'"{team.value}"' for team in TeamId)
        raise ValidationError(field, f'Invalid or missing "{field}" field. Must be {choices}.')


def validate_workers(workers: Any, field: str = "assigned_workers") -> list[str]:
    """
    Validate worker names against the roster.

    Order and duplicates are kept as given.

    Raises:
        ValidationError: If workers is not a list or names someone outside the roster
    """
    if not isinstance(workers, list):
        raise ValidationError(field, f'"{field}" must be an array of worker names.')
    for worker in workers:
        if worker not in WORKER_ROSTER:
            raise ValidationError(
                field,
                f"Invalid worker name: {worker}. Must be one of: {', '.join(WORKER_ROSTER)}",
            )
    return list(workers)


def validate_frequency(value: Any, field: str = "frequency") -> Frequency:
    try:
        return Frequency(value)
    except ValueError:
        raise ValidationError(field, f'"{field}" must be "weekly" or "fortnightly".')


def validate_status(value: Any, field: str = "status") -> JobStatus:
    try:
        return JobStatus(value)
    except ValueError:
        allowed = ", ".join(status.value for status in JobStatus)
        raise ValidationError(field, f'Invalid status "{value}". Must be one of: {allowed}')


def require_text(value: Any, field: str) -> str:
    """Return the stripped string, rejecting missing or blank values"""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, f'"{field}" is required and must be a non-empty string.')
    return value.strip()


def optional_text(value: Optional[str]) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def validate_hours(value: Any, field: str = "expected_hours") -> float:
    """Expected hours: a non-negative number, 0 when absent"""
    if value is None or value == "":
        return 0.0
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise ValidationError(field, f'"{field}" must be a number.')
    if not math.isfinite(hours) or hours < 0:
        raise ValidationError(field, f'"{field}" must be zero or greater.')
    return hours


def stored_hours(value: Any) -> float:
    """
    Expected hours read back from storage.

    Older records may hold negative, non-numeric or non-finite values; those
    read as 0 so one record never makes a whole document unreadable.
    """
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(hours) or hours < 0:
        return 0.0
    return hours
