"""Recurring job service - Business logic for recurring rules"""

import logging
from datetime import datetime, timezone
from typing import Any

from ...shared.exceptions import NotFoundError, ValidationError
from ...shared.maps import generate_id
from ...shared.validators import (
    optional_text,
    require_text,
    validate_date_key,
    validate_frequency,
    validate_hours,
    validate_team_id,
)
from ...storage.base import JSONStore
from .repository import RecurringJobRepository
from .schemas import RecurringJobCreate, RecurringJobUpdate, RecurringRule

logger = logging.getLogger(__name__)


def _validate_paused(value: Any, field: str = "paused") -> bool:
    if not isinstance(value, bool):
        raise ValidationError(field, f'"{field}" must be true or false.')
    return value


# Patch field -> validator applied to a supplied value
_PATCH_VALIDATORS = {
    "client_name": optional_text,
    "street": lambda v: require_text(v, "street"),
    "house_number": lambda v: require_text(v, "house_number"),
    "notes": optional_text,
    "team_id": validate_team_id,
    "start_date": lambda v: validate_date_key(v, "start_date"),
    "frequency": validate_frequency,
    "time_interval": optional_text,
    "expected_hours": validate_hours,
    "paused": _validate_paused,
}


class RecurringJobService:
    """Service layer for recurring job rules"""

    def __init__(self, store: JSONStore):
        self.repo = RecurringJobRepository(store)

    def get_rules(self) -> list[RecurringRule]:
        return self.repo.load()

    def create_rule(self, data: RecurringJobCreate) -> RecurringRule:
        """Create a recurring rule with validation"""
        street = require_text(data.street, "street")
        house_number = require_text(data.house_number, "house_number")
        team_id = validate_team_id(data.team_id)
        start_date = validate_date_key(data.start_date, "start_date")
        frequency = validate_frequency(data.frequency)

        rule = RecurringRule(
            id=generate_id(),
            client_name=optional_text(data.client_name),
            street=street,
            house_number=house_number,
            notes=optional_text(data.notes),
            team_id=team_id,
            start_date=start_date,
            frequency=frequency,
            time_interval=optional_text(data.time_interval),
            expected_hours=validate_hours(data.expected_hours),
            exceptions=[],
            paused=False,
            created_at=datetime.now(timezone.utc).isoformat(),
        )

        with self.repo.lock:
            rules = self.repo.load()
            rules.append(rule)
            self.repo.save(rules, f"Add recurring job: {rule.client_name or rule.street}")

        logger.info(f"🔁 Created {frequency.value} recurring job {rule.id} from {start_date}")
        return rule

    def edit_rule(self, rule_id: str, data: RecurringJobUpdate) -> RecurringRule:
        """Apply only the fields present in the request"""
        updates = {
            field: _PATCH_VALIDATORS[field](value)
            for field, value in data.model_dump(exclude_unset=True).items()
        }

        with self.repo.lock:
            rules = self.repo.load()
            rule = self._get_rule(rules, rule_id)
            for field, value in updates.items():
                setattr(rule, field, value)
            self.repo.save(rules, f"Edit recurring job: {rule.client_name or rule.street}")

        logger.info(f"✏️ Updated recurring job {rule_id}: {', '.join(updates) or 'no changes'}")
        return rule

    def delete_rule(self, rule_id: str) -> RecurringRule:
        with self.repo.lock:
            rules = self.repo.load()
            rule = self._get_rule(rules, rule_id)
            rules.remove(rule)
            self.repo.save(rules, f"Delete recurring job: {rule.client_name or rule.street}")
        return rule

    def cancel_instance(self, rule_id: str, date_key: Any) -> RecurringRule:
        """Suppress the single occurrence of a rule on date_key"""
        date_key = validate_date_key(date_key)

        with self.repo.lock:
            rules = self.repo.load()
            rule = self._get_rule(rules, rule_id)
            if date_key in rule.exceptions:
                logger.info(f"Recurring job {rule_id} already skips {date_key}")
                return rule
            rule.exceptions.append(date_key)
            self.repo.save(rules, f"Cancel recurring instance on {date_key}")

        logger.info(f"🚫 Cancelled recurring job {rule_id} on {date_key}")
        return rule

    def _get_rule(self, rules: list[RecurringRule], rule_id: str) -> RecurringRule:
        rule = self.repo.find(rules, rule_id)
        if rule is None:
            raise NotFoundError(f'Recurring job "{rule_id}" not found.')
        return rule
