"""Recurring job repository - load/save of the recurring-jobs document"""

from typing import Any, Optional

from ...shared.constants import RECURRING_JOBS_KEY
from ...shared.exceptions import StorageError
from ...shared.records import decode_record
from ...storage.base import JSONStore
from ...storage.locks import key_lock
from .schemas import RecurringRule

# Stand-ins for required fields missing from a malformed stored rule
RULE_PLACEHOLDERS = {
    "id": "",
    "street": "",
    "house_number": "",
    "team_id": "",
    "start_date": "",
    "frequency": "",
}


def decode_rules(raw: Any) -> list[RecurringRule]:
    if not raw:
        return []
    if not isinstance(raw, list):
        raise StorageError("Malformed recurring jobs: expected a list")
    return [decode_record(RecurringRule, item, RULE_PLACEHOLDERS) for item in raw]


class RecurringJobRepository:
    """Read-modify-write access to the list of recurring rules"""

    def __init__(self, store: JSONStore):
        self.store = store
        self.lock = key_lock(RECURRING_JOBS_KEY)

    def load(self) -> list[RecurringRule]:
        return decode_rules(self.store.read(RECURRING_JOBS_KEY))

    def save(self, rules: list[RecurringRule], description: str) -> None:
        self.store.write(RECURRING_JOBS_KEY, [rule.to_json() for rule in rules], description)

    @staticmethod
    def find(rules: list[RecurringRule], rule_id: str) -> Optional[RecurringRule]:
        return next((rule for rule in rules if rule.id == rule_id), None)
