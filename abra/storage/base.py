"""
JSON key-value store contract.

Every backend persists whole JSON documents under a logical key (schedule,
clients, recurring-jobs). Values are encoded once on write and decoded once on
read. An absent key reads back as an empty list for list-shaped resources and
an empty object otherwise.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..shared.exceptions import StorageError

logger = logging.getLogger(__name__)

# Key name fragments that identify list-shaped resources
LIST_RESOURCE_MARKERS = ("clients", "recurring")


def default_for(key: str) -> Any:
    """Value returned for a key that has never been written"""
    return [] if any(marker in key for marker in LIST_RESOURCE_MARKERS) else {}


class JSONStore(ABC):
    """Backend-agnostic read/write of JSON documents"""

    name = "base"

    def read(self, key: str) -> Any:
        """Read a JSON value, or the default for the key when absent"""
        value = self._get(key)
        if value is None:
            logger.info(f"Key not found: {key}, returning default")
            return default_for(key)
        return value

    def write(self, key: str, value: Any, description: str = "Update data") -> None:
        """Persist a JSON value under key"""
        logger.info(f"💾 Writing {key} to {self.name} store ({description})")
        self._put(key, value, description)

    @abstractmethod
    def _get(self, key: str) -> Optional[Any]:
        """Return the decoded value, or None when the key is absent"""

    @abstractmethod
    def _put(self, key: str, value: Any, description: str) -> None:
        """Encode and store value"""


def require_setting(value: Optional[str], name: str) -> str:
    if not value:
        raise StorageError(f"{name} environment variable is required for this storage backend")
    return value
