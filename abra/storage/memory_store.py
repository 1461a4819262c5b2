import copy
import json
from typing import Any, Optional

from .base import JSONStore


class MemoryStore(JSONStore):
    """Process-local store, used for development and tests"""

    name = "memory"

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._documents: dict[str, str] = {}
        self.write_count = 0
        for key, value in (initial or {}).items():
            self._documents[key] = json.dumps(value)

    def _get(self, key: str) -> Optional[Any]:
        raw = self._documents.get(key)
        return None if raw is None else json.loads(raw)

    def _put(self, key: str, value: Any, description: str) -> None:
        # Serialise on write so callers never share mutable state with the store
        self._documents[key] = json.dumps(value)
        self.write_count += 1

    def snapshot(self, key: str) -> Any:
        """Raw stored value without defaults (None when absent)"""
        return copy.deepcopy(self._get(key))
