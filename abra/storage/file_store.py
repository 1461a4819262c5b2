import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from ..shared.exceptions import StorageError
from .base import JSONStore

logger = logging.getLogger(__name__)


class FileStore(JSONStore):
    """Stores each key as <data_dir>/<key>.json"""

    name = "file"

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def _get(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"❌ Failed to read {path}: {e}")
            raise StorageError(f"Failed to read {key} from {path}") from e

    def _put(self, key: str, value: Any, description: str) -> None:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Write to a sibling temp file and swap it in so readers never see a partial file
            fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{key}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, indent=4)
            os.replace(tmp_path, path)
        except OSError as e:
            logger.error(f"❌ Failed to write {path}: {e}")
            raise StorageError(f"Failed to write {key} to {path}") from e
