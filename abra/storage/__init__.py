"""
Storage backends for the scheduler.

The backend is chosen once per process from STORAGE_BACKEND; services only
ever see the JSONStore read/write contract.
"""

import logging
from functools import lru_cache

from .. import config
from ..shared.exceptions import StorageError
from .base import JSONStore, default_for, require_setting
from .file_store import FileStore
from .github_store import GitHubStore
from .memory_store import MemoryStore
from .r2_store import R2Store
from .redis_store import RedisStore
from .sql_store import SQLStore

logger = logging.getLogger(__name__)


def create_store(backend: str) -> JSONStore:
    """Build the store for a backend name"""
    if backend == "memory":
        return MemoryStore()
    if backend == "file":
        return FileStore(config.DATA_DIR)
    if backend == "redis":
        return RedisStore(key_prefix=config.REDIS_KEY_PREFIX)
    if backend == "github":
        return GitHubStore(
            token=require_setting(config.GITHUB_TOKEN, "GITHUB_TOKEN"),
            owner=require_setting(config.GITHUB_OWNER, "GITHUB_OWNER"),
            repo=config.GITHUB_REPO,
            branch=config.GITHUB_BRANCH,
            data_path=config.GITHUB_DATA_PATH,
        )
    if backend == "r2":
        return R2Store(bucket=config.R2_BUCKET_NAME, key_prefix=config.R2_KEY_PREFIX)
    if backend == "sql":
        from ..database import engine

        if engine is None:
            raise StorageError("DATABASE_URL environment variable is required for this storage backend")
        store = SQLStore(engine)
        store.create_tables()
        return store
    raise StorageError(f"Unknown storage backend: {backend}")


@lru_cache
def get_store() -> JSONStore:
    """Process-wide store selected by configuration"""
    store = create_store(config.STORAGE_BACKEND)
    logger.info(f"🗄️ Using {store.name} storage backend")
    return store


__all__ = [
    "JSONStore",
    "FileStore",
    "GitHubStore",
    "MemoryStore",
    "R2Store",
    "RedisStore",
    "SQLStore",
    "create_store",
    "default_for",
    "get_store",
]
