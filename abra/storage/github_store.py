"""
GitHub storage adapter.
Reads and writes JSON files through the repository contents API; every write
is a commit whose message is the write description.
"""

import base64
import json
import logging
import time
from typing import Any, Optional

import httpx

from ..shared.exceptions import StorageError
from .base import JSONStore

logger = logging.getLogger(__name__)


class GitHubStore(JSONStore):
    """Stores each key as <data_path>/<key>.json in a GitHub repository"""

    name = "github"
    BASE_URL = "https://api.github.com"

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        branch: str = "main",
        data_path: str = "data",
        client: Optional[httpx.Client] = None,
    ):
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self.data_path = data_path.strip("/")
        self.client = client or httpx.Client(timeout=30.0)
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "abra-scheduler",
        }

    def _url(self, key: str) -> str:
        path = f"{self.data_path}/{key}.json" if self.data_path else f"{key}.json"
        return f"{self.BASE_URL}/repos/{self.owner}/{self.repo}/contents/{path}"

    def _fetch(self, key: str) -> Optional[dict]:
        """Contents API entry for key, or None on 404"""
        # Timestamp defeats intermediate caching of the contents endpoint
        params = {"ref": self.branch, "t": str(int(time.time() * 1000))}
        try:
            response = self.client.get(self._url(key), headers=self.headers, params=params)
        except httpx.HTTPError as e:
            logger.error(f"❌ GitHub read failed for {key}: {e}")
            raise StorageError(f"GitHub read failed for {key}") from e

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            logger.error(f"❌ GitHub API error {response.status_code} reading {key}: {response.text}")
            raise StorageError(f"GitHub API error: {response.status_code}")
        return response.json()

    def _get(self, key: str) -> Optional[Any]:
        logger.info(f"Reading from GitHub: {key}")
        entry = self._fetch(key)
        if entry is None:
            return None
        try:
            content = base64.b64decode(entry["content"]).decode("utf-8")
            return json.loads(content)
        except (KeyError, ValueError) as e:
            logger.error(f"❌ Malformed GitHub content for {key}: {e}")
            raise StorageError(f"Malformed GitHub content for {key}") from e

    def _put(self, key: str, value: Any, description: str) -> None:
        # Updating an existing file requires its current blob sha
        existing = self._fetch(key)
        content = json.dumps(value, indent=2).encode("utf-8")
        payload = {
            "message": description,
            "content": base64.b64encode(content).decode("ascii"),
            "branch": self.branch,
        }
        if existing and existing.get("sha"):
            payload["sha"] = existing["sha"]

        try:
            response = self.client.put(self._url(key), headers=self.headers, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"❌ GitHub write failed for {key}: {e}")
            raise StorageError(f"GitHub write failed for {key}") from e

        if response.status_code not in (200, 201):
            logger.error(f"❌ GitHub API write error {response.status_code}: {response.text}")
            raise StorageError(f"GitHub API write error: {response.status_code}")
        logger.info(f"✅ Successfully wrote to GitHub: {key}")
