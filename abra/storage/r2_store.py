"""
Blob storage adapter for Cloudflare R2 (or any S3-compatible bucket).
"""

import json
import logging
from typing import Any, Optional

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from .. import config
from ..shared.exceptions import StorageError
from .base import JSONStore, require_setting

logger = logging.getLogger(__name__)

_MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


def get_r2_client():
    """Get configured boto3 client for Cloudflare R2"""
    account_id = require_setting(config.R2_ACCOUNT_ID, "R2_ACCOUNT_ID")
    return boto3.client(
        "s3",
        endpoint_url=f"https://{account_id}.r2.cloudflarestorage.com",
        aws_access_key_id=require_setting(config.R2_ACCESS_KEY_ID, "R2_ACCESS_KEY_ID"),
        aws_secret_access_key=require_setting(config.R2_SECRET_ACCESS_KEY, "R2_SECRET_ACCESS_KEY"),
        config=Config(signature_version="s3v4"),
        region_name="auto",
    )


class R2Store(JSONStore):
    """Stores each key as a <prefix><key>.json object"""

    name = "r2"

    def __init__(self, bucket: str, key_prefix: str = "", client=None):
        self.bucket = bucket
        self.key_prefix = key_prefix
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = get_r2_client()
        return self._client

    def _object_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}.json"

    def _get(self, key: str) -> Optional[Any]:
        object_key = self._object_key(key)
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=object_key)
            body = response["Body"].read()
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in _MISSING_KEY_CODES:
                return None
            logger.error(f"❌ R2 read failed for {object_key}: {e}")
            raise StorageError(f"R2 read failed for {object_key}") from e
        except BotoCoreError as e:
            logger.error(f"❌ R2 read failed for {object_key}: {e}")
            raise StorageError(f"R2 read failed for {object_key}") from e

        try:
            return json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"❌ Malformed JSON in {object_key}: {e}")
            raise StorageError(f"Malformed JSON in {object_key}") from e

    def _put(self, key: str, value: Any, description: str) -> None:
        object_key = self._object_key(key)
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=object_key,
                Body=json.dumps(value).encode("utf-8"),
                ContentType="application/json",
                # S3 metadata values must be ASCII
                Metadata={"description": description.encode("ascii", "replace").decode()[:256]},
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"❌ R2 write failed for {object_key}: {e}")
            raise StorageError(f"R2 write failed for {object_key}") from e
