"""Storage bucket access through the Supabase client."""

from __future__ import annotations

import logging
from typing import Any

from supabase import Client, create_client

from common.config import BucketConfig, Settings

logger = logging.getLogger(__name__)


class BucketClient:
    """Thin wrapper over the storage API used by provisioning."""

    def __init__(self, client: Client):
        self._storage = client.storage

    @classmethod
    def from_settings(cls, settings: Settings) -> "BucketClient":
        return cls(create_client(settings.supabase_url, settings.service_role_key))

    def get_bucket(self, bucket_id: str) -> dict[str, Any] | None:
        """Return basic bucket attributes, or None if the bucket does not exist."""
        for bucket in self._storage.list_buckets():
            if bucket.id == bucket_id:
                return {
                    "id": bucket.id,
                    "public": bucket.public,
                    "file_size_limit": bucket.file_size_limit,
                    "allowed_mime_types": bucket.allowed_mime_types,
                }
        return None

    def create_bucket(self, config: BucketConfig) -> None:
        self._storage.create_bucket(
            config.bucket_id,
            options={
                "public": config.public,
                "file_size_limit": config.file_size_limit,
                "allowed_mime_types": list(config.allowed_mime_types),
            },
        )
        logger.debug("Requested creation of bucket %s", config.bucket_id)
