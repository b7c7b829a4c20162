"""Blob storage abstraction. Local filesystem for dev, Supabase Storage for production.

Objects are never overwritten: a second upload to an existing key fails.
"""
import asyncio
import json
import logging
from pathlib import Path

import aiofiles
import aiohttp

from civic_assistant.config import settings
from civic_assistant.errors import BlobNotFoundError, StorageWriteError

logger = logging.getLogger(__name__)

PUBLIC_OBJECT_PATH = "/storage/v1/object/public"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


class BlobStorageService:
    """Handles blob writes to local disk or Supabase Storage."""

    def __init__(
        self,
        storage_type: str | None = None,
        base_path: str | Path | None = None,
        bucket: str | None = None,
        public_base_url: str | None = None,
    ):
        self.storage_type = storage_type or settings.FILE_STORAGE_TYPE
        self.bucket = bucket or settings.STORAGE_BUCKET

        if self.storage_type == "local":
            self.base_path = Path(base_path or settings.FILE_STORAGE_PATH)
            self.base_path.mkdir(parents=True, exist_ok=True)
            self.public_base_url = public_base_url or settings.PUBLIC_BASE_URL
        elif self.storage_type == "supabase":
            self.public_base_url = public_base_url or settings.SUPABASE_URL
            self._timeout = aiohttp.ClientTimeout(total=settings.STORAGE_TIMEOUT_SECONDS)
        else:
            raise ValueError(f"Unknown storage type: {self.storage_type}")

    async def upload(self, key: str, data: bytes, content_type: str | None) -> str:
        """Write one object. Returns its key. Single attempt, no retry."""
        if self.storage_type == "local":
            await self._upload_local(key, data)
        else:
            await self._upload_supabase(key, data, content_type or DEFAULT_CONTENT_TYPE)
        return key

    def public_url(self, key: str) -> str:
        """Publicly resolvable URL for a stored object."""
        return f"{self.public_base_url.rstrip('/')}{PUBLIC_OBJECT_PATH}/{self.bucket}/{key}"

    def local_path(self, bucket: str, key: str) -> Path:
        """Resolve a stored object on disk, refusing anything outside the bucket."""
        if self.storage_type != "local" or bucket != self.bucket:
            raise BlobNotFoundError()
        root = (self.base_path / self.bucket).resolve()
        path = (root / key).resolve()
        if not path.is_relative_to(root) or not path.is_file():
            raise BlobNotFoundError()
        return path

    async def _upload_local(self, key: str, data: bytes) -> None:
        path = self.base_path / self.bucket / key
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # "x" mode: fail instead of replacing an existing object
            async with aiofiles.open(path, "xb") as f:
                await f.write(data)
        except FileExistsError as e:
            raise StorageWriteError("The resource already exists") from e
        except OSError as e:
            logger.error(f"Local blob write failed for {key}: {e}")
            raise StorageWriteError() from e

    async def _upload_supabase(self, key: str, data: bytes, content_type: str) -> None:
        url = f"{settings.SUPABASE_URL.rstrip('/')}/storage/v1/object/{self.bucket}/{key}"
        headers = {
            "Authorization": f"Bearer {settings.SUPABASE_SERVICE_KEY}",
            "apikey": settings.SUPABASE_SERVICE_KEY,
            "Content-Type": content_type,
            "x-upsert": "false",
        }
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.post(url, data=data, headers=headers) as resp:
                    if resp.status >= 400:
                        body = await resp.text()
                        logger.error(f"Supabase upload failed for {key}: HTTP {resp.status} {body[:500]}")
                        raise StorageWriteError(_storage_error_message(body))
        except aiohttp.ClientError as e:
            logger.error(f"Supabase upload request failed for {key}: {e}")
            raise StorageWriteError() from e
        except asyncio.TimeoutError as e:
            logger.error(f"Supabase upload timed out for {key}")
            raise StorageWriteError("Storage request timed out") from e


def _storage_error_message(body: str) -> str | None:
    """Pull the human-readable message out of a Supabase Storage error body."""
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return None


blob_storage = BlobStorageService()


def get_blob_storage() -> BlobStorageService:
    """FastAPI dependency returning the process-wide blob store."""
    return blob_storage
