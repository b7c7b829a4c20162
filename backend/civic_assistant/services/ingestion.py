"""Document ingestion: validate, store the blob, persist the metadata row.

The blob write and the row insert are not transactional. If the insert
fails after the blob was written, the blob stays in storage and the caller
gets a MetadataWriteError.
"""
import logging
import time
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from civic_assistant.errors import MetadataWriteError, MissingServiceError
from civic_assistant.models.document import Document
from civic_assistant.services.blob_storage import BlobStorageService
from civic_assistant.services.upload_validation import (
    build_storage_key,
    file_extension,
    validate_upload,
)

logger = logging.getLogger(__name__)


@dataclass
class UploadedFile:
    """A fully read upload: display name, declared type, and content."""
    name: str
    mime_type: str
    data: bytes
    size: int

    @classmethod
    async def from_upload(cls, upload: UploadFile) -> "UploadedFile":
        data = await upload.read()
        return cls(
            name=upload.filename or "unnamed",
            mime_type=upload.content_type or "",
            data=data,
            size=len(data),
        )


async def ingest_document(
    db: AsyncSession,
    storage: BlobStorageService,
    upload: UploadedFile,
    service_label: str | None,
    now_ms: int | None = None,
) -> Document:
    """Store one uploaded file and return its persisted record."""
    service = (service_label or "").strip()
    if not service:
        raise MissingServiceError()

    validate_upload(upload.name, upload.mime_type, upload.size)

    if now_ms is None:
        now_ms = int(time.time() * 1000)
    key = build_storage_key(upload.name, now_ms)

    await storage.upload(key, upload.data, upload.mime_type)
    file_path = storage.public_url(key)

    record = Document(
        file_name=upload.name,
        file_path=file_path,
        file_type=upload.mime_type or file_extension(upload.name),
        file_size=str(upload.size),
        service=service,
    )
    db.add(record)
    try:
        await db.commit()
        await db.refresh(record)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Metadata insert failed for {upload.name!r}: {e}")
        logger.warning(f"Orphaned blob left in storage: {key}")
        raise MetadataWriteError() from e

    logger.info(f"Ingested {upload.name!r} ({upload.size} bytes) for service {service!r} as {key}")
    return record
