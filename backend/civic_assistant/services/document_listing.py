"""Document listing and lookup over the documents table."""
import logging
import uuid
from typing import Iterable, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from civic_assistant.errors import DocumentFetchError, DocumentNotFoundError
from civic_assistant.models.document import Document

logger = logging.getLogger(__name__)


async def list_documents(db: AsyncSession) -> Sequence[Document]:
    """Every document row, oldest first. No pagination."""
    try:
        result = await db.execute(select(Document).order_by(Document.created_at))
    except SQLAlchemyError as e:
        logger.error(f"Document fetch failed: {e}")
        raise DocumentFetchError() from e
    return result.scalars().all()


async def get_document(db: AsyncSession, document_id: uuid.UUID) -> Document:
    try:
        result = await db.execute(select(Document).where(Document.id == document_id))
    except SQLAlchemyError as e:
        logger.error(f"Document fetch failed for {document_id}: {e}")
        raise DocumentFetchError() from e
    document = result.scalar_one_or_none()
    if not document:
        raise DocumentNotFoundError()
    return document


def filter_by_file_name(documents: Iterable[Document], term: str) -> list[Document]:
    """Case-insensitive substring match on file_name. An empty term keeps everything."""
    needle = term.lower()
    return [d for d in documents if needle in d.file_name.lower()]
