"""Document upload and listing API routes."""
from uuid import UUID
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from civic_assistant.database import get_db
from civic_assistant.schemas.document import (
    DocumentDetailResponse,
    DocumentListResponse,
    DocumentResponse,
    UploadForm,
    UploadResponse,
)
from civic_assistant.services.blob_storage import BlobStorageService, get_blob_storage
from civic_assistant.services.document_listing import get_document, list_documents
from civic_assistant.services.ingestion import UploadedFile, ingest_document

router = APIRouter(prefix="/api", tags=["documents"])


@router.post("/upload", response_model=UploadResponse)
async def upload_document(
    request: Request,
    db: AsyncSession = Depends(get_db),
    storage: BlobStorageService = Depends(get_blob_storage),
):
    """Upload one file (multipart fields: file, service) and record its metadata."""
    form = UploadForm.from_form(await request.form())
    upload = await UploadedFile.from_upload(form.file)
    record = await ingest_document(db, storage, upload, form.service)
    return {"success": True, "data": DocumentResponse.model_validate(record)}


@router.get("/documents", response_model=DocumentListResponse)
async def list_all_documents(db: AsyncSession = Depends(get_db)):
    """List every stored document. Searching is done by the client."""
    documents = await list_documents(db)
    return {"data": [DocumentResponse.model_validate(d) for d in documents]}


@router.get("/documents/{document_id}", response_model=DocumentDetailResponse)
async def get_document_metadata(
    document_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get document metadata by ID."""
    document = await get_document(db, document_id)
    return {"data": DocumentResponse.model_validate(document)}
