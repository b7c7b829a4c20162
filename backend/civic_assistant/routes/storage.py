"""Public blob URLs for the local storage backend.

Mirrors the Supabase public object path so file_path URLs look the same
whichever backend stored them.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from civic_assistant.services.blob_storage import (
    PUBLIC_OBJECT_PATH,
    BlobStorageService,
    get_blob_storage,
)

router = APIRouter(prefix=PUBLIC_OBJECT_PATH, tags=["storage"])


@router.get("/{bucket}/{key:path}")
async def download_blob(
    bucket: str,
    key: str,
    storage: BlobStorageService = Depends(get_blob_storage),
):
    """Serve a stored object by bucket and key."""
    return FileResponse(path=storage.local_path(bucket, key))
