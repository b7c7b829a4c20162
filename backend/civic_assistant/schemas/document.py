"""Document request/response schemas."""
import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ValidationError
from starlette.datastructures import FormData, UploadFile

from civic_assistant.errors import MissingFileError, RequestValidationFailed, describe_validation_errors
from civic_assistant.schemas.base import CamelORMModel


class UploadForm(BaseModel):
    """Multipart upload fields. Anything besides file and service is rejected."""
    model_config = {"extra": "forbid", "arbitrary_types_allowed": True}

    file: Optional[UploadFile] = None
    # Blank labels are rejected by the ingestion service, not here
    service: Optional[str] = None

    @classmethod
    def from_form(cls, form: FormData) -> "UploadForm":
        try:
            parsed = cls.model_validate(dict(form))
        except ValidationError as e:
            raise RequestValidationFailed(describe_validation_errors(e.errors())) from e
        if parsed.file is None:
            raise MissingFileError()
        return parsed


class DocumentResponse(CamelORMModel):
    id: uuid.UUID
    file_name: str
    file_path: str
    file_type: str
    file_size: str
    service: str
    created_at: datetime


class UploadResponse(BaseModel):
    success: bool = True
    data: DocumentResponse


class DocumentListResponse(BaseModel):
    data: list[DocumentResponse]


class DocumentDetailResponse(BaseModel):
    data: DocumentResponse
