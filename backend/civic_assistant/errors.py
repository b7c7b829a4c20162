"""Error hierarchy for the document and chat APIs.

Every failure carries the HTTP status it maps to and a client-safe message.
The exception handlers in ``civic_assistant.main`` render them as
``{"error": message}``.

Hierarchy:
    CivicAssistantError
    ├── RequestValidationFailed  caller's fault (400)
    │   ├── MissingServiceError
    │   ├── MissingFileError
    │   ├── InvalidFileTypeError
    │   ├── FileTooLargeError
    │   └── InvalidInputError
    ├── DocumentNotFoundError    unknown document id (404)
    │   └── BlobNotFoundError
    └── BackendError             storage or database failure (500)
        ├── StorageWriteError
        ├── MetadataWriteError
        └── DocumentFetchError
"""
from typing import Any, Dict


class CivicAssistantError(Exception):
    """Base error for all API failures."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        self.error_type = self.__class__.__name__
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Response body shape shared by every error."""
        return {"error": self.message}

    def __repr__(self) -> str:
        return f"{self.error_type}({self.status_code}): {self.message}"


class RequestValidationFailed(CivicAssistantError):
    """Input rejected before any external call was made."""
    status_code = 400
    default_message = "Invalid request"


class MissingServiceError(RequestValidationFailed):
    default_message = "Service is required"


class MissingFileError(RequestValidationFailed):
    default_message = "No file provided"


class InvalidFileTypeError(RequestValidationFailed):
    default_message = "Invalid file type. Only PDF, Word, and Text files are allowed."


class FileTooLargeError(RequestValidationFailed):
    default_message = "File size exceeds 10MB limit."


class InvalidInputError(RequestValidationFailed):
    default_message = "Message is required and must be a string"


class DocumentNotFoundError(CivicAssistantError):
    status_code = 404
    default_message = "Document not found"


class BlobNotFoundError(DocumentNotFoundError):
    default_message = "File not found"


class BackendError(CivicAssistantError):
    """An external collaborator (blob store, database) failed."""
    status_code = 500
    default_message = "Backend request failed"


class StorageWriteError(BackendError):
    default_message = "Failed to upload file to storage"


class MetadataWriteError(BackendError):
    default_message = "Failed to save document metadata"


class DocumentFetchError(BackendError):
    default_message = "Failed to fetch documents"


def describe_validation_errors(errors: list[dict]) -> str:
    """Collapse pydantic error dicts into one client-facing sentence."""
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(loc)
    if first.get("type") == "extra_forbidden":
        return f"Unexpected field '{field}'"
    if first.get("type") == "json_invalid":
        return "Malformed JSON body"
    if field:
        return f"{field}: {first.get('msg', 'invalid value')}"
    return first.get("msg", "Invalid request")
