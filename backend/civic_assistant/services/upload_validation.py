"""Upload checks and storage key derivation.

No content sniffing is done: a renamed file whose extension and declared
MIME type both look allowed will pass.
"""
import re

from civic_assistant.errors import FileTooLargeError, InvalidFileTypeError

ALLOWED_MIME_TYPES = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
})
ALLOWED_EXTENSIONS = frozenset({".pdf", ".doc", ".docx", ".txt", ".text"})
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB

STORAGE_KEY_PREFIX = "uploads"
# Keeps "{millis}-{name}" well under the common 255 byte filename limit
MAX_SANITIZED_NAME_LENGTH = 200
MAX_EXTENSION_LENGTH = 16

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_UNDERSCORE_RUNS = re.compile(r"_{2,}")


def file_extension(file_name: str) -> str:
    """Lowercased text after the last dot, prefixed with a dot."""
    return "." + file_name.rsplit(".", 1)[-1].lower()


def validate_upload(file_name: str, mime_type: str | None, size_bytes: int) -> None:
    """Raise if the file is too large or not an allowed document type."""
    if size_bytes > MAX_FILE_SIZE:
        raise FileTooLargeError()

    if mime_type not in ALLOWED_MIME_TYPES and file_extension(file_name) not in ALLOWED_EXTENSIONS:
        raise InvalidFileTypeError()


def sanitize_file_name(file_name: str) -> str:
    """Reduce a user-supplied name to a URL and filesystem safe one."""
    cleaned = _UNSAFE_CHARS.sub("_", file_name)
    cleaned = _UNDERSCORE_RUNS.sub("_", cleaned).strip("_")
    return _truncate(cleaned) or "unnamed"


def _truncate(name: str) -> str:
    """Cap the name length, cutting the stem and keeping a short extension."""
    if len(name) <= MAX_SANITIZED_NAME_LENGTH:
        return name
    stem, dot, ext = name.rpartition(".")
    if not dot or len(ext) > MAX_EXTENSION_LENGTH:
        return name[:MAX_SANITIZED_NAME_LENGTH].rstrip("_")
    stem = stem[:MAX_SANITIZED_NAME_LENGTH - len(ext) - 1].rstrip("_")
    return f"{stem}.{ext}"


def build_storage_key(file_name: str, now_ms: int) -> str:
    """uploads/{unix millis}-{sanitized name}"""
    return f"{STORAGE_KEY_PREFIX}/{now_ms}-{sanitize_file_name(file_name)}"
