"""Import all models so SQLAlchemy metadata knows about them."""
from civic_assistant.models.base import Base
from civic_assistant.models.document import Document

__all__ = ["Base", "Document"]
