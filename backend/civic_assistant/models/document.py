"""Document model - uploaded file metadata (bytes live in blob storage)."""
import uuid
from sqlalchemy import String, Text, Uuid, Index
from sqlalchemy.orm import Mapped, mapped_column
from civic_assistant.models.base import Base, CreatedAtMixin


class Document(Base, CreatedAtMixin):
    __tablename__ = "documents"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # Client-supplied values are free text with no length cap
    file_name: Mapped[str] = mapped_column(Text, nullable=False)
    file_path: Mapped[str] = mapped_column(Text, nullable=False)
    file_type: Mapped[str] = mapped_column(Text, nullable=False)
    # Byte count kept as text to match the existing documents table
    file_size: Mapped[str] = mapped_column(String(20), nullable=False)
    service: Mapped[str] = mapped_column(Text, nullable=False, index=True)

    __table_args__ = (
        Index("idx_documents_created_at", "created_at"),
    )
