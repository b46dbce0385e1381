# app/models/file.py
import os
from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class RelatedType(str, Enum):
    inspection = "inspection"
    robot = "robot"
    customer = "customer"
    user = "user"


class File(Base):
    __tablename__ = "files"
    __table_args__ = (Index("ix_files_related", "related_type", "related_id"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    filename: Mapped[str] = mapped_column(String(255))
    original_name: Mapped[str] = mapped_column(String(255))
    mime_type: Mapped[str] = mapped_column(String(120), index=True)
    size: Mapped[int] = mapped_column(Integer)
    uploaded_by: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    related_type: Mapped[str] = mapped_column(String(20))
    related_id: Mapped[int] = mapped_column(Integer)
    storage_location: Mapped[str] = mapped_column(String(500))
    url: Mapped[str] = mapped_column(String(500))
    is_public: Mapped[bool] = mapped_column(Boolean, default=False)
    tags: Mapped[List[str]] = mapped_column(JSON, default=list)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    download_count: Mapped[int] = mapped_column(Integer, default=0)
    last_accessed: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)

    @property
    def extension(self) -> str:
        return os.path.splitext(self.original_name)[1].lstrip(".").lower()

    @property
    def category(self) -> str:
        mime = self.mime_type or ""
        if mime.startswith("image/"):
            return "image"
        if mime.startswith("video/"):
            return "video"
        if mime.startswith("audio/"):
            return "audio"
        if mime == "application/pdf":
            return "pdf"
        if "document" in mime or "text" in mime:
            return "document"
        return "other"
