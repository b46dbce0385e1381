# app/crud/file.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.file import File
from app.services.storage import StoredUpload

class CRUDFile:
    def get(self, db: Session, id: Any) -> Optional[File]:
        return db.get(File, id)

    def create_from_uploads(self, db: Session, uploads: List[StoredUpload], *, uploaded_by: int,
                            extra: Dict[str, Any]) -> List[File]:
        """Grava as linhas de todos os uploads num único commit."""
        objs = [
            File(
                filename=stored.filename,
                original_name=stored.original_name,
                mime_type=stored.mime_type,
                size=stored.size,
                uploaded_by=uploaded_by,
                storage_location=stored.path,
                url="",
                **extra,
            )
            for stored in uploads
        ]
        db.add_all(objs); db.flush()
        for obj in objs:
            obj.url = f"/api/v1/files/{obj.id}/download"
        db.commit()
        for obj in objs:
            db.refresh(obj)
        return objs

    def list_for(self, db: Session, related_type: str, related_id: int) -> List[File]:
        stmt = (
            select(File)
            .where(File.related_type == related_type, File.related_id == related_id)
            .order_by(File.created_at.desc(), File.id.desc())
        )
        return list(db.scalars(stmt).all())

    def record_access(self, db: Session, obj: File) -> File:
        obj.download_count = (obj.download_count or 0) + 1
        obj.last_accessed = datetime.now(timezone.utc)
        db.add(obj); db.commit(); db.refresh(obj)
        return obj

    def remove(self, db: Session, obj: File) -> None:
        db.delete(obj); db.commit()

file_crud = CRUDFile()
