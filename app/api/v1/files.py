# app/api/v1/files.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.core.config import settings
from app.core.errors import BadRequestError, ForbiddenError, NotFoundError
from app.crud.file import file_crud
from app.db.session import get_db
from app.models.file import File as StoredFile, RelatedType
from app.models.user import User
from app.schemas.file import FileOut
from app.schemas.token import Message
from app.services.storage import UploadStorage, get_upload_storage

logger = logging.getLogger(__name__)

router = APIRouter()

def _get_or_404(db: Session, file_id: int) -> StoredFile:
    obj = file_crud.get(db, file_id)
    if not obj:
        raise NotFoundError("File not found", code="FILE_NOT_FOUND")
    return obj

@router.post("/", response_model=List[FileOut], status_code=201)
def upload_files(
    files: List[UploadFile] = File(...),
    related_type: RelatedType = Form(...),
    related_id: int = Form(...),
    description: Optional[str] = Form(None),
    tags: Optional[str] = Form(None, description="Comma-separated tags"),
    is_public: bool = Form(False),
    db: Session = Depends(get_db),
    storage: UploadStorage = Depends(get_upload_storage),
    user: User = Depends(get_current_user),
):
    if len(files) > settings.MAX_FILES_PER_REQUEST:
        raise BadRequestError(f"Maximum {settings.MAX_FILES_PER_REQUEST} files allowed", code="TOO_MANY_FILES")
    # valida todos os tipos antes de gravar qualquer arquivo
    for upload in files:
        storage.check_type(upload.content_type)

    tag_list = [t.strip() for t in (tags or "").split(",") if t.strip()]
    stored = storage.save_all((u.file, u.filename or "file", u.content_type) for u in files)
    try:
        saved = file_crud.create_from_uploads(
            db, stored, uploaded_by=user.id,
            extra={
                "related_type": related_type.value,
                "related_id": related_id,
                "description": description,
                "tags": tag_list,
                "is_public": is_public,
            },
        )
    except SQLAlchemyError:
        db.rollback()
        storage.discard(stored)
        raise
    logger.info("Uploaded %d file(s) for %s %s", len(saved), related_type.value, related_id,
                extra={"user_id": user.id})
    return saved

@router.get("/", response_model=List[FileOut])
def list_files(
    related_type: RelatedType = Query(...),
    related_id: int = Query(...),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    return file_crud.list_for(db, related_type.value, related_id)

@router.get("/{file_id}", response_model=FileOut)
def get_file(file_id: int = Path(...), db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return _get_or_404(db, file_id)

@router.get("/{file_id}/download")
def download_file(file_id: int = Path(...), db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    obj = _get_or_404(db, file_id)
    file_crud.record_access(db, obj)
    return FileResponse(obj.storage_location, media_type=obj.mime_type, filename=obj.original_name)

@router.delete("/{file_id}", response_model=Message)
def delete_file(
    file_id: int = Path(...),
    db: Session = Depends(get_db),
    storage: UploadStorage = Depends(get_upload_storage),
    user: User = Depends(get_current_user),
):
    obj = _get_or_404(db, file_id)
    if obj.uploaded_by != user.id and not user.is_admin:
        raise ForbiddenError("Only the uploader or an admin can delete this file")
    storage.delete(obj.storage_location)
    file_crud.remove(db, obj)
    logger.info("File %s deleted", file_id, extra={"user_id": user.id})
    return Message(message="File deleted successfully")
