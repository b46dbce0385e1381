# app/services/storage.py
"""Gravação de uploads em disco.

Layout: ``UPLOAD_PATH/<images|documents|general>/YYYY/MM/DD/<nome>_<sufixo><ext>``.
"""
from __future__ import annotations

import logging
import os
import re
import uuid
import datetime as dt
from dataclasses import dataclass
from typing import BinaryIO, Iterable, List, Optional, Tuple

from app.core.config import settings
from app.core.errors import BadRequestError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024

@dataclass
class StoredUpload:
    filename: str
    original_name: str
    mime_type: str
    size: int
    path: str

def _subdir(mime_type: str) -> str:
    if mime_type.startswith("image/"):
        return "images"
    if mime_type == "application/pdf":
        return "documents"
    return "general"

def sanitize_filename(original_name: str) -> str:
    base, ext = os.path.splitext(os.path.basename(original_name or "file"))
    safe = re.sub(r"[^a-zA-Z0-9]", "_", base) or "file"
    # sufixo único: timestamp em ms + aleatório
    suffix = f"{int(dt.datetime.now(dt.timezone.utc).timestamp() * 1000)}-{uuid.uuid4().int % 10**9}"
    return f"{safe}_{suffix}{ext.lower()}"

class UploadStorage:
    def __init__(self, root: Optional[str] = None, max_size: Optional[int] = None,
                 allowed_types: Optional[Iterable[str]] = None):
        self.root = root or settings.UPLOAD_PATH
        self.max_size = max_size if max_size is not None else settings.MAX_FILE_SIZE
        self.allowed_types = set(allowed_types if allowed_types is not None else settings.ALLOWED_FILE_TYPES)

    def check_type(self, mime_type: Optional[str]) -> str:
        if not mime_type or mime_type not in self.allowed_types:
            raise BadRequestError(f"File type {mime_type} is not allowed", code="FILE_TYPE_NOT_ALLOWED")
        return mime_type

    def save(self, stream: BinaryIO, original_name: str, mime_type: Optional[str]) -> StoredUpload:
        mime_type = self.check_type(mime_type)
        today = dt.date.today()
        directory = os.path.join(self.root, _subdir(mime_type), f"{today:%Y}", f"{today:%m}", f"{today:%d}")
        os.makedirs(directory, exist_ok=True)
        filename = sanitize_filename(original_name)
        path = os.path.join(directory, filename)

        size = 0
        with open(path, "wb") as out:
            while True:
                chunk = stream.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > self.max_size:
                    break
                out.write(chunk)
        if size > self.max_size:
            os.remove(path)
            raise BadRequestError("File too large", code="FILE_TOO_LARGE", details={"max_size": self.max_size})

        logger.info("Stored upload %s (%s, %d bytes)", filename, mime_type, size)
        return StoredUpload(filename=filename, original_name=original_name, mime_type=mime_type, size=size, path=path)

    def save_all(self, uploads: Iterable[Tuple[BinaryIO, str, Optional[str]]]) -> List[StoredUpload]:
        """Grava todos ou nenhum: se um arquivo falhar, remove os já gravados."""
        stored: List[StoredUpload] = []
        try:
            for stream, original_name, mime_type in uploads:
                stored.append(self.save(stream, original_name, mime_type))
        except Exception:
            self.discard(stored)
            raise
        return stored

    def delete(self, path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.warning("Upload already missing from disk: %s", path)

    def discard(self, stored: Iterable[StoredUpload]) -> None:
        for item in stored:
            self.delete(item.path)
            logger.info("Discarded upload %s", item.filename)

def get_upload_storage() -> UploadStorage:
    return UploadStorage()
