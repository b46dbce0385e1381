# app/schemas/file.py
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel

class FileOut(BaseModel):
    id: int
    filename: str
    original_name: str
    mime_type: str
    size: int
    uploaded_by: int
    related_type: str
    related_id: int
    url: str
    is_public: bool
    tags: List[str]
    description: Optional[str] = None
    extension: str
    category: str
    download_count: int
    last_accessed: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
