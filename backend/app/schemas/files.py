from datetime import datetime
from typing import Optional

from app.schemas.common import ReadModel


class FileRead(ReadModel):
    id: int
    extension: Optional[str] = None
    size: Optional[int] = None
    path: Optional[str] = None
    file_type: Optional[str] = None
    original_name: Optional[str] = None
    content_type: Optional[str] = None
    created_at: Optional[datetime] = None
