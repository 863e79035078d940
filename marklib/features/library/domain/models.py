from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

@dataclass
class StoredBook:
    """
    Represents a book persisted in the library.
    """
    id: UUID
    title: str
    file_name: str
    file_hash: str
    size_bytes: int
    content_type: str
    word_count: int
    chapter_count: int
    created_at: Optional[datetime] = None
