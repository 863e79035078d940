from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Chapter:
    index: int
    title: str
    level: int
    content: str


@dataclass(frozen=True)
class BookRecord:
    """
    Structured book produced from one markdown file.
    file_hash is stamped on by the ingestion workflow, not by the parser.
    """
    title: str
    file_name: str
    content: str
    content_type: str
    size_bytes: int
    word_count: int = 0
    chapters: List[Chapter] = field(default_factory=list)
    file_hash: Optional[str] = None
