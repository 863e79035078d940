import logging
from dataclasses import asdict
from typing import Optional
from uuid import UUID

from marklib.features.book_parser.domain.models import BookRecord
from ..data.hasher import SHA256Hasher
from ..data.repository import SqlLibraryRepo
from ..domain.interfaces import IHasher, ILibraryRepository
from ..domain.models import StoredBook

logger = logging.getLogger(__name__)

class LibraryService:
    """
    Facade for the Library Feature.
    Owns fingerprinting and every read/write against the book store.
    """
    def __init__(self, hasher: Optional[IHasher] = None, repo: Optional[ILibraryRepository] = None):
        self.hasher = hasher or SHA256Hasher()
        self.repo = repo or SqlLibraryRepo()

    def fingerprint(self, data: bytes) -> str:
        return self.hasher.calculate_sha256(data)

    def find_by_fingerprint(self, file_hash: str) -> Optional[StoredBook]:
        return self.repo.get_book_by_hash(file_hash)

    def book_exists(self, file_hash: str) -> bool:
        return self.find_by_fingerprint(file_hash) is not None

    def get_book(self, book_id: UUID) -> Optional[StoredBook]:
        return self.repo.get_book(book_id)

    def count_books(self) -> int:
        return self.repo.count_books()

    def add_book(self, book: BookRecord) -> UUID:
        """
        Persists a parsed book.

        Returns:
            UUID of the created Book.
        Raises:
            DuplicateBookError: the fingerprint is already in the library.
        """
        if not book.file_hash:
            raise ValueError(f"Book '{book.file_name}' has no fingerprint")

        book_data = {
            "title": book.title,
            "file_name": book.file_name,
            "file_hash": book.file_hash,
            "file_size_bytes": book.size_bytes,
            "content_type": book.content_type,
            "content": book.content,
            "chapters": [asdict(chapter) for chapter in book.chapters],
            "word_count": book.word_count
        }

        book_id = self.repo.create_book(book_data)
        logger.info(f"Stored book '{book.title}' as {book_id}")
        return book_id

    def add_reading_progress(self, book_id: UUID) -> UUID:
        return self.repo.create_reading_progress(book_id)

# Singleton Instance for easy import
library = LibraryService()
