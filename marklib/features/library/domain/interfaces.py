from abc import ABC, abstractmethod
from uuid import UUID
from typing import Optional
from .models import StoredBook

class IHasher(ABC):
    @abstractmethod
    def calculate_sha256(self, data: bytes) -> str:
        """Calculates the SHA256 hash of file content."""
        pass

class ILibraryRepository(ABC):
    @abstractmethod
    def get_book_by_hash(self, file_hash: str) -> Optional[StoredBook]:
        """Checks if a book with this content fingerprint already exists."""
        pass

    @abstractmethod
    def get_book(self, book_id: UUID) -> Optional[StoredBook]:
        pass

    @abstractmethod
    def create_book(self, book_data: dict) -> UUID:
        """
        Inserts a Book record.
        Raises DuplicateBookError if the fingerprint is already taken.
        Returns the new Book ID.
        """
        pass

    @abstractmethod
    def create_reading_progress(self, book_id: UUID) -> UUID:
        """
        Starts a fresh reading-progress record for a book.
        Returns the new progress ID.
        """
        pass

    @abstractmethod
    def count_books(self) -> int:
        pass
