from uuid import UUID
from typing import Optional
from sqlalchemy.exc import IntegrityError
from marklib.core.database.connection import SessionLocal
from .sql_models import BookModel, ReadingProgressModel
from ..domain.exceptions import DuplicateBookError
from ..domain.interfaces import ILibraryRepository
from ..domain.models import StoredBook

class SqlLibraryRepo(ILibraryRepository):
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def get_book_by_hash(self, file_hash: str) -> Optional[StoredBook]:
        with self.session_factory() as db:
            book = db.query(BookModel).filter(BookModel.file_hash == file_hash).first()
            return self._to_domain(book) if book else None

    def get_book(self, book_id: UUID) -> Optional[StoredBook]:
        with self.session_factory() as db:
            book = db.get(BookModel, book_id)
            return self._to_domain(book) if book else None

    def create_book(self, book_data: dict) -> UUID:
        """
        The unique index on file_hash is the last line of defence against
        two writers racing past the duplicate lookup. Any other constraint
        violation propagates as IntegrityError.
        """
        with self.session_factory() as db:
            try:
                new_book = BookModel(**book_data)
                db.add(new_book)
                db.commit()
                db.refresh(new_book)
                return new_book.id
            except IntegrityError as e:
                db.rollback()
                if self.get_book_by_hash(book_data.get("file_hash", "")) is None:
                    raise
                raise DuplicateBookError(book_data["file_hash"]) from e
            except Exception:
                db.rollback()
                raise

    def create_reading_progress(self, book_id: UUID) -> UUID:
        with self.session_factory() as db:
            try:
                progress = ReadingProgressModel(book_id=book_id)
                db.add(progress)
                db.commit()
                db.refresh(progress)
                return progress.id
            except Exception:
                db.rollback()
                raise

    def count_books(self) -> int:
        with self.session_factory() as db:
            return db.query(BookModel).count()

    def _to_domain(self, book: BookModel) -> StoredBook:
        return StoredBook(
            id=book.id,
            title=book.title,
            file_name=book.file_name,
            file_hash=book.file_hash,
            size_bytes=book.file_size_bytes,
            content_type=book.content_type,
            word_count=book.word_count or 0,
            chapter_count=len(book.chapters or []),
            created_at=book.created_at
        )
