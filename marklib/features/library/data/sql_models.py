import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, Float, Text, DateTime, ForeignKey, JSON, Uuid
from sqlalchemy.orm import relationship
from marklib.core.database.base import Base

def utc_now():
    return datetime.now(timezone.utc)

class BookModel(Base):
    __tablename__ = "books"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String, nullable=False)
    file_name = Column(String, nullable=False)

    # Content fingerprint. Two files with the same bytes are the same book,
    # whatever they are called.
    file_hash = Column(String(64), nullable=False, unique=True, index=True)

    file_size_bytes = Column(Integer, nullable=False)
    content_type = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    chapters = Column(JSON, default=list)
    word_count = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), default=utc_now)

    progress = relationship(
        "ReadingProgressModel",
        back_populates="book",
        uselist=False,
        cascade="all, delete-orphan"
    )

class ReadingProgressModel(Base):
    __tablename__ = "reading_progress"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    book_id = Column(Uuid(as_uuid=True), ForeignKey("books.id"), nullable=False, unique=True, index=True)
    current_chapter = Column(Integer, default=0)
    position = Column(Float, default=0.0)
    percentage = Column(Float, default=0.0)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    book = relationship("BookModel", back_populates="progress")
