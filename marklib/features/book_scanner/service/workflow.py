import asyncio
import logging
from dataclasses import replace
from typing import Optional

from marklib.features.book_parser.domain.interfaces import IBookParser
from marklib.features.book_parser.service.api import parser as default_parser
from marklib.features.directory_access.domain.models import CandidateFile
from marklib.features.library.domain.exceptions import DuplicateBookError
from marklib.features.library.service.api import LibraryService, library as default_library

from ..domain.exceptions import IngestionError
from ..domain.interfaces import IIngestionWorkflow
from ..domain.models import Duplicate, Failed, ImportOutcome, Imported

logger = logging.getLogger(__name__)


def _message(error: Exception) -> str:
    return str(error) or type(error).__name__


class BookIngestionWorkflow(IIngestionWorkflow):
    """
    Per-file import: fingerprint -> parse -> duplicate check -> store -> progress.
    Each step only runs if the previous one succeeded. Blocking work runs
    in worker threads so the event loop stays free between files.
    """

    def __init__(self, library: Optional[LibraryService] = None, parser: Optional[IBookParser] = None):
        self.library = library or default_library
        self.parser = parser or default_parser

    async def ingest(self, file: CandidateFile) -> Imported:
        # 1. Read-only steps: fingerprint, parse, duplicate lookup
        try:
            file_hash = await asyncio.to_thread(self.library.fingerprint, file.data)
            book = await asyncio.to_thread(self.parser.parse, file)
            book = replace(book, file_hash=file_hash)
            existing = await asyncio.to_thread(self.library.find_by_fingerprint, file_hash)
        except Exception as e:
            raise IngestionError(_message(e), file_name=file.name) from e

        # Duplicates are decided by content, never by name, so re-scanning
        # the same folder (or a renamed copy) never adds a second entry.
        if existing is not None:
            raise DuplicateBookError(file_hash)

        # 2. Persist the book
        try:
            book_id = await asyncio.to_thread(self.library.add_book, book)
        except DuplicateBookError:
            raise
        except Exception as e:
            raise IngestionError(_message(e), file_name=file.name) from e

        # 3. Initialize reading progress. The book row is not rolled back
        # if this fails; the file is still reported as failed.
        try:
            await asyncio.to_thread(self.library.add_reading_progress, book_id)
        except Exception as e:
            logger.warning(f"Book {book_id} ({file.name}) was stored but progress init failed: {e}")
            raise IngestionError(_message(e), file_name=file.name, book_id=book_id) from e

        return Imported(book_id=book_id, book=book)

    async def attempt(self, file: CandidateFile) -> ImportOutcome:
        try:
            return await self.ingest(file)
        except DuplicateBookError as e:
            logger.info(f"Skipping {file.name}: already in library ({e.file_hash[:12]})")
            return Duplicate(file_name=file.name, file_hash=e.file_hash)
        except IngestionError as e:
            logger.error(f"Failed to import {file.name}: {e}")
            return Failed(file_name=file.name, message=str(e))
