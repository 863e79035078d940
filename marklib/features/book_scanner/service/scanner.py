import asyncio
import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from marklib.features.directory_access.domain.models import CandidateFile, DirectoryReference
from marklib.features.directory_access.service.api import DirectoryAccess, directory_access as default_directory_access
from marklib.features.library.service.api import LibraryService, library as default_library

from ..domain.exceptions import ScanInProgressError
from ..domain.interfaces import IIngestionWorkflow
from ..domain.models import Imported, ScanSummary, ScanTally
from .workflow import BookIngestionWorkflow

logger = logging.getLogger(__name__)


class BookScanner:
    """
    Service responsible for bulk import of markdown books.
    One pass per call: enumerate, then import each file in order.
    """

    def __init__(
        self,
        directory_access: Optional[DirectoryAccess] = None,
        workflow: Optional[IIngestionWorkflow] = None,
        library: Optional[LibraryService] = None,
    ):
        self.directory_access = directory_access or default_directory_access
        self.library = library or default_library
        self.workflow = workflow or BookIngestionWorkflow(library=self.library)
        self._watched_directory: Optional[DirectoryReference] = None
        self._batch_lock = asyncio.Lock()

    # --- Directory selection ---

    async def select_directory(self) -> Optional[DirectoryReference]:
        return await self.directory_access.select_directory()

    @property
    def watched_directory(self) -> Optional[DirectoryReference]:
        return self._watched_directory

    def set_watched_directory(self, directory: Optional[DirectoryReference]):
        """
        Remembers a directory for future auto-scan. Last write wins.
        Nothing reads this yet.
        """
        self._watched_directory = directory

    # --- Batch operations ---

    async def scan(self, directory: Union[DirectoryReference, str, Path]) -> ScanSummary:
        """
        Imports every markdown file directly inside the directory.

        Raises:
            DirectoryAccessError: the directory could not be listed. No
            summary is produced in that case.
            ScanInProgressError: another batch is running on this scanner.
        """
        async with self._exclusive_batch():
            logger.info(f"Starting scan of: {directory}")
            files = await self.directory_access.list_markdown_files(directory)
            summary = await self._import_all(files)
            logger.info(f"Scan complete. Added: {summary.added}/{summary.total}, skipped: {summary.skipped}, failed: {summary.failed}")
            return summary

    async def add_books_from_files(self, files: Iterable[CandidateFile]) -> ScanSummary:
        """
        Same import pass as scan(), over files the caller already holds.
        """
        async with self._exclusive_batch():
            return await self._import_all(list(files))

    async def add_book_from_file(self, file: CandidateFile) -> Imported:
        """
        Imports a single file.

        Raises:
            DuplicateBookError, IngestionError
        """
        return await self.workflow.ingest(file)

    async def book_exists(self, fingerprint: str) -> bool:
        return await asyncio.to_thread(self.library.book_exists, fingerprint)

    # --- Internals ---

    async def _import_all(self, files) -> ScanSummary:
        tally = ScanTally(total=len(files))

        # One file at a time, in enumeration order.
        for file in files:
            outcome = await self.workflow.attempt(file)
            tally.record(outcome)

        return tally.freeze()

    def _exclusive_batch(self):
        if self._batch_lock.locked():
            raise ScanInProgressError("A scan is already running")
        return self._batch_lock


# Singleton Instance for easy import
scanner = BookScanner()
