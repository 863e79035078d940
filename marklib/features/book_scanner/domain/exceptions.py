from typing import Optional
from uuid import UUID


class IngestionError(Exception):
    """
    Any reason a file did not become a library entry, other than being a
    duplicate. The message is shown to the user as-is.

    book_id is set when the book row was written before the failure
    (reading-progress initialization failed afterwards).
    """

    def __init__(self, message: str, file_name: str = "", book_id: Optional[UUID] = None):
        super().__init__(message)
        self.file_name = file_name
        self.book_id = book_id


class ScanInProgressError(Exception):
    """A batch is already running on this scanner."""
