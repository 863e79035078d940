from typing import Optional


class DirectoryAccessError(Exception):
    """
    The selected directory could not be enumerated at all (vanished,
    permission revoked, handle invalidated). Aborts the whole scan.
    The original error is chained as __cause__.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class PickerAbortedError(Exception):
    """
    Raised by a sandbox directory prompt when the user dismisses it.
    Never escapes the backend: selection turns it into None.
    """
