from abc import ABC, abstractmethod
from typing import AsyncIterator

from marklib.core.common.enums import BackendKind, EntryKind


class IEntryHandle(ABC):
    """
    One entry inside a capability-granted directory.
    Mirrors the shape of the browser File System Access API.
    """

    @property
    @abstractmethod
    def kind(self) -> EntryKind:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass


class IFileHandle(IEntryHandle):
    @abstractmethod
    async def get_file(self):
        """
        Materializes the entry.
        Returns: SandboxFile (name, bytes, possibly-empty content type)
        """
        pass


class IDirectoryHandle(IEntryHandle):
    @abstractmethod
    def values(self) -> AsyncIterator[IEntryHandle]:
        """
        Asynchronously yields the immediate children of the directory.
        Raising from the iterator means the directory itself is unusable.
        """
        pass


class IDirectoryBackend(ABC):
    """
    Contract shared by the native-path and sandbox-capability backends.
    """

    @property
    @abstractmethod
    def kind(self) -> BackendKind:
        pass

    @abstractmethod
    async def select_directory(self):
        """
        Asks the user for a directory.
        Returns: DirectoryReference, or None when the user cancelled.
        """
        pass

    @abstractmethod
    async def list_markdown_files(self, ref):
        """
        Reads every markdown file directly inside the referenced directory.
        Unreadable entries are skipped; a directory-level failure raises
        DirectoryAccessError.
        Returns: List[CandidateFile] in enumeration order.
        """
        pass
