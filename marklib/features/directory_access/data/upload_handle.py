from typing import AsyncIterator, Iterable, List, Tuple

from marklib.core.common.enums import EntryKind
from ..domain.interfaces import IDirectoryHandle, IEntryHandle, IFileHandle
from ..domain.models import SandboxFile


class UploadedFileHandle(IFileHandle):
    """
    A file the sandboxed host already delivered to us (e.g. part of a
    folder upload). Content type is whatever the host claimed, often "".
    """

    def __init__(self, name: str, data: bytes, content_type: str = ""):
        self._name = name
        self._data = data
        self._content_type = content_type

    @property
    def kind(self) -> EntryKind:
        return EntryKind.FILE

    @property
    def name(self) -> str:
        return self._name

    async def get_file(self) -> SandboxFile:
        return SandboxFile(name=self._name, data=self._data, content_type=self._content_type)


class UploadedDirectoryHandle(IDirectoryHandle):
    """
    In-process directory capability over uploaded entries.
    Entries are yielded in insertion order.
    """

    def __init__(self, name: str, entries: Iterable[IEntryHandle] = ()):
        self._name = name
        self._entries: List[IEntryHandle] = list(entries)

    @classmethod
    def from_files(cls, name: str, files: Iterable[Tuple[str, bytes, str]]) -> "UploadedDirectoryHandle":
        """Builds a flat directory from (name, data, content_type) triples."""
        return cls(name, [UploadedFileHandle(n, d, t) for n, d, t in files])

    @property
    def kind(self) -> EntryKind:
        return EntryKind.DIRECTORY

    @property
    def name(self) -> str:
        return self._name

    def add(self, entry: IEntryHandle) -> None:
        self._entries.append(entry)

    async def values(self) -> AsyncIterator[IEntryHandle]:
        for entry in list(self._entries):
            yield entry
