from dataclasses import dataclass
from pathlib import Path
from typing import Union

from marklib.core.config.settings import settings
from .interfaces import IDirectoryHandle


def is_markdown_name(name: str) -> bool:
    """
    Literal, case-sensitive suffix match. "notes.MD" and "notes.txt" are
    not books.
    """
    return name.endswith(settings.MARKDOWN_SUFFIXES)


def repair_content_type(name: str, content_type: str) -> str:
    """
    Sandboxed hosts often hand back files with no MIME type at all.
    Downstream format validation keys off the content type, so a markdown
    name with an empty type gets the canonical markdown label.
    """
    if not content_type and is_markdown_name(name):
        return settings.MARKDOWN_CONTENT_TYPE
    return content_type


@dataclass(frozen=True)
class PathReference:
    """
    A directory picked through the native shell. Only the native backend
    can read it.
    """
    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class CapabilityReference:
    """
    A directory capability granted by a sandboxed host. The handle is the
    only way in; there is no path behind it.
    """
    handle: IDirectoryHandle

    @property
    def name(self) -> str:
        return self.handle.name

    def __str__(self) -> str:
        return f"<capability {self.handle.name}>"


DirectoryReference = Union[PathReference, CapabilityReference]


@dataclass(frozen=True)
class CandidateFile:
    """
    One enumerated markdown file, fully read into memory.
    """
    name: str
    data: bytes
    content_type: str = ""

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class SandboxFile:
    """
    What a sandbox file handle materializes to. The content type may be
    empty; the backend repairs it before emitting a CandidateFile.
    """
    name: str
    data: bytes
    content_type: str = ""
