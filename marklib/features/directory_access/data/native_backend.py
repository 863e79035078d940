import asyncio
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from marklib.core.common.enums import BackendKind
from marklib.core.config.settings import settings
from ..domain.exceptions import DirectoryAccessError
from ..domain.interfaces import IDirectoryBackend
from ..domain.models import CandidateFile, PathReference, is_markdown_name

logger = logging.getLogger(__name__)

# Host dialogs may answer with a single path, a list of paths, or nothing.
PickerResult = Union[str, Sequence[str], None]


class NativeDirectoryBackend(IDirectoryBackend):
    """
    Path-based access for the desktop shell.
    The picker is the host's blocking directory dialog.
    """

    def __init__(self, picker: Callable[[], PickerResult]):
        self.picker = picker

    @property
    def kind(self) -> BackendKind:
        return BackendKind.NATIVE

    async def select_directory(self) -> Optional[PathReference]:
        result = await asyncio.to_thread(self.picker)

        if isinstance(result, (list, tuple)):
            result = result[0] if result else None

        if not result:
            return None

        return PathReference(Path(result))

    async def list_markdown_files(self, ref: PathReference) -> List[CandidateFile]:
        if not isinstance(ref, PathReference):
            raise TypeError(f"Native backend cannot read {type(ref).__name__}")

        entries = await asyncio.to_thread(self._read_dir, ref.path)

        markdown_files = []
        for entry in entries:
            if not is_markdown_name(entry.name):
                continue

            data = await asyncio.to_thread(self._read_entry, entry)
            if data is None:
                continue

            markdown_files.append(
                CandidateFile(name=entry.name, data=data, content_type=settings.MARKDOWN_CONTENT_TYPE)
            )

        return markdown_files

    def _read_dir(self, path: Path) -> List[Path]:
        """
        Immediate children only. Subdirectories are never descended into.
        """
        try:
            return list(path.iterdir())
        except OSError as e:
            raise DirectoryAccessError(f"Failed to read directory {path}: {e}", path=str(path)) from e

    def _read_entry(self, entry: Path) -> Optional[bytes]:
        """
        Returns None for anything that is not a readable regular file.
        """
        try:
            if not entry.is_file():
                return None
            return entry.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read file {entry}: {e}")
            return None
