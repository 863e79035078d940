import logging
from typing import Awaitable, Callable, List, Optional

from marklib.core.common.enums import BackendKind, EntryKind
from ..domain.exceptions import DirectoryAccessError, PickerAbortedError
from ..domain.interfaces import IDirectoryBackend, IDirectoryHandle, IEntryHandle
from ..domain.models import CandidateFile, CapabilityReference, is_markdown_name, repair_content_type

logger = logging.getLogger(__name__)


class SandboxDirectoryBackend(IDirectoryBackend):
    """
    Capability-handle access for sandboxed hosts (browser-style).
    The prompt is the host's directory permission dialog; None means the
    host does not offer one.
    """

    def __init__(self, prompt: Optional[Callable[[], Awaitable[IDirectoryHandle]]] = None):
        self.prompt = prompt

    @property
    def kind(self) -> BackendKind:
        return BackendKind.SANDBOX

    async def select_directory(self) -> Optional[CapabilityReference]:
        if self.prompt is None:
            logger.error("Directory picker is not supported by this host")
            return None

        try:
            handle = await self.prompt()
        except PickerAbortedError:
            return None
        except Exception as e:
            logger.error(f"Directory picker failed: {e}")
            return None

        if handle is None:
            return None

        return CapabilityReference(handle)

    async def list_markdown_files(self, ref: CapabilityReference) -> List[CandidateFile]:
        if not isinstance(ref, CapabilityReference):
            raise TypeError(f"Sandbox backend cannot read {type(ref).__name__}")

        markdown_files = []
        try:
            async for entry in ref.handle.values():
                try:
                    candidate = await self._read_entry(entry)
                except Exception as e:
                    logger.error(f"Failed to read an entry of {ref.name}: {e}")
                    continue

                if candidate is not None:
                    markdown_files.append(candidate)
        except Exception as e:
            raise DirectoryAccessError(f"Failed to read directory {ref.name}: {e}", path=ref.name) from e

        return markdown_files

    async def _read_entry(self, entry: IEntryHandle) -> Optional[CandidateFile]:
        if entry.kind != EntryKind.FILE or not is_markdown_name(entry.name):
            return None

        blob = await entry.get_file()
        return CandidateFile(
            name=entry.name,
            data=blob.data,
            content_type=repair_content_type(entry.name, blob.content_type)
        )
