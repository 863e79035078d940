import logging
from pathlib import Path
from typing import List, Optional, Union

from marklib.core.common.enums import BackendKind
from ..data.host import HostEnvironment
from ..domain.models import CandidateFile, DirectoryReference, PathReference

logger = logging.getLogger(__name__)


class DirectoryAccess:
    """
    Facade for the Directory Access Feature.
    Picks the backend by probing the host on every call, so nothing above
    this layer ever asks which environment it is running in.
    """

    def __init__(self, host: Optional[HostEnvironment] = None):
        self.host = host or HostEnvironment.native()

    @property
    def backend_kind(self) -> BackendKind:
        return self.host.backend_kind

    async def select_directory(self) -> Optional[DirectoryReference]:
        """
        Returns None when the user cancels. Cancelling is not an error.
        """
        ref = await self.host.detect_backend().select_directory()
        if ref is None:
            logger.info("Directory selection cancelled")
        return ref

    async def list_markdown_files(self, ref: Union[DirectoryReference, str, Path]) -> List[CandidateFile]:
        """
        Lists the markdown files directly inside the directory.
        Raw paths are accepted for the native shell.

        Raises:
            DirectoryAccessError: the directory itself cannot be read.
        """
        if isinstance(ref, (str, Path)):
            ref = PathReference(Path(ref))

        files = await self.host.detect_backend().list_markdown_files(ref)
        logger.info(f"Found {len(files)} markdown files in {ref}")
        return files


# Singleton Instance for easy import
directory_access = DirectoryAccess()
