from abc import ABC, abstractmethod

from marklib.features.directory_access.domain.models import CandidateFile
from .models import ImportOutcome, Imported


class IIngestionWorkflow(ABC):
    """
    Contract for turning one candidate file into a library entry.
    """

    @abstractmethod
    async def ingest(self, file: CandidateFile) -> Imported:
        """
        Raises DuplicateBookError or IngestionError on failure.
        """
        pass

    @abstractmethod
    async def attempt(self, file: CandidateFile) -> ImportOutcome:
        """
        Same as ingest, but every per-file failure comes back as a
        Duplicate or Failed outcome instead of raising.
        """
        pass
