from abc import ABC, abstractmethod

from marklib.features.directory_access.domain.models import CandidateFile
from .models import BookRecord


class IBookParser(ABC):
    @abstractmethod
    def parse(self, file: CandidateFile) -> BookRecord:
        """
        Turns raw markdown bytes into a BookRecord.
        Must raise a BookParseError subclass for anything it refuses.
        """
        pass
