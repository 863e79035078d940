from dataclasses import dataclass, field
from typing import List, Tuple, Union
from uuid import UUID

from marklib.core.common.enums import ImportStatus
from marklib.features.book_parser.domain.models import BookRecord


# --- Per-file outcomes (closed set) ---

@dataclass(frozen=True)
class Imported:
    book_id: UUID
    book: BookRecord
    status: ImportStatus = ImportStatus.IMPORTED

@dataclass(frozen=True)
class Duplicate:
    file_name: str
    file_hash: str
    status: ImportStatus = ImportStatus.DUPLICATE

@dataclass(frozen=True)
class Failed:
    file_name: str
    message: str
    status: ImportStatus = ImportStatus.FAILED

ImportOutcome = Union[Imported, Duplicate, Failed]


# --- Batch results ---

@dataclass(frozen=True)
class ScanError:
    filename: str
    error: str

@dataclass(frozen=True)
class ScanSummary:
    """
    Report returned after a batch completes. Never mutated afterwards.
    total == 0 means nothing was found; added == 0 alone does not.
    """
    total: int = 0
    added: int = 0
    skipped: int = 0
    errors: Tuple[ScanError, ...] = ()

    @property
    def failed(self) -> int:
        return len(self.errors)

    @property
    def found_nothing(self) -> bool:
        return self.total == 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "added": self.added,
            "skipped": self.skipped,
            "errors": [{"filename": e.filename, "error": e.error} for e in self.errors]
        }

@dataclass
class ScanTally:
    """
    Mutable accumulator used while a batch is running.
    """
    total: int = 0
    added: int = 0
    skipped: int = 0
    errors: List[ScanError] = field(default_factory=list)

    def record(self, outcome: ImportOutcome):
        if isinstance(outcome, Imported):
            self.added += 1
        elif isinstance(outcome, Duplicate):
            self.skipped += 1
        elif isinstance(outcome, Failed):
            self.errors.append(ScanError(filename=outcome.file_name, error=outcome.message))
        else:
            raise TypeError(f"Unknown import outcome: {outcome!r}")

    def freeze(self) -> ScanSummary:
        return ScanSummary(
            total=self.total,
            added=self.added,
            skipped=self.skipped,
            errors=tuple(self.errors)
        )
