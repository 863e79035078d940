# File: marklib/core/common/enums.py

from enum import Enum, unique

@unique
class BackendKind(str, Enum):
    NATIVE = "native"
    SANDBOX = "sandbox"

@unique
class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"

@unique
class ImportStatus(str, Enum):
    IMPORTED = "imported"
    DUPLICATE = "duplicate"
    FAILED = "failed"
