from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from marklib.core.common.enums import BackendKind
from ..domain.interfaces import IDirectoryBackend, IDirectoryHandle
from .native_backend import NativeDirectoryBackend, PickerResult
from .sandbox_backend import SandboxDirectoryBackend


def terminal_picker() -> Optional[str]:
    """
    Native picker for headless shells: asks for a path on stdin.
    An empty answer (or EOF) counts as cancelling the dialog.
    """
    try:
        answer = input("Directory to scan: ")
    except EOFError:
        return None
    return answer.strip() or None


@dataclass
class HostEnvironment:
    """
    What the running host offers for directory access.
    A desktop shell exposes a native picker; a sandboxed host exposes a
    capability prompt (or nothing at all). Never both.
    """
    native_picker: Optional[Callable[[], PickerResult]] = None
    sandbox_prompt: Optional[Callable[[], Awaitable[IDirectoryHandle]]] = None

    @classmethod
    def native(cls, picker: Callable[[], PickerResult] = terminal_picker) -> "HostEnvironment":
        return cls(native_picker=picker)

    @classmethod
    def sandbox(cls, prompt: Optional[Callable[[], Awaitable[IDirectoryHandle]]] = None) -> "HostEnvironment":
        return cls(sandbox_prompt=prompt)

    def detect_backend(self) -> IDirectoryBackend:
        """
        Probes for the native shell first, falls back to the sandbox.
        """
        if self.native_picker is not None:
            return NativeDirectoryBackend(self.native_picker)
        return SandboxDirectoryBackend(self.sandbox_prompt)

    @property
    def backend_kind(self) -> BackendKind:
        return BackendKind.NATIVE if self.native_picker is not None else BackendKind.SANDBOX
