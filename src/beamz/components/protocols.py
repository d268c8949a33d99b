from collections.abc import Set
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..models import ModulePath, OutputSink


class FileSystemWriterProtocol(Protocol):
    """Write files on behalf of the compiler driver.

    Implementations must overwrite existing files and raise a \
    [`FileSystemError`][beamz.exceptions.FileSystemError] when writing fails.
    """

    def write(self, path: Path, content: str) -> None: ...


class CompilerProtocol(Protocol):
    def compile(
        self,
        io: FileSystemWriterProtocol,
        out_dir: Path,
        lib_dir: Path,
        modules: Set["ModulePath"],
        sink: "OutputSink",
    ) -> None: ...

    def close(self) -> None: ...
