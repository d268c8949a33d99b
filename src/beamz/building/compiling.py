from collections.abc import Set
from logging import getLogger
from pathlib import Path
from threading import Lock
from types import TracebackType
from typing import TYPE_CHECKING, Self, TextIO
from weakref import finalize

from ..components.protocols import CompilerProtocol, FileSystemWriterProtocol
from ..models import CompileRequest, ModulePath, OutputSink, ProgramName
from ..utils import read_driver_script
from .encoding import RequestEncoder
from .reading import ResponseReader
from .supervising import ProcessSupervisor

if TYPE_CHECKING:
    from ..configuring.settings import Settings

_logger = getLogger(__name__)


class BeamCompiler(CompilerProtocol):
    """Compile Erlang modules with a long-lived `escript` process.

    The process is spawned on the first call to `compile` and reused as long as it \
    is alive. A process that died is replaced before the next request, a failed \
    request is never retried.

    Use the compiler as a context manager (or call `close`) so that the process is \
    killed and reaped on every exit path.

    Output of the external compiler that is not part of the protocol is forwarded \
    to `forward_to` (standard output by default) for calls that ask for it.
    """

    def __init__(
        self,
        program: ProgramName = ProgramName("escript"),
        driver_script_source: str | None = None,
        artefact_directory_name: str = "_gleam_artefacts",
        ebin_directory_name: str = "ebin",
        driver_script_name: str = "gleam@@compile.erl",
        forward_to: TextIO | None = None,
    ) -> None:
        self._supervisor = ProcessSupervisor(
            program=program,
            driver_script_source=(
                read_driver_script()
                if driver_script_source is None
                else driver_script_source
            ),
            artefact_directory_name=artefact_directory_name,
            driver_script_name=driver_script_name,
        )
        self._encoder = RequestEncoder(
            program=program,
            artefact_directory_name=artefact_directory_name,
            ebin_directory_name=ebin_directory_name,
        )
        self._reader = ResponseReader(program=program, forward_to=forward_to)
        self._lock = Lock()
        self._finalizer = finalize(self, self._supervisor.close)

    @classmethod
    def from_settings(cls, settings: "Settings") -> Self:
        return cls(
            program=settings.program,
            driver_script_source=settings.driver_script_source(),
            artefact_directory_name=settings.artefact_directory_name,
            ebin_directory_name=settings.ebin_directory_name,
            driver_script_name=settings.driver_script_name,
        )

    @property
    def supervisor(self) -> ProcessSupervisor:
        return self._supervisor

    @property
    def encoder(self) -> RequestEncoder:
        return self._encoder

    def compile(
        self,
        io: FileSystemWriterProtocol,
        out_dir: Path,
        lib_dir: Path,
        modules: Set[ModulePath],
        sink: OutputSink,
    ) -> None:
        request = CompileRequest(out_dir, lib_dir, frozenset(modules))
        with self._lock:
            process = self._supervisor.ensure_live(io, out_dir)
            self._encoder.send(process.stdin, request)
            self._reader.read_until_sentinel(process.stdout, sink)

    def close(self) -> None:
        with self._lock:
            self._supervisor.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()
