from contextlib import suppress
from dataclasses import dataclass
from io import TextIOWrapper
from logging import getLogger
from pathlib import Path
from subprocess import PIPE, Popen
from typing import TextIO

from ..components.protocols import FileSystemWriterProtocol
from ..configuring.paths import BuildPaths
from ..exceptions import ShellCommandError, ShellProgramNotFoundError
from ..models import ProgramName

_logger = getLogger(__name__)


@dataclass
class CompilerProcess:
    process: "Popen[bytes]"
    stdin: TextIO
    stdout: TextIO

    @property
    def pid(self) -> int:
        return self.process.pid

    def is_alive(self) -> bool:
        """Check without blocking whether the process is still running.

        A failing check is reported as a dead process.
        """
        try:
            return self.process.poll() is None
        except OSError:
            _logger.debug("Could not poll process %d", self.pid, exc_info=True)
            return False

    def terminate(self) -> None:
        """Kill the process, close its pipes and reap it. Errors are ignored.

        Pipes are closed before waiting: if the kill failed, the driver script still \
        stops on end of input.
        """
        with suppress(OSError):
            self.process.kill()
        for pipe in (self.stdin, self.stdout):
            with suppress(OSError):
                pipe.close()
        with suppress(OSError):
            self.process.wait()


class ProcessSupervisor:
    """Own the external compiler process and respawn it when it is gone.

    At most one process is owned at any time. Replacing a process always terminates \
    the previous one first.
    """

    def __init__(
        self,
        program: ProgramName,
        driver_script_source: str,
        artefact_directory_name: str = "_gleam_artefacts",
        driver_script_name: str = "gleam@@compile.erl",
    ) -> None:
        self._program = program
        self._driver_script_source = driver_script_source
        self._artefact_directory_name = artefact_directory_name
        self._driver_script_name = driver_script_name
        self._process: CompilerProcess | None = None

    @property
    def process(self) -> CompilerProcess | None:
        return self._process

    def ensure_live(
        self, io: FileSystemWriterProtocol, out_dir: Path
    ) -> CompilerProcess:
        if self._process is not None and self._process.is_alive():
            return self._process
        return self._replace(self._spawn(io, out_dir))

    def close(self) -> None:
        if self._process is None:
            return
        _logger.debug("Stopping %s process %d", self._program, self._process.pid)
        process, self._process = self._process, None
        process.terminate()

    def _replace(self, process: CompilerProcess) -> CompilerProcess:
        if self._process is not None:
            _logger.debug(
                "Replacing exited %s process %d with %d",
                self._program,
                self._process.pid,
                process.pid,
            )
            self._process.terminate()
        self._process = process
        return process

    def _spawn(self, io: FileSystemWriterProtocol, out_dir: Path) -> CompilerProcess:
        script_path = BuildPaths(
            out_dir=out_dir,
            artefact_directory_name=self._artefact_directory_name,
            driver_script_name=self._driver_script_name,
        ).driver_script
        io.write(script_path, self._driver_script_source)
        _logger.debug("Spawning %s %s", self._program, script_path)
        try:
            process = Popen(
                [self._program, str(script_path)],
                stdin=PIPE,
                stdout=PIPE,
            )
        except FileNotFoundError as e:
            raise ShellProgramNotFoundError(self._program) from e
        except OSError as e:
            raise ShellCommandError(self._program, e.errno) from e
        assert process.stdin is not None
        assert process.stdout is not None
        # Only "\n" ends a line of the protocol, "\r" is part of the line text
        return CompilerProcess(
            process,
            TextIOWrapper(
                process.stdin, encoding="utf8", newline="\n", line_buffering=True
            ),
            TextIOWrapper(
                process.stdout, encoding="utf8", errors="replace", newline="\n"
            ),
        )
