from logging import getLogger
from typing import TextIO

from ..configuring.paths import BuildPaths
from ..exceptions import ShellCommandError
from ..models import CompileRequest, ProgramName

UNIT_SEPARATOR = "\x1f"

_logger = getLogger(__name__)


class RequestEncoder:
    """Serialize compile requests into the line format read by the driver script.

    Tokens are joined with the ASCII unit separator: paths can contain spaces and \
    any printable character, never this one.
    """

    def __init__(
        self,
        program: ProgramName,
        artefact_directory_name: str = "_gleam_artefacts",
        ebin_directory_name: str = "ebin",
    ) -> None:
        self._program = program
        self._artefact_directory_name = artefact_directory_name
        self._ebin_directory_name = ebin_directory_name

    def arguments(self, request: CompileRequest) -> list[str]:
        paths = BuildPaths(
            out_dir=request.out_dir,
            artefact_directory_name=self._artefact_directory_name,
            ebin_directory_name=self._ebin_directory_name,
        )
        args = ["--lib", str(request.lib_dir), "--out", str(paths.ebin_dir)]
        args.extend(str(paths.artefact(module)) for module in sorted(request.modules))
        return args

    def encode(self, request: CompileRequest) -> str:
        return UNIT_SEPARATOR.join(self.arguments(request))

    def send(self, stdin: TextIO, request: CompileRequest) -> None:
        args = self.arguments(request)
        _logger.debug("Calling %s with %s", self._program, " ".join(args))
        try:
            stdin.write(f"{UNIT_SEPARATOR.join(args)}\n")
            stdin.flush()
        except OSError as e:
            raise ShellCommandError(self._program, e.errno) from e
        except ValueError as e:
            # Writing to a pipe that was already closed on our side
            raise ShellCommandError(self._program) from e
