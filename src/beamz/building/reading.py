import sys
from logging import getLogger
from typing import TextIO

from ..exceptions import ShellCommandError
from ..models import (
    Failure,
    OutputSink,
    PassThrough,
    ProgramName,
    ProtocolLine,
    Success,
)

_logger = getLogger(__name__)


def parse_line(line: str) -> ProtocolLine:
    match line.strip():
        case "ok":
            return Success()
        case "err":
            return Failure()
        case _:
            return PassThrough(line)


class ResponseReader:
    def __init__(self, program: ProgramName, forward_to: TextIO | None = None) -> None:
        self._program = program
        self._forward_to = forward_to

    def read_until_sentinel(self, stdout: TextIO, sink: OutputSink) -> None:
        """Consume the answer of the external compiler to a single request.

        Args:
            stdout: Output pipe of the external compiler process.
            sink: What to do with the lines that are not sentinels.

        Raises:
            ShellCommandError: Raised if the compiler answered `err`, if its \
                output was closed before it answered or if it could not be read.
        """
        while line := self._read_line(stdout):
            match parse_line(line):
                case Success():
                    return
                case Failure():
                    raise ShellCommandError(self._program)
                case PassThrough(text):
                    self._forward(text, sink)
        _logger.debug("Output of %s closed before any answer", self._program)
        raise ShellCommandError(self._program)

    def _read_line(self, stdout: TextIO) -> str:
        try:
            return stdout.readline()
        except OSError as e:
            raise ShellCommandError(self._program, e.errno) from e
        except ValueError as e:
            # Undecodable output or a pipe already closed on our side
            raise ShellCommandError(self._program) from e

    def _forward(self, text: str, sink: OutputSink) -> None:
        match sink:
            case OutputSink.Forward:
                (sys.stdout if self._forward_to is None else self._forward_to).write(
                    text
                )
            case OutputSink.Discard:
                pass
