from os import strerror
from pathlib import Path


class BeamzError(Exception):
    pass


class ShellProgramNotFoundError(BeamzError):
    def __init__(self, program: str) -> None:
        self.program = program
        super().__init__(f"could not find the program {program} in the PATH")


class ShellCommandError(BeamzError):
    """Failure of a command run through the external compiler process.

    `err` is the OS error code when the failure comes from the OS (spawning the \
    process, writing to its input). It is None when the external compiler answered \
    `err` or closed its output without answering: both cases are reported the same \
    way on purpose, the protocol does not tell them apart.
    """

    def __init__(self, program: str, err: int | None = None) -> None:
        self.program = program
        self.err = err
        if err is None:
            msg = f"command {program} failed"
        else:
            msg = f"command {program} failed: {strerror(err)} (errno {err})"
        super().__init__(msg)


class FileSystemError(BeamzError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"could not write {path}: {reason}")
