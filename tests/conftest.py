import sys
from pathlib import Path

from pytest import fixture

from beamz.building.compiling import BeamCompiler
from beamz.components.file_system import FileSystemWriter
from beamz.models import ProgramName

FAKE_DRIVER_SCRIPT = """\
import sys

while line := sys.stdin.readline():
    args = line.rstrip("\\n").split("\\x1f")
    modules = args[4:]
    for module in modules:
        print(f"compiling {module}", flush=True)
    if any(module.endswith("crash.erl") for module in modules):
        print("still working", flush=True)
        sys.exit(3)
    if any(module.endswith("progress.erl") for module in modules):
        sys.stdout.buffer.write(b"progress 50%\\rok\\nerr\\n")
        sys.stdout.buffer.flush()
        continue
    if any(module.endswith("latin1.erl") for module in modules):
        sys.stdout.buffer.write(b"caf\\xe9.erl: warning\\r\\n")
        sys.stdout.buffer.flush()
    if any(module.endswith("bad.erl") for module in modules):
        print("err", flush=True)
    else:
        print("ok", flush=True)
"""


class RecordingWriter(FileSystemWriter):
    def __init__(self) -> None:
        self.writes: list[Path] = []

    def write(self, path: Path, content: str) -> None:
        self.writes.append(path)
        super().write(path, content)


@fixture
def writer() -> RecordingWriter:
    return RecordingWriter()


@fixture
def out_dir(tmp_path: Path) -> Path:
    return tmp_path / "build" / "app"


@fixture
def lib_dir(tmp_path: Path) -> Path:
    return tmp_path / "build"


@fixture
def compiler():
    with BeamCompiler(
        program=ProgramName(sys.executable), driver_script_source=FAKE_DRIVER_SCRIPT
    ) as compiler:
        yield compiler
