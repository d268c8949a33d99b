import sys
from io import StringIO
from pathlib import Path, PurePath

from pytest import CaptureFixture, raises

from beamz.building.compiling import BeamCompiler
from beamz.configuring.paths import Paths
from beamz.configuring.settings import Settings
from beamz.exceptions import ShellCommandError, ShellProgramNotFoundError
from beamz.models import ModulePath, OutputSink, ProgramName

from .conftest import FAKE_DRIVER_SCRIPT, RecordingWriter


def _modules(*names: str) -> set[ModulePath]:
    return {ModulePath(PurePath(name)) for name in names}


def test_compile_forwards_output(
    compiler: BeamCompiler,
    writer: RecordingWriter,
    out_dir: Path,
    lib_dir: Path,
    capsys: CaptureFixture[str],
) -> None:
    compiler.compile(writer, out_dir, lib_dir, _modules("foo.erl"), OutputSink.Forward)

    artefact = out_dir / "_gleam_artefacts" / "foo.erl"
    assert capsys.readouterr().out == f"compiling {artefact}\n"


def test_compile_discards_output(
    compiler: BeamCompiler,
    writer: RecordingWriter,
    out_dir: Path,
    lib_dir: Path,
    capsys: CaptureFixture[str],
) -> None:
    compiler.compile(writer, out_dir, lib_dir, _modules("foo.erl"), OutputSink.Discard)

    assert capsys.readouterr().out == ""


def test_live_process_is_reused(
    compiler: BeamCompiler, writer: RecordingWriter, out_dir: Path, lib_dir: Path
) -> None:
    compiler.compile(writer, out_dir, lib_dir, _modules("a.erl"), OutputSink.Discard)
    first = compiler.supervisor.process
    compiler.compile(writer, out_dir, lib_dir, _modules("b.erl"), OutputSink.Discard)

    assert compiler.supervisor.process is first
    assert len(writer.writes) == 1


def test_reported_failure_keeps_process(
    compiler: BeamCompiler,
    writer: RecordingWriter,
    out_dir: Path,
    lib_dir: Path,
    capsys: CaptureFixture[str],
) -> None:
    with raises(ShellCommandError) as exc_info:
        compiler.compile(
            writer, out_dir, lib_dir, _modules("bad.erl"), OutputSink.Forward
        )
    first = compiler.supervisor.process
    compiler.compile(writer, out_dir, lib_dir, _modules("a.erl"), OutputSink.Discard)

    assert exc_info.value.err is None
    assert "bad.erl" in capsys.readouterr().out
    assert compiler.supervisor.process is first
    assert len(writer.writes) == 1


def test_dead_process_is_respawned_once(
    compiler: BeamCompiler, writer: RecordingWriter, out_dir: Path, lib_dir: Path
) -> None:
    with raises(ShellCommandError) as exc_info:
        compiler.compile(
            writer, out_dir, lib_dir, _modules("crash.erl"), OutputSink.Discard
        )
    crashed = compiler.supervisor.process
    assert crashed is not None
    crashed.process.wait()

    compiler.compile(writer, out_dir, lib_dir, _modules("a.erl"), OutputSink.Discard)

    assert exc_info.value.err is None
    assert compiler.supervisor.process is not crashed
    assert len(writer.writes) == 2


def test_close_after_failure_kills_and_reaps(
    writer: RecordingWriter, out_dir: Path, lib_dir: Path
) -> None:
    with (
        raises(ShellCommandError),
        BeamCompiler(
            program=ProgramName(sys.executable),
            driver_script_source=FAKE_DRIVER_SCRIPT,
        ) as compiler,
    ):
        compiler.compile(writer, out_dir, lib_dir, set(), OutputSink.Discard)
        process = compiler.supervisor.process
        compiler.compile(
            writer, out_dir, lib_dir, _modules("bad.erl"), OutputSink.Discard
        )

    assert compiler.supervisor.process is None
    assert process is not None
    assert process.process.returncode is not None
    assert process.stdout.closed


def test_default_driver_script_is_packaged(
    writer: RecordingWriter, out_dir: Path
) -> None:
    with BeamCompiler(program=ProgramName("beamz-this-program-does-not-exist")) as c:
        with raises(ShellProgramNotFoundError):
            c.compile(writer, out_dir, out_dir, set(), OutputSink.Discard)

    script = (out_dir / "_gleam_artefacts" / "gleam@@compile.erl").read_text(
        encoding="utf8"
    )
    assert script.startswith("#!/usr/bin/env escript")
    assert "compile:file" in script
    assert "~s" not in script


def test_from_settings(
    tmp_path: Path, writer: RecordingWriter, lib_dir: Path
) -> None:
    template = tmp_path / "driver.py"
    template.write_text(FAKE_DRIVER_SCRIPT, encoding="utf8")
    settings = Settings(
        program=ProgramName(sys.executable),
        artefact_directory_name="_artefacts",
        driver_script_name="driver.py",
        driver_script_template=template,
        paths=Paths(current_dir=tmp_path),
    )
    out_dir = tmp_path / "out"

    with BeamCompiler.from_settings(settings) as compiler:
        compiler.compile(
            writer, out_dir, lib_dir, _modules("a.erl"), OutputSink.Discard
        )

    assert writer.writes == [out_dir / "_artefacts" / "driver.py"]


def test_sentinel_must_be_a_whole_line(
    writer: RecordingWriter, out_dir: Path, lib_dir: Path
) -> None:
    target = StringIO()
    with BeamCompiler(
        program=ProgramName(sys.executable),
        driver_script_source=FAKE_DRIVER_SCRIPT,
        forward_to=target,
    ) as compiler:
        with raises(ShellCommandError):
            compiler.compile(
                writer, out_dir, lib_dir, _modules("progress.erl"), OutputSink.Forward
            )
        compiler.compile(
            writer, out_dir, lib_dir, _modules("a.erl"), OutputSink.Forward
        )

    assert "progress 50%\rok\n" in target.getvalue()
    assert target.getvalue().endswith(
        f"compiling {out_dir / '_gleam_artefacts' / 'a.erl'}\n"
    )


def test_undecodable_output_is_replaced(
    writer: RecordingWriter, out_dir: Path, lib_dir: Path
) -> None:
    target = StringIO()
    with BeamCompiler(
        program=ProgramName(sys.executable),
        driver_script_source=FAKE_DRIVER_SCRIPT,
        forward_to=target,
    ) as compiler:
        compiler.compile(
            writer, out_dir, lib_dir, _modules("latin1.erl"), OutputSink.Forward
        )

    assert target.getvalue().endswith("caf\ufffd.erl: warning\r\n")
