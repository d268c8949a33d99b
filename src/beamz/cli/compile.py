from pathlib import Path

from . import app


@app.command()
def compile(  # noqa: A001
    modules: list[Path],
    /,
    *,
    out: Path,
    lib: Path,
    quiet: bool = False,
    workdir: Path = Path(),
) -> None:
    """Compile MODULES with the external compiler.

    Args:
        modules: Module sources, relative to the artefact directory of OUT
        out: Build output directory
        lib: Directory containing the compiled dependencies
        quiet: Hide the output of the external compiler
        workdir: Path to move into before running the command
    """
    from logging import getLogger

    from ..building.compiling import BeamCompiler
    from ..components.file_system import FileSystemWriter
    from ..configuring.settings import Settings
    from ..models import ModulePath, OutputSink

    settings = Settings.from_yaml(workdir)
    out_dir = (settings.paths.current_dir / out).resolve()
    lib_dir = (settings.paths.current_dir / lib).resolve()
    with BeamCompiler.from_settings(settings) as compiler:
        compiler.compile(
            FileSystemWriter(),
            out_dir,
            lib_dir,
            {ModulePath(module) for module in modules},
            OutputSink.Discard if quiet else OutputSink.Forward,
        )
    getLogger(__name__).info(
        "Compiled %d modules into %s",
        len(modules),
        settings.build_paths(out_dir).ebin_dir,
    )
