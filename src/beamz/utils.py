"""Provide general utility functions that would not fit in other modules."""

from collections.abc import Iterable, Iterator
from contextlib import suppress
from pathlib import Path
from typing import Any


def import_module_and_submodules(package_name: str) -> None:
    """Import all modules and submodules from a package.

    From https://github.com/allenai/allennlp/blob/master/allennlp/common/util.py.

    Args:
        package_name: Name of the package to fully import.
    """
    from importlib import import_module, reload
    from importlib import invalidate_caches as importlib_invalidate_caches
    from pkgutil import walk_packages
    from sys import modules

    importlib_invalidate_caches()

    if package_name in modules:
        module = modules[package_name]
        reload(module)
    else:
        module = import_module(package_name)
    path = getattr(module, "__path__", [])
    path_string = "" if not path else path[0]

    for module_finder, name, _ in walk_packages(path):
        if (
            path_string
            and hasattr(module_finder, "path")
            and module_finder.path != path_string
        ):
            continue
        subpackage = f"{package_name}.{name}"
        import_module_and_submodules(subpackage)


def config_dirs(user_config_dir: Path, current_dir: Path) -> Iterator[Path]:
    """Yield the directories that can hold a configuration file, lowest priority first.

    Args:
        user_config_dir: Directory of the user configuration.
        current_dir: Directory beamz is run from.

    Yields:
        The user configuration directory, then every directory from the root of \
        the filesystem down to `current_dir`.
    """
    yield user_config_dir
    current_dir = current_dir.resolve()
    yield from intermediate_dirs(Path(current_dir.anchor), current_dir)


def intermediate_dirs(start: Path, end: Path) -> Iterator[Path]:
    start = start.resolve()
    yield start
    for part in end.resolve().relative_to(start).parts:
        start /= part
        yield start


def load_yaml(path: Path) -> Any:
    from yaml import safe_load

    return safe_load(path.read_text(encoding="utf8"))


def load_all_yamls(paths: Iterable[Path]) -> Iterator[Any]:
    for path in paths:
        with suppress(FileNotFoundError):
            yield load_yaml(path)


def read_driver_script() -> str:
    """Read the Erlang driver script shipped with beamz.

    Returns:
        Source of the escript run by the external compiler process.
    """
    from importlib.resources import files

    return (
        files("beamz")
        .joinpath("templates")
        .joinpath("gleam@@compile.erl")
        .read_text(encoding="utf8")
    )
