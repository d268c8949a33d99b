from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .scalars import ModulePath


class OutputSink(Enum):
    """Where the external compiler output that is not part of the protocol goes."""

    Forward = "forward"
    Discard = "discard"


@dataclass(frozen=True)
class CompileRequest:
    out_dir: Path
    lib_dir: Path
    modules: frozenset[ModulePath]


@dataclass(frozen=True)
class Success:
    pass


@dataclass(frozen=True)
class Failure:
    pass


@dataclass(frozen=True)
class PassThrough:
    text: str


ProtocolLine = Success | Failure | PassThrough
