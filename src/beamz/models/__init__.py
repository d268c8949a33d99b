"""Model classes shared by the different parts of beamz.

- [`compilation`][beamz.models.compilation] contains the compile request, the \
    parsed protocol lines and the output sink selection
- [`scalars`][beamz.models.scalars] contains NewTypes that help disambiguate types \
    that are used a lot in different contexts (e.g. Path and str)
"""

from .compilation import (
    CompileRequest,
    Failure,
    OutputSink,
    PassThrough,
    ProtocolLine,
    Success,
)
from .scalars import ModulePath, ProgramName

__all__ = [
    "CompileRequest",
    "Failure",
    "ModulePath",
    "OutputSink",
    "PassThrough",
    "ProgramName",
    "ProtocolLine",
    "Success",
]
