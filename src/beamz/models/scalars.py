"""Model NewTypes to disambiguate multi-usage types."""

from pathlib import PurePath
from typing import NewType

ModulePath = NewType("ModulePath", PurePath)
"""Derived from PurePath to represent a module source, relative to the artefact \
directory of the build output."""

ProgramName = NewType("ProgramName", str)
"""Derived from str to represent the name of an executable looked up in the PATH."""
