from functools import reduce
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, Field

from ..models import ProgramName
from ..utils import config_dirs, load_all_yamls, read_driver_script
from .paths import BuildPaths, Paths


class Settings(BaseModel):
    program: ProgramName = ProgramName("escript")
    artefact_directory_name: str = "_gleam_artefacts"
    ebin_directory_name: str = "ebin"
    driver_script_name: str = "gleam@@compile.erl"
    driver_script_template: Path | None = None
    paths: Paths = Field(default_factory=lambda: Paths(current_dir=Path()))

    def build_paths(self, out_dir: Path) -> BuildPaths:
        return BuildPaths(
            out_dir=out_dir,
            artefact_directory_name=self.artefact_directory_name,
            ebin_directory_name=self.ebin_directory_name,
            driver_script_name=self.driver_script_name,
        )

    def driver_script_source(self) -> str:
        if self.driver_script_template is not None:
            return self.driver_script_template.read_text(encoding="utf8")
        return read_driver_script()

    @classmethod
    def from_yaml(cls, path: Path) -> Self:
        resolved_path = path.resolve()
        paths = Paths(current_dir=resolved_path)
        content: dict[str, Any] = reduce(
            lambda a, b: {**a, **(b or {})},
            load_all_yamls(
                d
                for p in config_dirs(paths.user_config_dir, resolved_path)
                if (d := p / "beamz.yml").is_file()
            ),
            {},
        )
        if content.get("paths") is None:
            content["paths"] = {}
        if "current_dir" not in content["paths"]:
            content["paths"]["current_dir"] = resolved_path
        template = content.get("driver_script_template")
        if template is not None and not Path(template).is_absolute():
            content["driver_script_template"] = resolved_path / template
        return cls.model_validate(content)
