from pathlib import Path, PurePath
from typing import Annotated, Any

from appdirs import user_config_dir as appdirs_user_config_dir
from pydantic import AfterValidator, BaseModel, Field

from .. import app_name


def _join(base_key: str, to_add: str) -> Path:
    return Field(default_factory=lambda data: data[base_key] / to_add)


_Path = Annotated[Path, AfterValidator(Path.resolve)]


class Paths(BaseModel):
    current_dir: _Path
    user_config_dir: _Path = Field(
        default_factory=lambda: Path(appdirs_user_config_dir(app_name))
    )
    user_config: _Path = _join("user_config_dir", "beamz.yml")

    def model_post_init(self, __context: Any) -> None:
        for field, value in self.__dict__.items():
            setattr(self, field, value.resolve())


class BuildPaths(BaseModel):
    """Locations of the compiler inputs and outputs inside a build output directory."""

    out_dir: Path
    artefact_directory_name: str = "_gleam_artefacts"
    ebin_directory_name: str = "ebin"
    driver_script_name: str = "gleam@@compile.erl"

    @property
    def artefact_dir(self) -> Path:
        return self.out_dir / self.artefact_directory_name

    @property
    def ebin_dir(self) -> Path:
        return self.out_dir / self.ebin_directory_name

    @property
    def driver_script(self) -> Path:
        return self.artefact_dir / self.driver_script_name

    def artefact(self, module: PurePath) -> Path:
        return self.artefact_dir / module
