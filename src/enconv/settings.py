"""User settings file (``~/.enconv.yaml``).

Example::

    functional-path:
      PAW_PBE: ~/apps/vasp/potpaw_PBE.54
      PAW_LDA: ~/apps/vasp/potpaw_LDA.54
      aliases:
        K: K_sv

Unknown keys are rejected (typos should not pass silently) and every
declared directory must exist.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from enconv.app_paths import default_settings_path, expand_home


log = logging.getLogger(__name__)


EXAMPLE_SETTINGS = """\
functional-path:
  PAW_PBE: <path of PAW_PBE>
  PAW_LDA: <path of PAW_LDA>"""

HELP_SETTINGS = """\
functional-path:
  PAW_PBE: /public/apps/vasp/potpaw_PBE.54
  PAW_LDA: /public/apps/vasp/potpaw_LDA.54"""


class ConfigurationError(RuntimeError):
    pass


class FunctionalPath(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    paw_pbe: Path = Field(alias="PAW_PBE")
    paw_lda: Path = Field(alias="PAW_LDA")
    # element symbol -> potential directory name, e.g. K -> K_sv
    aliases: Optional[Dict[str, str]] = None


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    functional_path: FunctionalPath = Field(alias="functional-path")

    @classmethod
    def from_yaml_text(cls, text: str) -> "Settings":
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"settings are not valid YAML: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError("settings must be a YAML mapping with a 'functional-path' section")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"invalid settings:\n{e}") from e

    @classmethod
    def from_file(cls, path: str | Path) -> "Settings":
        path = Path(path)
        log.info("Reading settings from %s ...", path)
        if not path.is_file():
            raise ConfigurationError(f"File {path} not available. It should be a regular file.")

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"cannot read settings file {path}: {e}") from e
        settings = cls.from_yaml_text(text)
        fp = settings.functional_path
        settings = settings.model_copy(
            update={
                "functional_path": fp.model_copy(
                    update={"paw_pbe": expand_home(fp.paw_pbe), "paw_lda": expand_home(fp.paw_lda)}
                )
            }
        )
        settings.check_availability()
        return settings

    @classmethod
    def from_default(cls) -> "Settings":
        path = default_settings_path()
        if not path.is_file():
            raise ConfigurationError(missing_settings_message(path))
        return cls.from_file(path)

    def check_availability(self) -> None:
        log.info("Checking settings availability ...")
        for d in (self.functional_path.paw_pbe, self.functional_path.paw_lda):
            if not Path(d).is_dir():
                raise ConfigurationError(f"Directory {d} not available. It should be a regular directory.")

    def to_yaml(self) -> str:
        data = self.model_dump(by_alias=True, mode="json", exclude_none=True)
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def missing_settings_message(path: Path) -> str:
    return (
        f"configuration file {path} is not a regular file or doesn't exist.\n"
        "Consider creating that file with content similar to the following:\n\n"
        f"{EXAMPLE_SETTINGS}\n\n"
        "Please replace <path of ...> with the actual path of the corresponding "
        "PP directory, for example:\n\n"
        f"{HELP_SETTINGS}"
    )


def load_settings(path: str | Path | None = None) -> Settings:
    if path is None:
        return Settings.from_default()
    return Settings.from_file(path)
