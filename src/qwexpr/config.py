"""Render configuration, optionally loaded from qwexpr.yaml"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ValidationError

from qwexpr.exceptions import ConfigError

CONFIG_FILENAME = "qwexpr.yaml"


class RenderConfig(BaseModel):
    """Defaults shared by expressions and their decorator managers"""

    separator: str = " "
    on_error: Literal["raise", "marker"] = "raise"
    error_marker: str = "[Error: {message}]"
    untyped_tag: str = "no-type"

    model_config = {"frozen": True, "extra": "forbid"}

    @classmethod
    def load(cls, path: Path) -> "RenderConfig":
        """Load config from yaml file, falling back to defaults if missing"""
        if not path.exists():
            return cls()

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(path, f"not valid YAML ({e})") from e

        if not isinstance(data, dict):
            raise ConfigError(path, "top level must be a mapping")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(path, str(e)) from e

    def format_error(self, error: BaseException) -> str:
        """Render the error marker used by safe rendering"""
        return self.error_marker.replace("{message}", str(error))


DEFAULT_CONFIG = RenderConfig()


def find_config(start: Path | None = None) -> Path | None:
    """Find qwexpr.yaml in the start directory or its parents."""
    cwd = start or Path.cwd()
    for parent in [cwd] + list(cwd.parents):
        candidate = parent / CONFIG_FILENAME
        if candidate.exists():
            return candidate
    return None
