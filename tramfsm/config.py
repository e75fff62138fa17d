# tramfsm/config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Union

import yaml

from tramfsm.core.errors import ConfigError


@dataclass
class TramConfig:
    """Settings for hosting a tram."""

    name: str = "tram"
    request_timeout: float = 5.0
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ConfigError("name must be a non-empty string")
        try:
            self.request_timeout = float(self.request_timeout)
        except (TypeError, ValueError):
            raise ConfigError(f"request_timeout must be a number, got {self.request_timeout!r}") from None
        if self.request_timeout <= 0:
            raise ConfigError("request_timeout must be positive")
        level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigError(f"Unknown log level {self.log_level!r}")
        self.log_level = level


def load_config(config_path: Optional[Union[str, Path]] = None) -> TramConfig:
    """
    Load configuration from a YAML file, or return defaults.

    The file holds a flat mapping of TramConfig fields; unknown keys are ignored.

    :raises ConfigError: If the file is missing, unreadable or holds invalid values.
    """
    if config_path is None:
        return TramConfig()

    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config file {path} not found")

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")

    known = {f.name for f in fields(TramConfig)}
    return TramConfig(**{k: v for k, v in data.items() if k in known})
