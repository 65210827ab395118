"""Configuration file loader and validator.

Reads the INI file used by the demo driver into typed dataclasses. Missing
keys keep their defaults; anything that cannot be parsed or is out of range
raises a :class:`ConfigLoaderError` subclass.
"""
from __future__ import annotations

import configparser
from configparser import ConfigParser
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Union

from .logger_utils import LoggerUtils

__all__ = [
    "SynthesisSettings",
    "OutputSettings",
    "LoggingSettings",
    "Config",
    "ConfigLoaderError",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "ConfigValueError",
    "load_config",
]

logger = LoggerUtils.get_logger(__name__)


@dataclass
class SynthesisSettings:
    SAMPLE_RATE: int = 44100
    PITCH: float = 440.0
    DURATION: float = 1.0
    HARMONICS: int = 5
    BANDWIDTH: float = 130.0
    GLOTTAL_F0: float = 120.0


@dataclass
class OutputSettings:
    DIRECTORY: str = "sounds"


@dataclass
class LoggingSettings:
    LEVEL: str = "INFO"
    FILE: str = ""


@dataclass
class Config:
    SYNTHESIS: SynthesisSettings = field(default_factory=SynthesisSettings)
    OUTPUT: OutputSettings = field(default_factory=OutputSettings)
    LOGGING: LoggingSettings = field(default_factory=LoggingSettings)


class ConfigLoaderError(Exception):
    """An error occurred while processing the configuration file."""


class ConfigFileNotFoundError(ConfigLoaderError):
    """The specified configuration file does not exist."""


class ConfigFormatError(ConfigLoaderError):
    """The configuration file is not formatted correctly."""


class ConfigValueError(ConfigFormatError):
    """The configuration file contains an invalid value."""


def _coerce(section: str, key: str, raw: str, target_type: Any) -> Any:
    # annotations are strings under `from __future__ import annotations`
    type_name = target_type if isinstance(target_type, str) else target_type.__name__
    try:
        if type_name == "int":
            return int(raw)
        if type_name == "float":
            return float(raw)
    except ValueError:
        msg = f"'{section}.{key}' expects {type_name}, got '{raw}'"
        raise ConfigFormatError(msg) from None
    return raw.strip()


def _validate(config: Config) -> None:
    synth = config.SYNTHESIS
    checks = (
        (synth.SAMPLE_RATE > 0, "SYNTHESIS.SAMPLE_RATE must be positive"),
        (synth.DURATION >= 0.0, "SYNTHESIS.DURATION must not be negative"),
        (synth.HARMONICS >= 0, "SYNTHESIS.HARMONICS must not be negative"),
        (synth.GLOTTAL_F0 > 0.0, "SYNTHESIS.GLOTTAL_F0 must be positive"),
        (synth.BANDWIDTH > 0.0, "SYNTHESIS.BANDWIDTH must be positive"),
        (bool(config.OUTPUT.DIRECTORY), "OUTPUT.DIRECTORY must not be empty"),
    )
    for ok, msg in checks:
        if not ok:
            raise ConfigValueError(msg)


def load_config(config_filename: Union[str, Path]) -> Config:
    """Load ``config_filename`` into a :class:`Config`.

    Raises:
        ConfigFileNotFoundError: If the file does not exist.
        ConfigFormatError: If the file cannot be parsed or a value has the wrong type.
        ConfigValueError: If a value is out of range.
    """
    config_path = Path(config_filename)
    if not config_path.exists():
        raise ConfigFileNotFoundError(f"Configuration file '{config_filename}' not found.")

    parser = ConfigParser()
    parser.optionxform = str  # keep keys upper-case
    try:
        parser.read(config_path, encoding="utf-8")
    except configparser.Error as err:
        raise ConfigFormatError(f"Failed to parse configuration file '{config_filename}': {err}") from None

    config = Config()
    for section in fields(config):
        settings = getattr(config, section.name)
        if not parser.has_section(section.name):
            logger.debug("Section [%s] not present, using defaults", section.name)
            continue
        for key in fields(settings):
            if key.name not in parser[section.name]:
                logger.debug("Skipping undefined setting: '%s.%s'", section.name, key.name)
                continue
            raw = parser[section.name][key.name]
            setattr(settings, key.name, _coerce(section.name, key.name, raw, key.type))

    _validate(config)
    return config
