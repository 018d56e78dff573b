"""fountainkit settings and where they are loaded from."""

from __future__ import annotations

import codecs
import json
import os
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fountainkit.exceptions import ConfigurationError, check_config_keys

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("console", "json", "structured")


def _read_yaml(path: Path) -> Any:
    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _read_toml(path: Path) -> Any:
    with path.open("rb") as f:
        return tomllib.load(f)


def _read_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


_CONFIG_READERS: dict[str, Callable[[Path], Any]] = {
    ".yml": _read_yaml,
    ".yaml": _read_yaml,
    ".toml": _read_toml,
    ".json": _read_json,
}


def load_config_file(config_path: Path | str) -> dict[str, Any]:
    """Read a YAML, TOML or JSON config file into a dict of setting values.

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the format is unknown, the file does not hold
            a mapping, or it uses a misspelled key
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    reader = _CONFIG_READERS.get(path.suffix.lower())
    if reader is None:
        raise ConfigurationError(
            message=f"Unsupported configuration file format: {path.suffix.lower()}",
            hint="Use one of the supported formats: .yml, .yaml, .toml, or .json",
            details={
                "file": str(path),
                "detected_format": path.suffix.lower(),
                "supported_formats": sorted(_CONFIG_READERS),
            },
        )

    data = reader(path)
    if not isinstance(data, dict):
        raise ConfigurationError(
            message=f"Configuration file must contain a mapping: {path}",
            hint="Write settings as key/value pairs, e.g. 'log_level: INFO'",
            details={"file": str(path), "found_type": type(data).__name__},
        )
    check_config_keys(data)
    return data


class FountainKitSettings(BaseSettings):
    """fountainkit configuration.

    Precedence, highest first:

    1. command line flags (``--debug``, ``--verbose``)
    2. config files; with several files the later ones win
    3. ``FOUNTAINKIT_*`` environment variables
    4. a ``.env`` file
    5. the defaults below
    """

    model_config = SettingsConfigDict(
        env_prefix="FOUNTAINKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Parsing and outline
    default_title: str = Field(
        default="Untitled Script",
        description="Outline title when neither the script, its title page "
        "nor its filename provides one",
        min_length=1,
    )
    auto_number_scenes: bool = Field(
        default=True,
        description="Number scene headings that carry no explicit #n# number",
    )
    file_encoding: str = Field(
        default="utf-8",
        description="Encoding of .fountain files read from disk",
    )
    max_file_size: int = Field(
        default=20 * 1024 * 1024,
        description="Largest screenplay file accepted, in bytes",
        gt=0,
    )

    # Diagnostics
    debug: bool = Field(default=False, description="Add call sites to log events")
    log_level: str = Field(
        default="WARNING",
        description="One of " + ", ".join(LOG_LEVELS),
        pattern="^(" + "|".join(LOG_LEVELS) + ")$",
    )
    log_format: str = Field(
        default="console",
        description="One of " + ", ".join(LOG_FORMATS),
        pattern="^(" + "|".join(LOG_FORMATS) + ")$",
    )
    log_file: Path | None = Field(default=None, description="Also log to this file")

    @field_validator("log_level", "log_format", mode="before")
    @classmethod
    def normalize_case(cls, v: Any, info: ValidationInfo) -> str:
        """Accept ``debug`` for ``DEBUG`` and ``JSON`` for ``json``."""
        if not isinstance(v, str):
            raise ValueError(
                f"{info.field_name} must be a string, got {type(v).__name__}"
            )
        return v.upper() if info.field_name == "log_level" else v.lower()

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_log_file(cls, v: Any) -> Path | None:
        """Expand ``$VARS`` and ``~`` and make the path absolute."""
        if v is None:
            return None
        if isinstance(v, str):
            v = Path(os.path.expandvars(v)).expanduser()
        if isinstance(v, Path):
            return v.resolve()
        raise ValueError(f"log_file must be a string or Path, got {type(v).__name__}")

    @field_validator("file_encoding")
    @classmethod
    def known_encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown text encoding: {v}") from e
        return v

    @classmethod
    def from_env(cls) -> FountainKitSettings:
        """Settings from the environment, ``.env`` and defaults only."""
        return cls()

    @classmethod
    def from_file(cls, config_path: Path | str) -> FountainKitSettings:
        """Settings from one config file, on top of the environment.

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigurationError: If the file cannot be used as configuration
        """
        return cls(**load_config_file(config_path))

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: list[Path | str] | None = None,
        env_file: Path | str | None = None,
        cli_args: dict[str, Any] | None = None,
    ) -> FountainKitSettings:
        """Merge config files, the environment and command line values.

        Missing config files are skipped with a warning. ``None`` values in
        ``cli_args`` mean "not given" and are ignored.
        """
        data: dict[str, Any] = {}
        for config_file in config_files or []:
            try:
                data.update(load_config_file(config_file))
            except FileNotFoundError:
                from fountainkit.config.logging import get_logger

                get_logger(__name__).warning(
                    "Configuration file not found, using defaults",
                    config_file=str(config_file),
                )

        if env_file:
            settings = cls(_env_file=env_file, **data)  # type: ignore[call-arg]
        else:
            settings = cls(**data)
        return settings.with_overrides(cli_args)

    def with_overrides(self, overrides: dict[str, Any] | None) -> FountainKitSettings:
        """Copy with the non-``None`` values of ``overrides`` applied."""
        given = {k: v for k, v in (overrides or {}).items() if v is not None}
        if not given:
            return self
        return type(self)(**{**self.model_dump(), **given})


CONFIG_FILENAMES = ("config.yaml", "config.toml", "config.json")
LOCAL_CONFIG_FILENAMES = ("fountainkit.yaml", "fountainkit.toml", "fountainkit.json")

_settings: FountainKitSettings | None = None
_config_paths_cache: list[Path | str] | None = None


def _get_config_paths() -> list[Path | str]:
    """Existing config files, user-wide first, then the working directory."""
    global _config_paths_cache
    if _config_paths_cache is None:
        user_dir = Path.home() / ".config" / "fountainkit"
        candidates = [user_dir / name for name in CONFIG_FILENAMES]
        candidates += [Path.cwd() / name for name in LOCAL_CONFIG_FILENAMES]
        _config_paths_cache = [path for path in candidates if _is_file(path)]
    return _config_paths_cache


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def get_settings() -> FountainKitSettings:
    """The process-wide settings, loaded on first use."""
    global _settings
    if _settings is None:
        _settings = FountainKitSettings.from_multiple_sources(
            config_files=_get_config_paths()
        )
    return _settings


def set_settings(settings: FountainKitSettings) -> None:
    """Replace the process-wide settings."""
    global _settings
    _settings = settings


def clear_settings_cache() -> None:
    """Forget loaded settings and discovered config files."""
    global _settings, _config_paths_cache
    _settings = None
    _config_paths_cache = None


def reset_settings() -> None:
    clear_settings_cache()


def get_settings_for_cli(
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> FountainKitSettings:
    """Settings for a CLI run.

    An explicit ``--config`` file replaces config file discovery.

    Raises:
        FileNotFoundError: If ``config_file`` is given but does not exist
    """
    if config_file is not None:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        return FountainKitSettings.from_multiple_sources(
            config_files=[config_file], cli_args=cli_overrides
        )
    return get_settings().with_overrides(cli_overrides)
