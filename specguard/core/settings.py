"""
Pydantic Settings for specguard configuration.

Provides settings loading from TOML files, environment variables, and defaults.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .exceptions import ConfigFileError, ConfigValidationError
from .models.config import LoggingConfig
from .models.options import DEFAULT_FAILURE_EXIT_CODE, DEPRECATED_OPTIONS, RunnerConfig

CONFIG_FILE_NAME = ".specguard.toml"

_RUNNER_FIELDS = tuple(RunnerConfig.model_fields)


def _get_logger():
    from ..services.logging import NullLogger
    from .di import resolve_or_default
    from .interfaces.logger import ILogger

    return resolve_or_default(ILogger, NullLogger)


def find_config_file(start_dir: str | None = None) -> Path | None:
    """
    Find .specguard.toml by walking up from start_dir (or cwd).

    A pyproject.toml with a [tool.specguard] table is accepted as well.

    Returns:
        Path to config file, or None if not found.
    """
    start = Path(start_dir) if start_dir else Path.cwd()

    for parent in [start, *list(start.parents)]:
        config_path = parent / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

        pyproject = parent / "pyproject.toml"
        if pyproject.exists():
            try:
                with open(pyproject, "rb") as f:
                    data = tomllib.load(f)
                if "specguard" in data.get("tool", {}):
                    return pyproject
            except tomllib.TOMLDecodeError as e:
                _get_logger().debug("Failed to parse pyproject.toml at %s: %s", pyproject, e)
            except OSError as e:
                _get_logger().debug("Failed to read pyproject.toml at %s: %s", pyproject, e)

    return None


class TomlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from TOML config files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        config_path: Path | None = None,
        start_dir: str | None = None,
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._start_dir = start_dir
        self._data: dict[str, Any] | None = None
        self.config_file: str | None = None
        self.config_error: str | None = None

    def _load_toml(self) -> dict[str, Any]:
        """Load and cache TOML data."""
        if self._data is not None:
            return self._data

        self._data = {}

        path = self._config_path
        if path is None:
            path = find_config_file(self._start_dir)

        if path is None:
            return self._data

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            if path.name == "pyproject.toml":
                data = data.get("tool", {}).get("specguard", {})

            self._data = data
            self.config_file = str(path)

        except tomllib.TOMLDecodeError as e:
            _get_logger().warning("Failed to parse config file %s: %s", path, e)
            self.config_error = f"Failed to parse config file: {e}"
        except OSError as e:
            _get_logger().warning("Failed to read config file %s: %s", path, e)
            self.config_error = f"Failed to read config file: {e}"

        return self._data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from TOML data."""
        data = self._load_toml()
        return data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all TOML data for settings initialization."""
        return self._load_toml()


class SpecguardSettings(BaseSettings):
    """specguard configuration settings with TOML and environment variable support.

    Priority (highest to lowest):
    1. Explicit init values
    2. Environment variables (SPECGUARD_<field>, SPECGUARD_<section>__<field>)
    3. TOML config file (.specguard.toml or pyproject.toml [tool.specguard])
    4. Model defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="SPECGUARD_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Runner options
    cli: str | None = None
    bundler: bool = True
    binstubs: bool | str = False
    rvm: list[str] = Field(default_factory=list)
    zeus: bool = False
    turnip: bool = False
    notification: bool = True
    env: dict[str, str] = Field(default_factory=dict)
    message: str | None = None
    drb_port: int | None = None
    failure_exit_code: int = DEFAULT_FAILURE_EXIT_CODE

    # Deprecated runner options, still read so the runner can warn about them
    color: bool | str | None = None
    drb: bool | str | None = None
    fail_fast: bool | str | None = None
    formatter: str | None = None

    logging: LoggingConfig = LoggingConfig()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to add TOML loading.

        The TOML location cannot be passed through the constructor, so
        load_settings() hands over the source through a module-level variable.
        """
        toml_source = _current_toml_source or TomlConfigSource(settings_cls)
        return (
            init_settings,
            env_settings,
            toml_source,
        )

    def runner_config(self) -> RunnerConfig:
        """Build the RunnerConfig described by these settings.

        Raises:
            ConfigValidationError: If a runner option has an invalid value
        """
        data = self.model_dump(include=set(_RUNNER_FIELDS))
        for key in DEPRECATED_OPTIONS:
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        try:
            return RunnerConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigValidationError("Invalid runner option", cause=e) from e


# Module-level variable for passing to settings_customise_sources
_current_toml_source: TomlConfigSource | None = None


def load_settings(
    config_path: Path | None = None,
    start_dir: str | None = None,
    **overrides: Any,
) -> SpecguardSettings:
    """Load specguard settings from config file and environment.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)
        **overrides: Explicit values, taking priority over every other source

    Returns:
        SpecguardSettings instance with all sources merged

    Raises:
        ConfigValidationError: If a configured value is invalid
        ConfigFileError: If an explicitly given config file cannot be read
    """
    global _current_toml_source

    source = TomlConfigSource(SpecguardSettings, config_path, start_dir)
    _current_toml_source = source
    try:
        settings = SpecguardSettings(**overrides)
    except ValidationError as e:
        raise ConfigValidationError(
            "Invalid specguard configuration",
            context={"config_file": source.config_file} if source.config_file else None,
            cause=e,
        ) from e
    finally:
        _current_toml_source = None

    if source.config_error:
        if config_path is not None:
            raise ConfigFileError(source.config_error, file_path=str(config_path))
        _get_logger().warning("%s", source.config_error)
    if source.config_file:
        _get_logger().debug("Loaded configuration from %s", source.config_file)
    return settings
