import logging
import os
from typing import Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError

DEFAULT_PORT = 1818


class ExporterConfig(BaseModel):
    """Exporter configuration loaded from the environment."""
    api_key: str = Field(min_length=1)
    host: str = "0.0.0.0"
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level: {value}")
        return value


def load_config(
    environ: Mapping[str, str] | None = None, port: int | None = None
) -> ExporterConfig:
    """Load configuration from environment variables.

    DEEPL_API_KEY is required; PORT, HOST and LOG_LEVEL are optional.
    An explicit ``port`` takes precedence over PORT.
    """
    if environ is None:
        environ = os.environ

    api_key = environ.get("DEEPL_API_KEY", "")
    if not api_key:
        raise ConfigError("DEEPL_API_KEY environment variable is required")

    # Only pass values that are set so model defaults apply otherwise
    values: dict[str, object] = {"api_key": api_key}
    for field, var in (("host", "HOST"), ("port", "PORT"), ("log_level", "LOG_LEVEL")):
        if environ.get(var):
            values[field] = environ[var]
    if port is not None:
        values["port"] = port

    try:
        return ExporterConfig(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
