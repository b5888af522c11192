"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .duration import DurationParseError, parse_duration, validate_duration_range


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class SourceConfig(BaseModel):
    """Location of the JSON events document."""

    path: str = Field("events.json", min_length=1, description="Path to the events JSON file")
    encoding: str = Field("utf-8", min_length=1, description="Text encoding of the file")

    @field_validator("path", "encoding")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped


class WatchConfig(BaseModel):
    """Hot-reload settings for the events document."""

    enabled: bool = Field(True, description="Poll the events file and reload on change")
    poll_interval: str = Field("2s", description="Polling interval (e.g. 2s, 1m, PT5S)")

    # Computed field
    poll_interval_seconds: Optional[int] = None

    @field_validator("poll_interval")
    @classmethod
    def validate_poll_interval(cls, v: str) -> str:
        try:
            validate_duration_range(parse_duration(v))
        except DurationParseError as e:
            raise ValueError(str(e)) from e
        return v

    @model_validator(mode="after")
    def compute_poll_interval_seconds(self):
        self.poll_interval_seconds = parse_duration(self.poll_interval)
        return self


class ServerConfig(BaseModel):
    """HTTP listener settings."""

    host: str = Field("127.0.0.1", min_length=1, description="Interface to bind")
    port: int = Field(3000, ge=1, le=65535, description="TCP port to listen on")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the event query service."""

    source: SourceConfig = Field(default_factory=SourceConfig, description="Events document")
    watch: WatchConfig = Field(default_factory=WatchConfig, description="Hot-reload settings")
    server: ServerConfig = Field(default_factory=ServerConfig, description="HTTP settings")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
