"""Configuration schema models using Pydantic."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


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


class ServerConfig(BaseModel):
    """HTTP server settings."""

    host: str = Field("127.0.0.1", min_length=1, description="Interface to bind")
    port: int = Field(7071, ge=1, le=65535, description="Port to listen on")

    @field_validator("host")
    @classmethod
    def strip_host(cls, v: str) -> str:
        """Strip whitespace from host."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("host cannot be empty")
        return stripped


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )
    log_payloads: bool = Field(
        True, description="Log raw request bodies and parsed payloads"
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class AuthConfig(BaseModel):
    """Function key settings.

    The key itself is only ever read from the FUNCTION_KEY environment variable.
    """

    require_function_key: bool = Field(
        False, description="Refuse to start unless FUNCTION_KEY is set"
    )


class AppConfig(BaseModel):
    """Root configuration object for the Worker Scoring Service."""

    server: ServerConfig = Field(default_factory=ServerConfig, description="HTTP server")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    auth: AuthConfig = Field(default_factory=AuthConfig, description="Function key settings")
