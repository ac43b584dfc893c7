"""Configuration loading and Pydantic models for s3presign."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field


class S3Config(BaseModel):
    """Bucket location and static credentials. Every field is required."""

    bucket: str
    region: str
    endpoint: str
    access_key: str
    secret_key: str = Field(repr=False)


class LoggingConfig(BaseModel):
    """Log level and output format."""

    level: str = "INFO"
    format: Literal["text", "json"] = "text"


class ObservabilityConfig(BaseModel):
    """Prometheus metrics toggle and the CLI's textfile export path."""

    metrics: bool = False
    textfile: str | None = None


class TransportConfig(BaseModel):
    """HTTP transport settings used by HEAD/DELETE."""

    timeout: float = 30.0


class S3PresignConfig(BaseModel):
    """Top-level s3presign configuration."""

    s3: S3Config
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    transport: TransportConfig = Field(default_factory=TransportConfig)


def _parse_s3(data: dict[str, Any] | None) -> dict[str, Any]:
    """Parse the s3 section, accepting AWS-style key aliases."""
    if data is None:
        return {}
    result = dict(data)
    if "access_key_id" in result:
        result.setdefault("access_key", result.pop("access_key_id"))
    if "secret_access_key" in result:
        result.setdefault("secret_key", result.pop("secret_access_key"))
    return result


def _parse_logging(data: dict[str, Any] | None) -> dict[str, Any]:
    """Parse the logging section from YAML data."""
    if data is None:
        return {}
    return {
        "level": str(data.get("level", "INFO")).upper(),
        "format": data.get("format", "text"),
    }


def _parse_observability(data: dict[str, Any] | None) -> dict[str, Any]:
    """Parse the observability section from YAML data."""
    if data is None:
        return {}
    return {"metrics": data.get("metrics", False), "textfile": data.get("textfile")}


def _parse_transport(data: dict[str, Any] | None) -> dict[str, Any]:
    """Parse the transport section from YAML data."""
    if data is None:
        return {}
    return {"timeout": data.get("timeout", 30.0)}


def load_config(path: Path) -> S3PresignConfig:
    """Load an S3PresignConfig from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        A fully populated S3PresignConfig validated by Pydantic.

    Raises:
        FileNotFoundError: If the config file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        pydantic.ValidationError: If a required s3 setting is missing.
    """
    with open(path, "r") as fh:
        raw: dict[str, Any] = yaml.safe_load(fh) or {}

    return S3PresignConfig(
        s3=S3Config(**_parse_s3(raw.get("s3"))),
        logging=LoggingConfig(**_parse_logging(raw.get("logging"))),
        observability=ObservabilityConfig(**_parse_observability(raw.get("observability"))),
        transport=TransportConfig(**_parse_transport(raw.get("transport"))),
    )
