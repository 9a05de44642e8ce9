"""Configuration management for the Textract OCR utility.

Loads and validates YAML configuration with defaults for the AWS
client, the source document and the output artifact.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class AWSConfig(BaseModel):
    """Settings for the Textract client."""

    region: str = "us-east-1"
    profile_name: str | None = None
    endpoint_url: str | None = None


class DocumentConfig(BaseModel):
    """Location of the document to analyse."""

    bucket: str = ""
    key: str = ""
    version: str | None = None


class OutputConfig(BaseModel):
    """Settings for the persisted response artifact.

    ``path`` is used by the CLI. ``directory`` is the only place the
    HTTP API writes to; request paths are resolved inside it.
    """

    path: str = "textract_response.json"
    indent: int = 2
    directory: str = "output"


class ServerConfig(BaseModel):
    """Settings for the HTTP API server."""

    host: str = "0.0.0.0"
    port: int = 8000


class AppConfig(BaseModel):
    """Top-level application configuration."""

    aws: AWSConfig = Field(default_factory=AWSConfig)
    document: DocumentConfig = Field(default_factory=DocumentConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    log_level: str = "INFO"


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml.

    Returns:
        Validated application configuration.
    """
    if path is None:
        path = Path("configs/config.yaml")

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        return AppConfig(**raw)

    logger.info("No config file found at %s, using defaults", path)
    return AppConfig()
