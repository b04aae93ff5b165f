"""Application configuration using Pydantic Settings."""

from typing import Literal

from pydantic_settings import BaseSettings

from hl7path.common.constants import Strategy


class HL7PathConfig(BaseSettings):
    """Configuration loaded from environment variables."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    strategy: Strategy = Strategy.SCAN
    encoding: str = "utf-8"

    model_config = {"env_prefix": "HL7PATH_", "case_sensitive": False}


__all__ = ["HL7PathConfig"]
