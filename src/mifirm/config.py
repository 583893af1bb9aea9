"""Configuration models with Pydantic validation."""

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

DEFAULT_OUTPUT_DIRECTORY = "Firmware Files"
DEFAULT_FEED_URL = (
    "https://www.apkmirror.com/apk/anhui-huami-information-technology-co-ltd/"
    "mi-fit/feed/"
)


class MiFirmConfig(BaseModel):
    """Runtime settings for extraction, logging and the release feed."""

    output_directory: Path = Field(
        default=Path(DEFAULT_OUTPUT_DIRECTORY),
        description="Root folder that receives one subfolder per device",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[str] = Field(
        default=None, description="Log file name inside the output directory"
    )
    feed_url: str = Field(
        default=DEFAULT_FEED_URL, description="RSS feed listing Mi Fit releases"
    )
    feed_timeout: float = Field(
        default=15.0, gt=0, description="Timeout in seconds for the feed request"
    )

    @field_validator("output_directory", mode="before")
    @classmethod
    def validate_output_directory(cls, v):
        if not str(v).strip():
            raise ValueError("output_directory must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("feed_url")
    @classmethod
    def validate_feed_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("feed_url must be an http(s) URL")
        return v

    @classmethod
    def from_json(cls, config_path: Union[str, Path]) -> "MiFirmConfig":
        """Load configuration from JSON file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {e}")

        return cls.model_validate(data)

    def to_json(self, config_path: Union[str, Path], indent: int = 2) -> None:
        """Save configuration to JSON file."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with config_path.open("w", encoding="utf-8") as f:
            json.dump(self.model_dump(), f, indent=indent, default=str)
