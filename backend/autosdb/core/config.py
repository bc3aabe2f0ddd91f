from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    # App
    app_name: str = "auto-sdb"  # bound into every log event as "app"
    debug: bool = False

    # Logging
    log_level: LogLevel = "INFO"
    log_json: bool = False  # JSON lines instead of the dev console renderer

    # Extraction engine
    extraction_max_workers: int = Field(6, ge=1)  # one thread per field extractor
    extraction_ghs_dedupe: bool = False  # keep repeated pictograms by default
    extraction_wgk_policy: Literal["first", "last"] = "last"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @property
    def effective_log_level(self) -> str:
        if self.debug:
            return "DEBUG"
        return self.log_level

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
