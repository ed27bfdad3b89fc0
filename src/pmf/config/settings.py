"""Application settings.

All configuration is sourced from environment variables (and optionally `.env`).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.exceptions import ConfigurationError
from ..core.models import LayoutConfig


class Settings(BaseSettings):
    """Typed environment-backed settings for PMF."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    log_level: str = Field(default="INFO", validation_alias=AliasChoices("PMF_LOG_LEVEL", "LOG_LEVEL"))
    json_logs: bool = Field(default=False, alias="PMF_JSON_LOGS")

    # Optional JSON catalog replacing the built-in sample workflows.
    catalog_path: Optional[Path] = Field(default=None, alias="PMF_CATALOG_PATH")

    # Layout overrides; unset values fall back to LayoutConfig defaults.
    container_width: Optional[float] = Field(default=None, alias="PMF_CONTAINER_WIDTH")
    container_height: Optional[float] = Field(default=None, alias="PMF_CONTAINER_HEIGHT")

    expand_entities: bool = Field(default=True, alias="PMF_EXPAND_ENTITIES")

    def layout_config(self, **overrides: float) -> LayoutConfig:
        """Build the LayoutConfig for this environment.

        Keyword overrides (e.g. from CLI flags) win over environment values.
        """
        values = {
            "container_width": self.container_width,
            "container_height": self.container_height,
        }
        values.update(overrides)
        try:
            return LayoutConfig(**{key: value for key, value in values.items() if value is not None})
        except ValidationError as exc:
            raise ConfigurationError(
                "Invalid layout configuration",
                context={"errors": [err["msg"] for err in exc.errors()]},
            ) from exc
