from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated, ClassVar

from pydantic import AfterValidator, BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from adapters.slots.linear import parse_clock
from domain.models import LayoutAlgorithm

DEFAULT_CONFIG_PATH = Path("config/dayview.yaml")


def _validate_clock(value: str) -> str:
    normalized = str(value or "").strip()
    parse_clock(normalized)
    return normalized


ClockTime = Annotated[str, AfterValidator(_validate_clock)]


class LayoutSettings(BaseModel):
    algorithm: LayoutAlgorithm = LayoutAlgorithm.OVERLAP
    minimum_start_difference: float = Field(default=15.0, ge=0)
    day_start: ClockTime = "00:00"
    day_end: ClockTime = "24:00"
    start_key: str = "start"
    end_key: str = "end"

    @field_validator("algorithm", mode="before")
    @classmethod
    def normalize_algorithm(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower().replace("-", "_")
        return value

    @model_validator(mode="after")
    def ensure_day_order(self) -> "LayoutSettings":
        if parse_clock(self.day_end) <= parse_clock(self.day_start):
            msg = "layout.day_end must be after layout.day_start"
            raise ValueError(msg)
        return self


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DAYVIEW_", env_nested_delimiter="__")

    layout: LayoutSettings = LayoutSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def load_settings(config_path: Path | None = None) -> AppSettings:
    env_path = os.getenv("DAYVIEW_CONFIG_PATH")
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = config_path
    elif env_path:
        resolved_path = Path(env_path)
    elif DEFAULT_CONFIG_PATH.exists():
        resolved_path = DEFAULT_CONFIG_PATH

    previous = AppSettings._yaml_path
    try:
        if resolved_path is not None:
            if not resolved_path.exists():
                msg = f"Config file not found: {resolved_path}"
                raise FileNotFoundError(msg)
            AppSettings._yaml_path = resolved_path
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous
