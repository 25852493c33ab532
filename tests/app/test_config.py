from __future__ import annotations

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from app.config import AppSettings, LayoutSettings, load_settings
from domain.models import LayoutAlgorithm


def test_defaults() -> None:
    settings = load_settings()

    assert settings.layout.algorithm is LayoutAlgorithm.OVERLAP
    assert settings.layout.minimum_start_difference == 15
    assert (settings.layout.day_start, settings.layout.day_end) == ("00:00", "24:00")


def test_env_overrides_nested_values() -> None:
    os.environ["DAYVIEW_LAYOUT__ALGORITHM"] = "balanced-columns"
    os.environ["DAYVIEW_LAYOUT__MINIMUM_START_DIFFERENCE"] = "5"

    settings = AppSettings()

    assert settings.layout.algorithm is LayoutAlgorithm.BALANCED_COLUMNS
    assert settings.layout.minimum_start_difference == 5


def test_yaml_config_file(tmp_path: Path) -> None:
    config_path = tmp_path / "dayview.yaml"
    config_path.write_text(
        "layout:\n  algorithm: nested\n  day_start: '08:00'\n  day_end: '18:00'\n",
        encoding="utf-8",
    )

    settings = load_settings(config_path)

    assert settings.layout.algorithm is LayoutAlgorithm.NESTED
    assert settings.layout.day_start == "08:00"
    assert AppSettings._yaml_path is None


def test_env_beats_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "dayview.yaml"
    config_path.write_text("layout:\n  algorithm: nested\n", encoding="utf-8")
    os.environ["DAYVIEW_CONFIG_PATH"] = str(config_path)
    os.environ["DAYVIEW_LAYOUT__ALGORITHM"] = "columns"

    assert load_settings().layout.algorithm is LayoutAlgorithm.COLUMNS


def test_missing_config_file_fails(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "overrides",
    [
        {"minimum_start_difference": -1},
        {"day_start": "25:00"},
        {"day_start": "18:00", "day_end": "08:00"},
        {"algorithm": "spiral"},
    ],
)
def test_invalid_layout_settings(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        LayoutSettings(**overrides)
