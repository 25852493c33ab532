from __future__ import annotations

import os
from collections.abc import Callable, Generator

import pytest

from adapters.events.accessors import KeyAccessors
from app.config import AppSettings, LayoutSettings
from domain.models import LayoutAlgorithm
from tests.helpers.event_fixtures import MinuteSlotMetrics


def _clear_dayview_env() -> None:
    for key in list(os.environ):
        if key.startswith("DAYVIEW_"):
            os.environ.pop(key, None)


_clear_dayview_env()


@pytest.fixture(autouse=True)
def clear_dayview_env() -> Generator[None, None, None]:
    _clear_dayview_env()
    yield
    _clear_dayview_env()


@pytest.fixture
def accessors() -> KeyAccessors:
    return KeyAccessors()


@pytest.fixture
def slot_metrics() -> MinuteSlotMetrics:
    return MinuteSlotMetrics()


@pytest.fixture
def layout_settings() -> LayoutSettings:
    return LayoutSettings(
        algorithm=LayoutAlgorithm.OVERLAP,
        minimum_start_difference=15,
        day_start="00:00",
        day_end="24:00",
    )


@pytest.fixture
def layout_settings_factory(layout_settings: LayoutSettings) -> Callable[..., LayoutSettings]:
    def _factory(**overrides: object) -> LayoutSettings:
        return layout_settings.model_copy(update=overrides)

    return _factory


@pytest.fixture
def app_settings(layout_settings: LayoutSettings) -> AppSettings:
    return AppSettings(layout=layout_settings)
