from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from app.cli import app
from tests.helpers.event_fixtures import events_fixture_path

runner = CliRunner()


def test_layout_writes_styled_events(tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        [
            "layout",
            str(events_fixture_path("team_day.json")),
            "--output",
            str(tmp_path),
            "--algorithm",
            "columns",
        ],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads((tmp_path / "team_day.layout.json").read_text(encoding="utf-8"))
    styles = {item["event"]["id"]: item["style"] for item in payload["events"]}
    assert list(styles) == ["planning", "standup", "review", "lunch", "interview", "focus"]
    assert styles["planning"]["xOffset"] == 0
    assert styles["standup"]["xOffset"] == 50
    assert styles["review"]["xOffset"] == 50
    assert styles["focus"]["width"] == 100
    assert styles["planning"]["top"] == 37.5


def test_layout_prints_table_for_directory(tmp_path: Path) -> None:
    source = events_fixture_path("team_day.json")
    (tmp_path / "monday.json").write_text(source.read_text(encoding="utf-8"), encoding="utf-8")

    result = runner.invoke(app, ["layout", str(tmp_path), "--algorithm", "nested"])

    assert result.exit_code == 0, result.output
    assert "monday.json" in result.output
    assert "Sprint" in result.output


def test_layout_uses_configured_day_window(tmp_path: Path) -> None:
    config_path = tmp_path / "dayview.yaml"
    config_path.write_text(
        "layout:\n  algorithm: overlap\n  day_start: '08:00'\n  day_end: '18:00'\n",
        encoding="utf-8",
    )

    result = runner.invoke(
        app,
        [
            "layout",
            str(events_fixture_path("team_day.json")),
            "--config",
            str(config_path),
            "--output",
            str(tmp_path / "out"),
        ],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads((tmp_path / "out" / "team_day.layout.json").read_text(encoding="utf-8"))
    planning = next(item for item in payload["events"] if item["event"]["id"] == "planning")
    assert planning["style"]["top"] == pytest.approx(10)


def test_layout_reports_invalid_events(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text(
        json.dumps([{"start": "2024-03-04T10:00:00", "end": "2024-03-04T09:00:00"}]),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["layout", str(path)])

    assert result.exit_code == 1
    assert "Invalid events file" in result.output


def test_layout_reports_mixed_timezones(tmp_path: Path) -> None:
    path = tmp_path / "mixed.json"
    payload = [
        {"id": "a", "start": "2024-03-04T09:00:00Z", "end": "2024-03-04T10:00:00Z"},
        {"id": "b", "start": "2024-03-04T09:30:00", "end": "2024-03-04T10:30:00"},
    ]
    path.write_text(json.dumps(payload), encoding="utf-8")

    result = runner.invoke(app, ["layout", str(path)])

    assert result.exit_code == 1
    assert "Invalid events file" in result.output


def test_layout_missing_input(tmp_path: Path) -> None:
    result = runner.invoke(app, ["layout", str(tmp_path / "nope.json")])

    assert result.exit_code == 1


def test_validate_accepts_fixture() -> None:
    result = runner.invoke(app, ["validate", str(events_fixture_path("team_day.json"))])

    assert result.exit_code == 0
    assert "6 events" in result.output


def test_validate_rejects_garbage(tmp_path: Path) -> None:
    path = tmp_path / "garbage.json"
    path.write_text("{not json", encoding="utf-8")

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 1
    assert "Validation failed" in result.output
