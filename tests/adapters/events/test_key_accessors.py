from __future__ import annotations

from types import SimpleNamespace

from adapters.events.accessors import KeyAccessors


def test_reads_mapping_keys() -> None:
    accessors = KeyAccessors()

    assert accessors.start({"start": 1, "end": 2}) == 1
    assert accessors.end({"start": 1, "end": 2}) == 2


def test_reads_attributes_with_custom_keys() -> None:
    accessors = KeyAccessors(start_key="begins_at", end_key="ends_at")
    event = SimpleNamespace(begins_at=10, ends_at=20)

    assert accessors.start(event) == 10
    assert accessors.end(event) == 20


def test_missing_values_read_as_none() -> None:
    accessors = KeyAccessors()

    assert accessors.start({}) is None
    assert accessors.end(object()) is None
