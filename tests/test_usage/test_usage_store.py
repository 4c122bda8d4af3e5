"""Tests for the usage record persistence (api_gen.usage.store).

Covers:
- Missing, valid and corrupt usage files
- Compatibility with the ``{"used": n, "firstUsed": ...}`` document shape
- Full overwrite on save, parent directory creation
- Save failures degrade to a warning and never raise
- In-memory store isolation
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from api_gen.usage import (
    InMemoryUsageStore,
    JsonFileUsageStore,
    LoadOutcome,
    UsageRecord,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# load()
# ---------------------------------------------------------------------------


class TestJsonFileUsageStoreLoad:
    def test_missing_file_yields_default(self, file_store, usage_file):
        result = file_store.load()
        assert result.outcome is LoadOutcome.MISSING
        assert result.defaulted is True
        assert result.record.used == 0
        assert result.record.first_used is None
        assert not usage_file.exists()

    def test_reads_existing_document(self, file_store, usage_file):
        usage_file.parent.mkdir(parents=True)
        usage_file.write_text(
            json.dumps({"used": 2, "firstUsed": "2025-06-01T12:00:00.000Z"}),
            encoding="utf-8",
        )
        result = file_store.load()
        assert result.outcome is LoadOutcome.LOADED
        assert result.defaulted is False
        assert result.record.used == 2
        assert result.record.first_used == datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)

    def test_null_first_used(self, file_store, usage_file):
        usage_file.parent.mkdir(parents=True)
        usage_file.write_text('{"used": 0, "firstUsed": null}', encoding="utf-8")
        result = file_store.load()
        assert result.outcome is LoadOutcome.LOADED
        assert result.record.first_used is None

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "not json at all",
            "{\"used\": 1",
            "[1, 2, 3]",
            '{"used": -1, "firstUsed": null}',
            '{"used": "many", "firstUsed": null}',
            '{"used": 1, "firstUsed": "yesterday"}',
        ],
    )
    def test_corrupt_content_yields_default(self, file_store, usage_file, content):
        usage_file.parent.mkdir(parents=True)
        usage_file.write_text(content, encoding="utf-8")
        result = file_store.load()
        assert result.outcome is LoadOutcome.CORRUPT
        assert result.detail
        assert result.record == UsageRecord()

    def test_undecodable_bytes_yield_default(self, file_store, usage_file):
        usage_file.parent.mkdir(parents=True)
        usage_file.write_bytes(b"\xff\xfe\x00garbage")
        result = file_store.load()
        assert result.outcome is LoadOutcome.CORRUPT
        assert result.record.used == 0

    def test_directory_in_place_of_file(self, file_store, usage_file):
        usage_file.mkdir(parents=True)
        result = file_store.load()
        assert result.outcome is LoadOutcome.CORRUPT
        assert result.record.used == 0

    def test_overlong_path_component_yields_default(self, tmp_path: Path):
        store = JsonFileUsageStore(tmp_path / ("x" * 300) / "usage.json")
        result = store.load()
        assert result.outcome is LoadOutcome.CORRUPT
        assert result.record == UsageRecord()

    def test_permission_denied_yields_default(self, file_store):
        with patch(
            "api_gen.usage.store.Path.read_text",
            side_effect=PermissionError("search permission denied"),
        ):
            result = file_store.load()
        assert result.outcome is LoadOutcome.CORRUPT
        assert "permission denied" in result.detail
        assert result.record.used == 0


# ---------------------------------------------------------------------------
# save()
# ---------------------------------------------------------------------------


class TestJsonFileUsageStoreSave:
    def test_creates_parent_and_writes_document(self, file_store, usage_file):
        stamp = datetime(2026, 1, 15, 10, 30, tzinfo=timezone.utc)
        assert file_store.save(UsageRecord(used=1, first_used=stamp)) is True

        data = json.loads(usage_file.read_text(encoding="utf-8"))
        assert set(data) == {"used", "firstUsed"}
        assert data["used"] == 1
        assert data["firstUsed"].startswith("2026-01-15T10:30:00")

    def test_unset_timestamp_written_as_null(self, file_store, usage_file):
        file_store.save(UsageRecord())
        data = json.loads(usage_file.read_text(encoding="utf-8"))
        assert data == {"used": 0, "firstUsed": None}

    def test_overwrites_in_full(self, file_store, usage_file):
        usage_file.parent.mkdir(parents=True)
        usage_file.write_text(
            json.dumps({"used": 1, "firstUsed": None, "extra": "dropped"}),
            encoding="utf-8",
        )
        file_store.save(UsageRecord(used=2))
        data = json.loads(usage_file.read_text(encoding="utf-8"))
        assert "extra" not in data
        assert data["used"] == 2

    def test_no_temp_file_left_behind(self, file_store, usage_file):
        file_store.save(UsageRecord(used=1))
        assert [p.name for p in usage_file.parent.iterdir()] == [usage_file.name]

    def test_round_trip_through_load(self, file_store):
        stamp = datetime(2026, 3, 1, 8, 0, 5, tzinfo=timezone.utc)
        file_store.save(UsageRecord(used=3, first_used=stamp))
        record = file_store.load().record
        assert record.used == 3
        assert record.first_used == stamp

    def test_write_failure_warns_and_returns_false(self, file_store, usage_file):
        with patch("api_gen.usage.store.print_warning") as warn, patch(
            "api_gen.usage.store.os.replace", side_effect=PermissionError("read-only")
        ):
            assert file_store.save(UsageRecord(used=1)) is False

        warn.assert_called_once()
        assert "Could not save usage data" in warn.call_args.args[0]
        assert not usage_file.exists()
        assert list(usage_file.parent.iterdir()) == []

    def test_unwritable_parent_does_not_raise(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        store = JsonFileUsageStore(blocker / "usage.json")

        with patch("api_gen.usage.store.print_warning") as warn:
            assert store.save(UsageRecord(used=1)) is False
        warn.assert_called_once()

    def test_markup_like_path_does_not_break_warning(self, tmp_path: Path, capsys):
        parent = tmp_path / "a["
        parent.mkdir()
        (parent / "x]").write_text("a file, not a directory", encoding="utf-8")
        store = JsonFileUsageStore(parent / "x]" / "usage.json")

        assert store.save(UsageRecord(used=1)) is False
        assert "Could not save usage data" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# InMemoryUsageStore
# ---------------------------------------------------------------------------


class TestInMemoryUsageStore:
    def test_starts_missing(self, memory_store):
        result = memory_store.load()
        assert result.outcome is LoadOutcome.MISSING
        assert result.record.used == 0

    def test_save_then_load(self, memory_store):
        memory_store.save(UsageRecord(used=2))
        result = memory_store.load()
        assert result.outcome is LoadOutcome.LOADED
        assert result.record.used == 2
        assert memory_store.saves == 1

    def test_loaded_record_is_a_copy(self):
        store = InMemoryUsageStore(UsageRecord(used=1))
        record = store.load().record
        record.used = 99
        assert store.load().record.used == 1
