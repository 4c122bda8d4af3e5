"""Shared pytest fixtures for the api-gen test suite.

Provides reusable fixtures for:
- An isolated usage file (the real ``~/.api-generator-usage.json`` is never
  touched)
- File-backed and in-memory usage stores
- A controllable clock for ``first_used`` assertions
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from api_gen.usage import InMemoryUsageStore, JsonFileUsageStore, UsageGate


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at a temp dir and clear api-gen environment overrides."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    for var in ("API_GEN_USAGE_FILE", "API_GEN_OUTPUT_DIR", "API_GEN_DEFAULT_TEMPLATE"):
        monkeypatch.delenv(var, raising=False)
    yield home


# ---------------------------------------------------------------------------
# Usage stores
# ---------------------------------------------------------------------------

@pytest.fixture
def usage_file(tmp_path: Path) -> Path:
    """Path of a usage file that does not exist yet."""
    return tmp_path / "state" / ".api-generator-usage.json"


@pytest.fixture
def file_store(usage_file: Path) -> JsonFileUsageStore:
    return JsonFileUsageStore(usage_file)


@pytest.fixture
def memory_store() -> InMemoryUsageStore:
    return InMemoryUsageStore()


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 15, 10, 30, tzinfo=timezone.utc))


@pytest.fixture
def file_gate(file_store: JsonFileUsageStore, clock: FakeClock) -> UsageGate:
    """Gate over a real JSON file in tmp_path."""
    return UsageGate(file_store, clock=clock)
