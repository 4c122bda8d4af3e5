"""Persistence for the singleton usage record.

The store never raises: an unreadable record degrades to the default one and
a failed write is reported as a console warning. Losing a count is an
acceptable outcome for a soft free-tier limit.

No locking is done. Two invocations running a load/modify/save cycle at the
same time can lose an increment; the replace-on-save only guarantees that a
reader never sees a half-written file.
"""

from __future__ import annotations

import contextlib
import os
from pathlib import Path
from typing import Protocol

from rich.markup import escape

from api_gen.usage.models import LoadOutcome, LoadResult, UsageRecord
from api_gen.utils import print_warning


class UsageStore(Protocol):
    """Anything that can load and save the usage record."""

    def load(self) -> LoadResult: ...

    def save(self, record: UsageRecord) -> bool: ...


class JsonFileUsageStore:
    """Usage record kept as a small JSON document at a fixed path.

    Args:
        path: Location of the usage file, normally
            ``~/.api-generator-usage.json`` (see ``Config.usage_file``).
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> LoadResult:
        """Read the record, falling back to the zero record on any failure."""
        try:
            raw = self.path.read_text(encoding="utf-8")
            record = UsageRecord.model_validate_json(raw)
        except FileNotFoundError:
            return LoadResult(UsageRecord(), LoadOutcome.MISSING)
        except (OSError, ValueError) as exc:
            # pydantic's ValidationError and UnicodeDecodeError are ValueErrors.
            return LoadResult(UsageRecord(), LoadOutcome.CORRUPT, detail=str(exc))
        return LoadResult(record, LoadOutcome.LOADED)

    def save(self, record: UsageRecord) -> bool:
        """Overwrite the record in full.

        Returns:
            ``True`` if the record was written, ``False`` if the write failed
            (a warning is printed in that case).
        """
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(record.to_json(), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            print_warning(f"Warning: Could not save usage data ({escape(str(exc))})")
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            return False
        return True


class InMemoryUsageStore:
    """Process-local store, used in tests."""

    def __init__(self, record: UsageRecord | None = None) -> None:
        self.record = record
        self.saves = 0

    def load(self) -> LoadResult:
        if self.record is None:
            return LoadResult(UsageRecord(), LoadOutcome.MISSING)
        return LoadResult(self.record.model_copy(), LoadOutcome.LOADED)

    def save(self, record: UsageRecord) -> bool:
        self.record = record.model_copy()
        self.saves += 1
        return True
