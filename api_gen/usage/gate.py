"""Free-tier policy: at most ``FREE_TIER_LIMIT`` completed generations."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from api_gen.usage.models import UsageRecord, UsageStatus
from api_gen.usage.store import UsageStore

FREE_TIER_LIMIT = 3


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UsageGate:
    """Decides whether a generation may run and records completed ones.

    Every operation reloads the record from the store, so the gate holds no
    state of its own between calls. None of the operations raise; store
    failures have already been absorbed by the store.

    Args:
        store: Where the usage record lives.
        limit: Number of generations allowed before the gate closes.
        clock: Returns the current time; used for ``first_used``.
    """

    def __init__(
        self,
        store: UsageStore,
        limit: int = FREE_TIER_LIMIT,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.store = store
        self.limit = limit
        self.clock = clock

    def may_proceed(self) -> bool:
        """Return ``True`` while fewer than ``limit`` generations are recorded."""
        return self.store.load().record.used < self.limit

    def record_usage(self) -> UsageRecord:
        """Count one completed generation.

        Call only after the generation succeeded. ``first_used`` is stamped on
        the first call and left alone afterwards.
        """
        record = self.store.load().record
        record.used += 1
        if record.first_used is None:
            record.first_used = self.clock()
        self.store.save(record)
        return record

    def status(self) -> UsageStatus:
        used = self.store.load().record.used
        return UsageStatus(used=used, remaining=max(0, self.limit - used), limit=self.limit)
