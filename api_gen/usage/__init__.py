"""Free-tier usage tracking.

A single usage record is persisted per user. ``UsageGate`` reads it before a
generation and increments it after a successful one::

    from api_gen.usage import JsonFileUsageStore, UsageGate

    gate = UsageGate(JsonFileUsageStore(config.usage_file))
    if gate.may_proceed():
        ...
        gate.record_usage()
"""

from api_gen.usage.gate import FREE_TIER_LIMIT, UsageGate
from api_gen.usage.models import LoadOutcome, LoadResult, UsageRecord, UsageStatus
from api_gen.usage.store import InMemoryUsageStore, JsonFileUsageStore, UsageStore

__all__ = [
    "FREE_TIER_LIMIT",
    "InMemoryUsageStore",
    "JsonFileUsageStore",
    "LoadOutcome",
    "LoadResult",
    "UsageGate",
    "UsageRecord",
    "UsageStatus",
    "UsageStore",
]
