"""Usage record models.

``UsageRecord`` is the single persisted entity. Its JSON form keeps the field
names ``used`` / ``firstUsed`` used by earlier releases, so existing usage files
are read unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class UsageRecord(BaseModel):
    """Free-tier usage counter plus the time of the first recorded generation."""

    model_config = ConfigDict(populate_by_name=True)

    used: int = Field(default=0, ge=0, description="Successful generations recorded")
    first_used: Optional[datetime] = Field(
        default=None,
        alias="firstUsed",
        description="Set once, on the first recorded generation",
    )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


class LoadOutcome(str, Enum):
    LOADED = "loaded"
    MISSING = "missing"
    CORRUPT = "corrupt"


@dataclass
class LoadResult:
    """Result of reading the usage record.

    ``MISSING`` and ``CORRUPT`` both carry a default record; ``detail`` keeps
    the parse or I/O error for the corrupt case.
    """

    record: UsageRecord
    outcome: LoadOutcome
    detail: str = ""

    @property
    def defaulted(self) -> bool:
        return self.outcome is not LoadOutcome.LOADED


class UsageStatus(BaseModel):
    """Snapshot reported by ``UsageGate.status``."""

    used: int = Field(default=0, ge=0)
    remaining: int = Field(default=0, ge=0)
    limit: int = Field(default=3, ge=0)

    @computed_field  # type: ignore[misc]
    @property
    def limit_reached(self) -> bool:
        return self.remaining == 0
