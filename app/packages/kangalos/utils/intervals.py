"""Assignment interval overlap checks.

An interval is ``[start, end)`` with ``end=None`` meaning still active. The
overlap test is inclusive at both comparisons, so intervals that merely touch
(``a.end == b.start``) count as overlapping.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from app.packages.kangalos.core.timezone import to_utc


@dataclass(frozen=True)
class Interval:
    start: datetime
    end: Optional[datetime] = None

    def __post_init__(self) -> None:
        # 统一为 UTC，避免数据库读出的无时区值与请求值比较时报错
        object.__setattr__(self, "start", to_utc(self.start))
        object.__setattr__(self, "end", to_utc(self.end))
        if self.end is not None and self.end < self.start:
            raise ValueError("interval end must not precede its start")

    def overlaps(self, other: "Interval") -> bool:
        starts_before_other_ends = other.end is None or self.start <= other.end
        other_starts_before_end = self.end is None or other.start <= self.end
        return starts_before_other_ends and other_starts_before_end


def has_overlap(existing: Iterable[Interval], candidate: Interval) -> bool:
    return any(candidate.overlaps(interval) for interval in existing)
