"""
In-memory progress log.

Entries live only as long as the ProgressStore instance. One store is
created per application (see app.main) and every operation on it runs
under a single lock, so concurrent appends cannot interleave the
insert-and-sort step.
"""

from __future__ import annotations

import logging
import math
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, List, Mapping, Optional

import numpy as np
import pandas as pd

from utils.errors import ValidationError

logger = logging.getLogger(__name__)

FLOAT_METRICS = ("weight", "bodyFat", "muscleMass", "waist", "hips")
INT_METRICS = ("workoutPerformance",)
METRIC_FIELDS = FLOAT_METRICS + INT_METRICS

PERFORMANCE_MIN, PERFORMANCE_MAX = 0, 10

RANGE_OFFSETS = {
    "week":  pd.DateOffset(days=7),
    "month": pd.DateOffset(months=1),
    "year":  pd.DateOffset(years=1),
}

DEMO_DAYS = 30


@dataclass(frozen=True)
class ProgressEntry:
    id: str
    timestamp: datetime
    weight: Optional[float] = None
    bodyFat: Optional[float] = None
    muscleMass: Optional[float] = None
    waist: Optional[float] = None
    hips: Optional[float] = None
    workoutPerformance: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestampUtc": self.timestamp.isoformat(),
            "weight": self.weight,
            "bodyFat": self.bodyFat,
            "muscleMass": self.muscleMass,
            "waist": self.waist,
            "hips": self.hips,
            "workoutPerformance": self.workoutPerformance,
        }


# ---------- Coercion ----------
def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return result if math.isfinite(result) else None


def _to_int(value: Any) -> Optional[int]:
    result = _to_float(value)
    if result is None:
        return None
    return min(PERFORMANCE_MAX, max(PERFORMANCE_MIN, int(result)))


def coerce_metrics(metrics: Mapping[str, Any]) -> dict:
    """Numeric metric values; absent or unparseable ones become None."""
    coerced = {name: _to_float(metrics.get(name)) for name in FLOAT_METRICS}
    coerced.update({name: _to_int(metrics.get(name)) for name in INT_METRICS})
    return coerced


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProgressStore:
    """
    Append-only log of body metric snapshots, newest first.

    ``clock`` returns the current aware UTC datetime; ``rng`` drives the
    jitter in demo data. Both are injectable for tests.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = _utc_now,
        rng: Optional[np.random.Generator] = None,
    ):
        self._clock = clock
        self._rng = rng if rng is not None else np.random.default_rng()
        self._entries: List[ProgressEntry] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _cutoff(self, range_: Optional[str]) -> Optional[datetime]:
        offset = RANGE_OFFSETS.get(range_) if range_ else None
        if offset is None:
            return None
        return (pd.Timestamp(self._clock()) - offset).to_pydatetime()

    def list(self, range_: Optional[str] = None) -> List[ProgressEntry]:
        """Entries newer than week/month/year ago; anything else means all."""
        with self._lock:
            cutoff = self._cutoff(range_)
            if cutoff is None:
                return list(self._entries)
            return [entry for entry in self._entries if entry.timestamp >= cutoff]

    def append(self, metrics: Mapping[str, Any]) -> ProgressEntry:
        coerced = coerce_metrics(metrics)
        if all(value is None for value in coerced.values()):
            raise ValidationError("At least one metric is required", [
                f"one of {', '.join(METRIC_FIELDS)} must be a number"
            ])

        with self._lock:
            entry = ProgressEntry(id=str(uuid.uuid4()), timestamp=self._clock(), **coerced)
            # front-insert so a timestamp tie still lists the newest first
            self._entries.insert(0, entry)
            self._entries.sort(key=lambda e: e.timestamp, reverse=True)

        logger.info("Progress entry %s recorded", entry.id)
        return entry

    def reset(self) -> None:
        with self._lock:
            self._entries = []
        logger.info("Progress data reset")

    def generate_demo(self) -> int:
        """Replace the log with one synthetic entry per day for the last 30 days plus today."""
        with self._lock:
            now = self._clock()
            rng = self._rng
            demo: List[ProgressEntry] = []

            for i in range(DEMO_DAYS, -1, -1):
                demo.append(ProgressEntry(
                    id=str(uuid.uuid4()),
                    timestamp=now - timedelta(days=i),
                    weight=round(75 - i * 0.1 + rng.uniform(-0.25, 0.25), 1),
                    bodyFat=round(18 - i * 0.05 + rng.uniform(-0.15, 0.15), 1),
                    muscleMass=round(32 + i * 0.03 + rng.uniform(-0.1, 0.1), 1),
                    waist=round(85 - i * 0.2 + rng.uniform(-0.25, 0.25), 1),
                    hips=None,
                    workoutPerformance=min(PERFORMANCE_MAX, int(math.floor(5 + rng.uniform(0, 3) + i * 0.05))),
                ))

            demo.sort(key=lambda e: e.timestamp, reverse=True)
            self._entries = demo

        logger.info("Generated %d demo progress entries", len(demo))
        return len(demo)
