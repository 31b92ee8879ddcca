# taskboard/services/statistics.py
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List

from taskboard.services.classifier import EffectiveStatus, classify


@dataclass(frozen=True)
class Summary:
    total: int = 0
    completed_on_time: int = 0
    completed_late: int = 0
    pending: int = 0  # pending or in progress, not overdue
    overdue: int = 0

    @property
    def completed(self) -> int:
        return self.completed_on_time + self.completed_late

    @property
    def completion_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return self.completed / self.total

    @property
    def completion_percent(self) -> int:
        # Halves round up, as the dashboard figure always has
        return math.floor(self.completion_rate * 100 + 0.5)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "completed": self.completed,
            "completed_on_time": self.completed_on_time,
            "completed_late": self.completed_late,
            "pending": self.pending,
            "overdue": self.overdue,
            "completion_rate": self.completion_rate,
            "completion_percent": self.completion_percent,
        }


_BUCKETS = {
    EffectiveStatus.COMPLETED_ON_TIME: "completed_on_time",
    EffectiveStatus.COMPLETED_LATE: "completed_late",
    EffectiveStatus.PENDING: "pending",
    EffectiveStatus.IN_PROGRESS: "pending",
    EffectiveStatus.OVERDUE: "overdue",
}

# Chart order and legend names
CHART_BUCKETS = [
    ("completed_on_time", "Completed On Time"),
    ("completed_late", "Completed Late"),
    ("pending", "Pending"),
    ("overdue", "Overdue"),
]


def summarize(tasks: Iterable[Any], now: datetime) -> Summary:
    """Count tasks per effective-status bucket.

    Every task lands in exactly one bucket, so the bucket counts always add
    up to `total`. Raises InvalidTimestamp if any task cannot be classified.
    """
    counts = {name: 0 for name, _ in CHART_BUCKETS}
    total = 0
    for task in tasks:
        counts[_BUCKETS[classify(task, now)]] += 1
        total += 1
    return Summary(total=total, **counts)


def chart_data(summary: Summary) -> List[Dict[str, Any]]:
    """Pie-chart slices, skipping empty buckets"""
    slices = []
    for key, name in CHART_BUCKETS:
        value = getattr(summary, key)
        if value > 0:
            slices.append({"key": key, "name": name, "value": value})
    return slices
