# taskboard/services/classifier.py
"""
Effective status of a task.

The stored status only records what a user last chose. What the list and the
dashboard show is derived here from the stored status, the deadline and the
current time, and is never written back.
"""

import enum
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from taskboard.exceptions import InvalidTimestamp
from taskboard.models.task import TaskStatus
from taskboard.utils.dates import is_past, is_same_day, parse_timestamp


class EffectiveStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED_ON_TIME = "completed_on_time"
    COMPLETED_LATE = "completed_late"
    OVERDUE = "overdue"


def _field(task: Any, name: str):
    if isinstance(task, Mapping):
        return task.get(name)
    return getattr(task, name, None)


def stored_status(task: Any) -> TaskStatus:
    value = _field(task, "status")
    try:
        return TaskStatus(value)
    except ValueError as e:
        raise ValueError(f"Unknown task status: {value!r}") from e


def classify(task: Any, now: datetime) -> EffectiveStatus:
    """Derive the effective status of `task` at `now`.

    `task` can be an ORM row, a schema object or a mapping exposing
    ``status``, ``deadline`` and ``completed_at``.

    A deadline that falls on the same calendar day as `now` is never overdue,
    whatever the time of day.
    """
    status = stored_status(task)
    deadline = parse_timestamp(_field(task, "deadline"), "deadline")

    if status == TaskStatus.COMPLETED:
        completed_at = _field(task, "completed_at")
        if completed_at is None:
            raise InvalidTimestamp("completed_at", None, "is missing on a completed task")
        completed_at = parse_timestamp(completed_at, "completed_at")
        if completed_at <= deadline:
            return EffectiveStatus.COMPLETED_ON_TIME
        return EffectiveStatus.COMPLETED_LATE

    if is_past(deadline, now) and not is_same_day(deadline, now):
        return EffectiveStatus.OVERDUE
    if status == TaskStatus.IN_PROGRESS:
        return EffectiveStatus.IN_PROGRESS
    return EffectiveStatus.PENDING


def is_overdue(task: Any, now: datetime) -> bool:
    return classify(task, now) == EffectiveStatus.OVERDUE
