# taskboard/utils/access.py
"""
Who may edit or delete a task, as shown to the viewer.

`can_edit` only decides which controls a client displays. Requests that change
a task are authorized again by the data layer (see
``taskboard.services.task_store.authorize_task_write``).
"""

from typing import Any, Optional, Union

from taskboard.models.user import Role
from taskboard.services.classifier import EffectiveStatus

ROLE_LABELS = {
    Role.ADMIN: "Admin",
    Role.MANAGER: "Manager",
    Role.EMPLOYEE: "Employee",
}

STATUS_LABELS = {
    EffectiveStatus.PENDING: "Pending",
    EffectiveStatus.IN_PROGRESS: "In Progress",
    EffectiveStatus.COMPLETED_ON_TIME: "Completed On Time",
    EffectiveStatus.COMPLETED_LATE: "Completed Late",
    EffectiveStatus.OVERDUE: "Overdue",
}

# Every variant needs a label
for _enum, _labels in ((Role, ROLE_LABELS), (EffectiveStatus, STATUS_LABELS)):
    _missing = set(_enum) - set(_labels)
    if _missing:
        raise RuntimeError(f"No label for {sorted(m.value for m in _missing)}")


def to_role(value: Union[Role, str, None]) -> Optional[Role]:
    if value is None or isinstance(value, Role):
        return value
    try:
        return Role(str(value).lower())
    except ValueError:
        return None


def can_edit(viewer_role: Union[Role, str, None], viewer_id: Any, task_owner_id: Any) -> bool:
    """Admins may edit any task; everyone else only their own"""
    if to_role(viewer_role) == Role.ADMIN:
        return True
    return viewer_id is not None and viewer_id == task_owner_id


def role_label(role: Union[Role, str, None]) -> str:
    role = to_role(role)
    return ROLE_LABELS[role] if role else "Unknown"


def status_label(status: EffectiveStatus) -> str:
    return STATUS_LABELS[status]
