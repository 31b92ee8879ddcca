import pytest

from taskboard.models.user import Role
from taskboard.services.classifier import EffectiveStatus
from taskboard.utils.access import ROLE_LABELS, STATUS_LABELS, can_edit, role_label, status_label


@pytest.mark.parametrize("viewer_id,owner_id", [(1, 1), (1, 2), (None, 3)])
def test_admin_can_edit_anything(viewer_id, owner_id):
    assert can_edit(Role.ADMIN, viewer_id, owner_id) is True
    assert can_edit("admin", viewer_id, owner_id) is True


@pytest.mark.parametrize("role", [Role.MANAGER, Role.EMPLOYEE, "employee", "manager"])
def test_owner_can_edit_own_task(role):
    assert can_edit(role, 7, 7) is True


@pytest.mark.parametrize("role", [Role.MANAGER, Role.EMPLOYEE])
def test_non_admin_cannot_edit_others(role):
    assert can_edit(role, 7, 8) is False


def test_unknown_role_is_treated_as_non_admin():
    assert can_edit("superuser", 1, 2) is False
    assert can_edit(None, 1, 1) is True


def test_missing_viewer_never_owns():
    assert can_edit(Role.EMPLOYEE, None, None) is False


def test_labels_cover_every_variant():
    assert set(ROLE_LABELS) == set(Role)
    assert set(STATUS_LABELS) == set(EffectiveStatus)
    assert role_label("MANAGER") == "Manager"
    assert role_label("nobody") == "Unknown"
    assert status_label(EffectiveStatus.OVERDUE) == "Overdue"
