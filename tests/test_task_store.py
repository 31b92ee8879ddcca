from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError

from taskboard.models import Role, TaskStatus
from taskboard.schemas.task import TaskCreate, TaskUpdate
from taskboard.services import task_store

NOW = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)


def as_utc(value):
    # SQLite hands back naive datetimes
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


@pytest.fixture
def owner(db_session):
    return task_store.create_user(db_session, "owner@example.com", "x", "Olive Owner", Role.EMPLOYEE)


@pytest.fixture
def make_task(db_session, owner):
    def _make(title="Task", days=1, status=TaskStatus.PENDING, user=None):
        data = TaskCreate(title=title, deadline=NOW + timedelta(days=days), status=status)
        return task_store.create_task(db_session, (user or owner).id, data, NOW)
    return _make


def test_create_user_adds_profile_and_role(db_session, owner):
    assert task_store.get_profile(db_session, owner.id).full_name == "Olive Owner"
    assert task_store.get_role(db_session, owner.id) == Role.EMPLOYEE


def test_get_role_defaults_to_employee(db_session):
    assert task_store.get_role(db_session, 999) == Role.EMPLOYEE


def test_list_tasks_orders_by_deadline(make_task, db_session, owner):
    make_task("later", days=5)
    make_task("sooner", days=-2)
    make_task("middle", days=1)
    assert [t.title for t in task_store.list_tasks(db_session)] == ["sooner", "middle", "later"]


def test_list_tasks_filters(make_task, db_session, owner):
    other = task_store.create_user(db_session, "other@example.com", "x", "Other", Role.MANAGER)
    make_task("mine")
    make_task("done", status=TaskStatus.COMPLETED)
    make_task("theirs", user=other)
    assert {t.title for t in task_store.list_tasks(db_session, owner_id=owner.id)} == {"mine", "done"}
    assert [t.title for t in task_store.list_tasks(db_session, status=TaskStatus.COMPLETED)] == ["done"]


def test_creating_completed_task_stamps_completion(make_task):
    task = make_task(status=TaskStatus.COMPLETED)
    assert as_utc(task.completed_at) == NOW


def test_status_transitions_keep_completion_in_step(make_task, db_session):
    task = make_task()
    assert task.completed_at is None

    task_store.update_task(db_session, task, TaskUpdate(status=TaskStatus.IN_PROGRESS), NOW)
    assert task.completed_at is None

    done_at = NOW + timedelta(hours=2)
    task_store.update_task(db_session, task, TaskUpdate(status=TaskStatus.COMPLETED), done_at)
    assert as_utc(task.completed_at) == done_at

    # Re-saving as completed keeps the first stamp
    task_store.update_task(db_session, task, TaskUpdate(status=TaskStatus.COMPLETED, title="Renamed"), done_at + timedelta(days=1))
    assert as_utc(task.completed_at) == done_at
    assert task.title == "Renamed"

    task_store.update_task(db_session, task, TaskUpdate(status=TaskStatus.PENDING), NOW)
    assert task.status == TaskStatus.PENDING
    assert task.completed_at is None


def test_update_leaves_unset_fields_alone(make_task, db_session):
    task = make_task("Keep me")
    task_store.update_task(db_session, task, TaskUpdate(description="  notes  "), NOW)
    assert task.title == "Keep me"
    assert task.description == "notes"
    task_store.update_task(db_session, task, TaskUpdate(description="   "), NOW)
    assert task.description is None


def test_deadline_is_stored_in_utc(db_session, owner):
    plus_two = timezone(timedelta(hours=2))
    data = TaskCreate(title="Offset", deadline=datetime(2024, 1, 10, 9, 0, tzinfo=plus_two))
    task = task_store.create_task(db_session, owner.id, data, NOW)
    assert as_utc(task.deadline) == datetime(2024, 1, 10, 7, 0, tzinfo=timezone.utc)


def test_authorize_task_write(make_task, db_session, owner):
    task = make_task()
    stranger = task_store.create_user(db_session, "s@example.com", "x", "Stranger", Role.MANAGER)
    admin = task_store.create_user(db_session, "a@example.com", "x", "Admin", Role.ADMIN)

    task_store.authorize_task_write(db_session, owner, task)
    task_store.authorize_task_write(db_session, admin, task)
    with pytest.raises(HTTPException) as exc:
        task_store.authorize_task_write(db_session, stranger, task)
    assert exc.value.status_code == 403


def test_comments_are_trimmed_and_ordered(make_task, db_session, owner):
    task = make_task()
    first = task_store.add_comment(db_session, task.id, owner.id, "  first  ")
    task_store.add_comment(db_session, task.id, owner.id, "second")
    assert first.content == "first"
    assert [c.content for c in task_store.list_comments(db_session, task.id)] == ["first", "second"]

    with pytest.raises(HTTPException) as exc:
        task_store.add_comment(db_session, task.id, owner.id, "   ")
    assert exc.value.status_code == 400


def test_deleting_task_removes_children(make_task, db_session, owner):
    task = make_task()
    task_store.add_comment(db_session, task.id, owner.id, "bye")
    task_store.add_attachments(db_session, task.id, owner.id, [attachment_row("a.txt")])
    task_id = task.id

    task_store.delete_task(db_session, task)
    assert task_store.get_task(db_session, task_id) is None
    assert task_store.list_comments(db_session, task_id) == []
    assert task_store.list_attachments(db_session, task_id) == []


def attachment_row(name, task_id=1):
    return {
        "file_name": name,
        "storage_key": f"{task_id}/{name}",
        "file_url": f"/files/task-attachments/{task_id}/{name}",
        "file_type": "text/plain",
        "file_size": 3,
    }


def test_attachments_are_added_together(make_task, db_session, owner):
    task = make_task()
    added = task_store.add_attachments(db_session, task.id, owner.id, [attachment_row("a.txt"), attachment_row("b.txt")])
    assert all(a.id for a in added)
    assert {a.file_name for a in task_store.list_attachments(db_session, task.id)} == {"a.txt", "b.txt"}


def test_failed_attachment_batch_writes_nothing(make_task, db_session, owner):
    task = make_task()
    broken = attachment_row("b.txt")
    broken["file_name"] = None  # NOT NULL column

    with pytest.raises(IntegrityError):
        task_store.add_attachments(db_session, task.id, owner.id, [attachment_row("a.txt"), broken])
    assert task_store.list_attachments(db_session, task.id) == []


def test_profiles_by_user(db_session, owner):
    assert task_store.profiles_by_user(db_session, []) == {}
    profiles = task_store.profiles_by_user(db_session, [owner.id, owner.id, 404])
    assert list(profiles) == [owner.id]
