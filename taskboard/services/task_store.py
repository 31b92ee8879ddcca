# taskboard/services/task_store.py
"""
Data access for tasks, profiles, comments and attachments.

List views expect tasks ordered by deadline ascending. Write access to a task
is authorized here against the role stored in the database.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from taskboard.models import Profile, Role, Task, TaskAttachment, TaskComment, TaskStatus, User, UserRole
from taskboard.schemas.task import TaskCreate, TaskUpdate
from taskboard.utils.dates import to_utc, utc_now

logger = logging.getLogger(__name__)


# Tasks

def list_tasks(db: Session, status: Optional[TaskStatus] = None, owner_id: Optional[int] = None) -> List[Task]:
    query = db.query(Task)
    if status:
        query = query.filter(Task.status == status)
    if owner_id is not None:
        query = query.filter(Task.user_id == owner_id)
    return query.order_by(Task.deadline.asc(), Task.id.asc()).all()


def get_task(db: Session, task_id: int) -> Optional[Task]:
    return db.query(Task).filter(Task.id == task_id).first()


def get_task_or_404(db: Session, task_id: int) -> Task:
    task = get_task(db, task_id)
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )
    return task


def apply_status(task: Task, new_status: TaskStatus, now: datetime) -> None:
    """Move a task to `new_status`, keeping completed_at in step.

    Any transition is allowed. Entering completed stamps the transition time,
    leaving it clears the stamp, and re-saving a completed task keeps the
    original stamp.
    """
    if new_status == TaskStatus.COMPLETED:
        if task.status != TaskStatus.COMPLETED or task.completed_at is None:
            task.completed_at = to_utc(now)
    else:
        task.completed_at = None
    task.status = new_status


def create_task(db: Session, owner_id: int, data: TaskCreate, now: Optional[datetime] = None) -> Task:
    now = now or utc_now()
    task = Task(
        user_id=owner_id,
        title=data.title,
        description=data.description,
        priority=data.priority,
        deadline=to_utc(data.deadline),
        status=TaskStatus.PENDING,
    )
    apply_status(task, data.status, now)
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info(f"Task {task.id} created by user {owner_id}")
    return task


def update_task(db: Session, task: Task, data: TaskUpdate, now: Optional[datetime] = None) -> Task:
    now = now or utc_now()
    changes = data.model_dump(exclude_unset=True)
    new_status = changes.pop("status", None)

    for field in ("title", "priority"):
        if changes.get(field) is not None:
            setattr(task, field, changes[field])
    if changes.get("deadline") is not None:
        task.deadline = to_utc(changes["deadline"])
    if "description" in changes:
        task.description = changes["description"]
    if new_status is not None:
        apply_status(task, new_status, now)

    task.updated_at = to_utc(now)
    db.commit()
    db.refresh(task)
    logger.info(f"Task {task.id} updated")
    return task


def delete_task(db: Session, task: Task) -> None:
    task_id = task.id
    db.delete(task)
    db.commit()
    logger.info(f"Task {task_id} deleted")


# Users, roles and profiles

def get_role(db: Session, user_id: int) -> Role:
    entry = db.query(UserRole).filter(UserRole.user_id == user_id).first()
    return entry.role if entry else Role.EMPLOYEE


def authorize_task_write(db: Session, user: User, task: Task) -> None:
    """Raise 403 unless `user` owns `task` or holds the admin role"""
    if task.user_id == user.id:
        return
    if get_role(db, user.id) == Role.ADMIN:
        return
    logger.warning(f"User {user.id} denied write access to task {task.id}")
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="You can only edit your own tasks"
    )


def get_profile(db: Session, user_id: int) -> Optional[Profile]:
    return db.query(Profile).filter(Profile.user_id == user_id).first()


def list_profiles(db: Session) -> List[Profile]:
    return db.query(Profile).order_by(Profile.full_name.asc()).all()


def profiles_by_user(db: Session, user_ids: Iterable[int]) -> Dict[int, Profile]:
    ids = set(user_ids)
    if not ids:
        return {}
    rows = db.query(Profile).filter(Profile.user_id.in_(ids)).all()
    return {profile.user_id: profile for profile in rows}


def create_user(db: Session, email: str, hashed_password: str, full_name: str, role: Role) -> User:
    user = User(email=email, hashed_password=hashed_password)
    user.profile = Profile(full_name=full_name)
    user.role_entry = UserRole(role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"User {user.id} signed up as {role.value}")
    return user


# Comments

def list_comments(db: Session, task_id: int) -> List[TaskComment]:
    return (
        db.query(TaskComment)
        .filter(TaskComment.task_id == task_id)
        .order_by(TaskComment.created_at.asc(), TaskComment.id.asc())
        .all()
    )


def add_comment(db: Session, task_id: int, user_id: int, content: str) -> TaskComment:
    content = content.strip()
    if not content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Comment cannot be empty"
        )
    comment = TaskComment(task_id=task_id, user_id=user_id, content=content, created_at=utc_now())
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


# Attachments

def list_attachments(db: Session, task_id: int) -> List[TaskAttachment]:
    return (
        db.query(TaskAttachment)
        .filter(TaskAttachment.task_id == task_id)
        .order_by(TaskAttachment.uploaded_at.desc(), TaskAttachment.id.desc())
        .all()
    )


def get_attachment(db: Session, attachment_id: int) -> Optional[TaskAttachment]:
    return db.query(TaskAttachment).filter(TaskAttachment.id == attachment_id).first()


def add_attachments(db: Session, task_id: int, uploaded_by: int, files: Iterable[dict]) -> List[TaskAttachment]:
    """Attach several stored files to a task in one transaction.

    Each item carries ``file_name``, ``storage_key``, ``file_url``,
    ``file_type`` and ``file_size``. Either every row is written or none is.
    """
    uploaded_at = utc_now()
    attachments = [
        TaskAttachment(task_id=task_id, uploaded_by=uploaded_by, uploaded_at=uploaded_at, **item)
        for item in files
    ]
    try:
        db.add_all(attachments)
        db.commit()
    except Exception:
        db.rollback()
        raise
    for attachment in attachments:
        db.refresh(attachment)
    logger.info(f"{len(attachments)} attachment(s) added to task {task_id}")
    return attachments
