# taskboard/schemas/task.py
from pydantic import BaseModel, validator
from datetime import datetime
from typing import Optional

from taskboard.models.task import TaskStatus, TaskPriority
from taskboard.services.classifier import EffectiveStatus
from taskboard.utils.dates import to_utc


def _clean_description(v):
    if v is None:
        return None
    return v.strip() or None


def _utc(v):
    # SQLite hands timestamps back naive; they are stored as UTC
    return to_utc(v) if v is not None else None


class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    deadline: datetime

    @validator('title')
    def title_not_blank(cls, v):
        if not v.strip():
            raise ValueError('Please enter a title')
        return v.strip()

    @validator('description')
    def description_or_none(cls, v):
        return _clean_description(v)


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    deadline: Optional[datetime] = None

    @validator('title')
    def title_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip() if v is not None else v

    @validator('description')
    def description_or_none(cls, v):
        return _clean_description(v)


class TaskOut(BaseModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    deadline: datetime
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    # Derived for the viewer
    owner_name: Optional[str] = None
    effective_status: EffectiveStatus
    status_label: str
    is_overdue: bool
    is_own: bool
    can_edit: bool

    @validator('deadline', 'completed_at', 'created_at', 'updated_at')
    def timestamps_in_utc(cls, v):
        return _utc(v)


class CanEditOut(BaseModel):
    can_edit: bool
    user_id: int
    user_role: str
    task_id: int


# Attachments
class TaskAttachmentOut(BaseModel):
    id: int
    task_id: int
    file_name: str
    file_url: str
    file_type: Optional[str] = None
    file_size: int
    uploaded_by: int
    uploaded_at: datetime

    model_config = {
        "from_attributes": True
    }

    @validator('uploaded_at')
    def uploaded_at_in_utc(cls, v):
        return _utc(v)


# Comments
class TaskCommentCreate(BaseModel):
    content: str

    @validator('content')
    def content_not_blank(cls, v):
        if not v.strip():
            raise ValueError('Comment cannot be empty')
        return v.strip()


class TaskCommentOut(BaseModel):
    id: int
    task_id: int
    user_id: int
    content: str
    created_at: datetime
    author_name: str

    @validator('created_at')
    def created_at_in_utc(cls, v):
        return _utc(v)
