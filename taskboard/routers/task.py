# taskboard/routers/task.py
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session
from typing import Dict, List, Optional
from datetime import datetime
import logging

from taskboard.database import get_db
from taskboard.models import Profile, Role, Task, TaskStatus, User
from taskboard.schemas import TaskCreate, TaskUpdate, TaskOut, CanEditOut, TaskAttachmentOut
from taskboard.services import task_store
from taskboard.services.classifier import EffectiveStatus, classify
from taskboard.services.file_storage import FileStorageService, get_file_storage
from taskboard.utils.access import can_edit, status_label
from taskboard.utils.auth import get_current_user
from taskboard.utils.dates import request_time

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def serialize_task(
    task: Task,
    viewer: User,
    viewer_role: Role,
    now: datetime,
    profiles: Optional[Dict[int, Profile]] = None,
) -> TaskOut:
    """Task as seen by `viewer` at `now`, with its effective status and edit affordance"""
    effective = classify(task, now)
    if profiles is not None:
        owner_profile = profiles.get(task.user_id)
    else:
        owner_profile = task.owner.profile if task.owner else None

    return TaskOut(
        id=task.id,
        user_id=task.user_id,
        title=task.title,
        description=task.description,
        status=task.status,
        priority=task.priority,
        deadline=task.deadline,
        completed_at=task.completed_at,
        created_at=task.created_at,
        updated_at=task.updated_at,
        owner_name=owner_profile.full_name if owner_profile else None,
        effective_status=effective,
        status_label=status_label(effective),
        is_overdue=effective == EffectiveStatus.OVERDUE,
        is_own=task.user_id == viewer.id,
        can_edit=can_edit(viewer_role, viewer.id, task.user_id),
    )


@router.get("/", response_model=List[TaskOut])
def get_all_tasks(
    status: Optional[TaskStatus] = None,
    mine: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    now: datetime = Depends(request_time),
):
    """List tasks ordered by deadline, soonest first

    Every role sees every task; `can_edit` on each row tells the client
    whether to offer edit and delete controls.
    """
    role = task_store.get_role(db, current_user.id)
    tasks = task_store.list_tasks(db, status=status, owner_id=current_user.id if mine else None)
    profiles = task_store.profiles_by_user(db, (t.user_id for t in tasks))
    return [serialize_task(t, current_user, role, now, profiles) for t in tasks]


@router.post("/", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    now: datetime = Depends(request_time),
):
    """Create a task owned by the current user"""
    db_task = task_store.create_task(db, current_user.id, task, now)
    role = task_store.get_role(db, current_user.id)
    return serialize_task(db_task, current_user, role, now)


@router.get("/attachments/{attachment_id}/download")
def download_attachment(
    attachment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: FileStorageService = Depends(get_file_storage),
):
    """Download an attachment under its original file name"""
    attachment = task_store.get_attachment(db, attachment_id)
    if not attachment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Attachment not found"
        )

    path = storage.path_for(attachment.storage_key)
    if not path.exists():
        logger.warning(f"Attachment {attachment_id} is missing from storage: {attachment.storage_key}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="File not found on server"
        )

    return FileResponse(
        path=str(path),
        filename=attachment.file_name,
        media_type=attachment.file_type or "application/octet-stream"
    )


@router.get("/{task_id}/can-edit", response_model=CanEditOut)
def can_edit_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Check if current user can edit a specific task"""
    task = task_store.get_task_or_404(db, task_id)
    role = task_store.get_role(db, current_user.id)
    return {
        "can_edit": can_edit(role, current_user.id, task.user_id),
        "user_id": current_user.id,
        "user_role": role.value,
        "task_id": task_id
    }


@router.get("/{task_id}", response_model=TaskOut)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    now: datetime = Depends(request_time),
):
    task = task_store.get_task_or_404(db, task_id)
    role = task_store.get_role(db, current_user.id)
    return serialize_task(task, current_user, role, now)


@router.put("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    now: datetime = Depends(request_time),
):
    """Update a task; only its owner or an admin may do so"""
    db_task = task_store.get_task_or_404(db, task_id)
    task_store.authorize_task_write(db, current_user, db_task)

    db_task = task_store.update_task(db, db_task, task_update, now)
    role = task_store.get_role(db, current_user.id)
    return serialize_task(db_task, current_user, role, now)


@router.delete("/{task_id}")
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: FileStorageService = Depends(get_file_storage),
):
    """Delete a task with its comments and attachments"""
    db_task = task_store.get_task_or_404(db, task_id)
    task_store.authorize_task_write(db, current_user, db_task)

    task_store.delete_task(db, db_task)
    storage.delete_task_files(task_id)

    return {"message": "Task deleted successfully"}


# Attachments

@router.get("/{task_id}/attachments", response_model=List[TaskAttachmentOut])
def get_task_attachments(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Attachments of a task, newest first"""
    task_store.get_task_or_404(db, task_id)
    return task_store.list_attachments(db, task_id)


@router.post("/{task_id}/attachments", response_model=List[TaskAttachmentOut], status_code=status.HTTP_201_CREATED)
def upload_attachments(
    task_id: int,
    files: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: FileStorageService = Depends(get_file_storage),
):
    """Upload one or more files to a task the current user may edit

    The request is all or nothing: if any file is rejected, none of them
    is attached and nothing is left in storage.
    """
    db_task = task_store.get_task_or_404(db, task_id)
    task_store.authorize_task_write(db, current_user, db_task)

    for file in files:
        is_valid, error_msg = storage.validate_file(file)
        if not is_valid:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{file.filename or 'File'}: {error_msg}"
            )

    stored_files = []
    try:
        for file in files:
            stored = storage.upload(task_id, file)
            stored_files.append((file.filename, stored))

        return task_store.add_attachments(db, task_id, current_user.id, [
            {
                "file_name": file_name,
                "storage_key": stored.key,
                "file_url": stored.url,
                "file_type": stored.mime_type,
                "file_size": stored.size,
            }
            for file_name, stored in stored_files
        ])
    except Exception:
        for _, stored in stored_files:
            storage.delete(stored.key)
        raise
