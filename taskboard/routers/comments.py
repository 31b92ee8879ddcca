# taskboard/routers/comments.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from taskboard.database import get_db
from taskboard.models import TaskComment, User
from taskboard.schemas import TaskCommentCreate, TaskCommentOut
from taskboard.services import task_store
from taskboard.utils.auth import get_current_user

router = APIRouter(prefix="/tasks", tags=["comments"])


def _comment_out(comment: TaskComment, author_name: str) -> TaskCommentOut:
    return TaskCommentOut(
        id=comment.id,
        task_id=comment.task_id,
        user_id=comment.user_id,
        content=comment.content,
        created_at=comment.created_at,
        author_name=author_name,
    )


@router.get("/{task_id}/comments", response_model=List[TaskCommentOut])
def get_task_comments(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Comment thread of a task, oldest first"""
    task_store.get_task_or_404(db, task_id)
    comments = task_store.list_comments(db, task_id)
    profiles = task_store.profiles_by_user(db, (c.user_id for c in comments))
    return [
        _comment_out(c, profiles[c.user_id].full_name if c.user_id in profiles else "Unknown User")
        for c in comments
    ]


@router.post("/{task_id}/comments", response_model=TaskCommentOut, status_code=status.HTTP_201_CREATED)
def add_task_comment(
    task_id: int,
    comment: TaskCommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Post a comment; any signed-in user may comment on any task"""
    task_store.get_task_or_404(db, task_id)
    db_comment = task_store.add_comment(db, task_id, current_user.id, comment.content)
    profile = task_store.get_profile(db, current_user.id)
    return _comment_out(db_comment, profile.full_name if profile else "Unknown User")
