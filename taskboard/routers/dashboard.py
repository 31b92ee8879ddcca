# taskboard/routers/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from datetime import datetime

from taskboard.database import get_db
from taskboard.models import User
from taskboard.schemas import DashboardOut
from taskboard.services import task_store
from taskboard.services.statistics import chart_data, summarize
from taskboard.utils.access import role_label
from taskboard.utils.auth import get_current_user
from taskboard.utils.dates import request_time

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardOut)
def get_dashboard_summary(
    mine: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    now: datetime = Depends(request_time),
):
    """Completion statistics for the dashboard chart

    Counts come from the same classifier the task list uses, so the chart and
    the list always agree on which tasks are overdue.
    """
    role = task_store.get_role(db, current_user.id)
    tasks = task_store.list_tasks(db, owner_id=current_user.id if mine else None)
    summary = summarize(tasks, now)

    return {
        "user_role": role.value,
        "role_label": role_label(role),
        "summary": summary.as_dict(),
        "chart": chart_data(summary),
    }
