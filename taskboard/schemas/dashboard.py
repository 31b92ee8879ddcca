from pydantic import BaseModel
from typing import List


class SummaryOut(BaseModel):
    total: int
    completed: int
    completed_on_time: int
    completed_late: int
    pending: int
    overdue: int
    completion_rate: float
    completion_percent: int


class ChartSlice(BaseModel):
    key: str
    name: str
    value: int


class DashboardOut(BaseModel):
    user_role: str
    role_label: str
    summary: SummaryOut
    chart: List[ChartSlice]
