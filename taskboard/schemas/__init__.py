from .user import UserCreate, UserLogin, UserOut, ProfileOut
from .tokens import Token
from .task import TaskCreate, TaskUpdate, TaskOut, CanEditOut, TaskAttachmentOut, TaskCommentCreate, TaskCommentOut
from .dashboard import SummaryOut, ChartSlice, DashboardOut
