from .user import User, Profile, UserRole, Role
from .task import Task, TaskAttachment, TaskComment, TaskStatus, TaskPriority
