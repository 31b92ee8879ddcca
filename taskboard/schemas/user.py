from pydantic import BaseModel, EmailStr, validator
from typing import Optional
from datetime import datetime

from taskboard.models.user import Role
from taskboard.utils.dates import to_utc


class UserCreate(BaseModel):
    email: EmailStr
    password: str
    full_name: str
    role: Role = Role.EMPLOYEE

    @validator('full_name')
    def full_name_not_blank(cls, v):
        if not v.strip():
            raise ValueError('Full name is required')
        return v.strip()

    @validator('password')
    def password_min_length(cls, v):
        if len(v) < 6:
            raise ValueError('Password must be at least 6 characters')
        return v


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class ProfileOut(BaseModel):
    id: int
    user_id: int
    full_name: str
    avatar_url: Optional[str] = None
    created_at: datetime

    model_config = {
        "from_attributes": True
    }

    @validator('created_at')
    def created_at_in_utc(cls, v):
        return to_utc(v)


class UserOut(BaseModel):
    id: int
    email: str
    full_name: Optional[str] = None
    role: Role
    role_label: str
    is_active: bool
    created_at: datetime

    @validator('created_at')
    def created_at_in_utc(cls, v):
        return to_utc(v)
