"""User schemas."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from app.db.models.user import UserRole


class UserBase(BaseModel):
    """Base user schema."""
    email: EmailStr
    full_name: Optional[str] = None


class UserCreate(UserBase):
    """Schema for self-registration."""
    password: str = Field(..., min_length=6)
    invite_code: Optional[str] = None


class UserUpdate(BaseModel):
    """Schema for admin changes to a user."""
    quota: Optional[int] = Field(None, ge=0, le=1000)
    is_active: Optional[bool] = None
    role: Optional[UserRole] = None


class UserResponse(UserBase):
    """Schema for user response."""
    user_id: int
    role: UserRole
    quota: int
    is_active: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserAdminResponse(UserResponse):
    """User row as seen in the admin list."""
    domain_count: int = 0


class UserLogin(BaseModel):
    """Schema for JSON login."""
    email: EmailStr
    password: str


class Token(BaseModel):
    """Schema for JWT token response."""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
