"""Invite code schemas."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class InviteCodeCreate(BaseModel):
    """Schema for creating an invite code. A random code is used when omitted."""
    code: Optional[str] = Field(None, max_length=64)
    max_uses: int = Field(1, ge=1)
    expires_at: Optional[datetime] = None
    description: Optional[str] = None


class InviteCodeUpdate(BaseModel):
    is_active: Optional[bool] = None


class InviteCodeResponse(BaseModel):
    invite_code_id: int
    code: str
    description: Optional[str] = None
    max_uses: int
    used_count: int
    expires_at: Optional[datetime] = None
    is_active: bool
    is_usable: bool
    created_by: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True
