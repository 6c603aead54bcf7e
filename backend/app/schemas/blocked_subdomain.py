"""Blocked subdomain schemas."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class BlockedSubdomainCreate(BaseModel):
    subdomain: str = Field(..., min_length=1, max_length=63)
    reason: Optional[str] = None
    is_active: bool = True


class BlockedSubdomainUpdate(BaseModel):
    reason: Optional[str] = None
    is_active: Optional[bool] = None


class BlockedSubdomainResponse(BaseModel):
    blocked_id: int
    subdomain: str
    reason: Optional[str] = None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
