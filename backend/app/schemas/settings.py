"""System settings schemas."""
from datetime import datetime
from typing import Optional, Any
from pydantic import BaseModel


class SettingUpdate(BaseModel):
    """Schema for updating a setting."""
    value: Any


class SettingResponse(BaseModel):
    """Schema for setting response."""
    key: str
    value: Optional[str] = None
    type: str
    description: Optional[str] = None
    updated_by: Optional[str] = None
    updated_at: datetime

    class Config:
        from_attributes = True
