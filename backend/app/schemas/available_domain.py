"""Available root domain schemas."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class AvailableDomainCreate(BaseModel):
    """Schema for registering a root domain."""
    domain: str
    dns_account_id: Optional[int] = None


class AvailableDomainUpdate(BaseModel):
    """Schema for updating a root domain."""
    is_active: Optional[bool] = None


class AvailableDomainResponse(BaseModel):
    """Root domain as shown to users."""
    available_domain_id: int
    domain: str
    is_active: bool

    class Config:
        from_attributes = True


class AvailableDomainAdminResponse(AvailableDomainResponse):
    """Root domain as shown to admins."""
    dns_account_id: int
    created_at: datetime
    updated_at: datetime
