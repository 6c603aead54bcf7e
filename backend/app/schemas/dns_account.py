"""DNS account schemas. Credentials are write-only."""
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from app.db.models.dns_account import DnsProviderType


class DnsAccountCreate(BaseModel):
    """Schema for registering provider credentials."""
    name: str = Field(..., min_length=1, max_length=255)
    provider_type: str
    credentials: Dict[str, Any]
    is_default: bool = False


class DnsAccountUpdate(BaseModel):
    """Schema for updating a DNS account."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    credentials: Optional[Dict[str, Any]] = None
    is_active: Optional[bool] = None
    is_default: Optional[bool] = None


class DnsAccountResponse(BaseModel):
    """Schema for DNS account response."""
    account_id: int
    name: str
    provider_type: DnsProviderType
    is_default: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProviderDomainsResponse(BaseModel):
    """Zones visible to an account's credentials."""
    account_id: int
    domains: List[str]


class ProviderInfo(BaseModel):
    """Provider registry entry."""
    type: str
    display_name: str
    credential_schema: Dict[str, Any]
    is_active: bool = True
    account_count: int = 0


class ProviderUpdate(BaseModel):
    """Schema for editing a provider registry entry."""
    display_name: Optional[str] = Field(None, min_length=1, max_length=100)
    credential_schema: Optional[Dict[str, Any]] = None
    is_active: Optional[bool] = None
