"""Domain record schemas."""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from app.db.models.domain import DomainStatus, RecordType


class DomainCreate(BaseModel):
    """Schema for requesting a subdomain."""
    available_domain_id: int
    subdomain: str = Field(..., min_length=1, max_length=63)
    record_type: RecordType = RecordType.A
    value: str = Field(..., min_length=1, max_length=255)
    ttl: Optional[int] = Field(None, ge=1, le=86400)
    proxied: bool = False


class DomainUpdate(BaseModel):
    """Schema for updating a subdomain's record."""
    value: Optional[str] = Field(None, min_length=1, max_length=255)
    proxied: Optional[bool] = None


class DomainStatusUpdate(BaseModel):
    status: DomainStatus


class DomainValueUpdate(BaseModel):
    value: str = Field(..., min_length=1, max_length=255)


class DomainResponse(BaseModel):
    """Schema for domain record response."""
    domain_id: int
    user_id: int
    available_domain_id: int
    subdomain: str
    root_domain: str
    full_domain: str
    record_type: RecordType
    value: str
    ttl: int
    proxied: bool
    status: DomainStatus
    provider_record_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class DomainListResponse(BaseModel):
    """Paginated domain list."""
    items: List[DomainResponse]
    total: int
    page: int
    page_size: int
