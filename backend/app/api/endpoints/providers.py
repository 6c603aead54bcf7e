"""DNS provider catalogue and admin registry."""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_active_user, require_admin
from app.db.models.user import User
from app.schemas.dns_account import ProviderInfo, ProviderUpdate
from app.services import dns_providers

router = APIRouter(prefix="/providers", tags=["Providers"])
admin_router = APIRouter(prefix="/admin/providers", tags=["Admin - Providers"])


@router.get("", response_model=List[ProviderInfo])
async def list_providers(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Enabled provider types."""
    return dns_providers.list_providers(db, active_only=True)


@admin_router.get("", response_model=List[ProviderInfo])
async def list_all_providers(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return dns_providers.list_providers(db)


@admin_router.patch("/{provider_type}", response_model=ProviderInfo)
async def update_provider(
    provider_type: str,
    provider_in: ProviderUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Rename a provider, edit its credential hints, or enable/disable it."""
    return dns_providers.update_provider(db, provider_type, **provider_in.model_dump(exclude_unset=True))
