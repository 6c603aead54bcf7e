"""Root domains users can register subdomains under."""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_active_user, require_admin
from app.db.models.user import User
from app.schemas.available_domain import (
    AvailableDomainCreate, AvailableDomainUpdate, AvailableDomainResponse, AvailableDomainAdminResponse
)
from app.services import available_domains as available_domain_service

router = APIRouter(prefix="/available-domains", tags=["Available Domains"])
admin_router = APIRouter(prefix="/admin/available-domains", tags=["Admin - Available Domains"])


@router.get("", response_model=List[AvailableDomainResponse])
async def list_active_domains(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Active root domains."""
    return available_domain_service.list_available_domains(db, active_only=True)


@admin_router.get("", response_model=List[AvailableDomainAdminResponse])
async def list_all_available_domains(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return available_domain_service.list_available_domains(db)


@admin_router.post("", response_model=AvailableDomainAdminResponse, status_code=status.HTTP_201_CREATED)
async def create_available_domain(
    domain_in: AvailableDomainCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Register a root domain; uses the default DNS account when none is given."""
    return available_domain_service.create_available_domain(db, domain_in.domain, domain_in.dns_account_id)


@admin_router.patch("/{available_domain_id}", response_model=AvailableDomainAdminResponse)
async def update_available_domain(
    available_domain_id: int,
    domain_in: AvailableDomainUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return available_domain_service.update_available_domain(db, available_domain_id, is_active=domain_in.is_active)


@admin_router.delete("/{available_domain_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_available_domain(
    available_domain_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    available_domain_service.delete_available_domain(db, available_domain_id)
