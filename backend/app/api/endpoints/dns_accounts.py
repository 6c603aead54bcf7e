"""Admin DNS account endpoints. Credentials are accepted but never returned."""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_admin
from app.db.models.user import User
from app.schemas.dns_account import (
    DnsAccountCreate, DnsAccountUpdate, DnsAccountResponse, ProviderDomainsResponse
)
from app.services import dns_accounts as account_service

router = APIRouter(prefix="/admin/dns-accounts", tags=["Admin - DNS Accounts"])


@router.get("", response_model=List[DnsAccountResponse])
async def list_accounts(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return account_service.list_accounts(db)


@router.post("", response_model=DnsAccountResponse, status_code=status.HTTP_201_CREATED)
async def create_account(
    account_in: DnsAccountCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Verify credentials with the provider and store them encrypted."""
    return account_service.create_account(
        db,
        name=account_in.name,
        provider_type=account_in.provider_type,
        credentials=account_in.credentials,
        is_default=account_in.is_default
    )


@router.get("/{account_id}", response_model=DnsAccountResponse)
async def get_account(
    account_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return account_service.get_account(db, account_id)


@router.patch("/{account_id}", response_model=DnsAccountResponse)
async def update_account(
    account_id: int,
    account_in: DnsAccountUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return account_service.update_account(db, account_id, account_in.model_dump(exclude_unset=True))


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    account_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    account_service.delete_account(db, account_id)


@router.get("/{account_id}/domains", response_model=ProviderDomainsResponse)
async def list_provider_domains(
    account_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Zones the account's credentials can see at the provider."""
    return ProviderDomainsResponse(
        account_id=account_id,
        domains=account_service.list_provider_domains(db, account_id)
    )
