"""Admin blocklist endpoints."""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_admin
from app.db.models.user import User
from app.schemas.blocked_subdomain import BlockedSubdomainCreate, BlockedSubdomainUpdate, BlockedSubdomainResponse
from app.services import blocklist

router = APIRouter(prefix="/admin/blocked-subdomains", tags=["Admin - Blocked Subdomains"])


@router.get("", response_model=List[BlockedSubdomainResponse])
async def list_blocked(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return blocklist.list_blocked_subdomains(db)


@router.post("", response_model=BlockedSubdomainResponse, status_code=status.HTTP_201_CREATED)
async def create_blocked(
    block_in: BlockedSubdomainCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return blocklist.create_blocked_subdomain(db, block_in.subdomain, block_in.reason, block_in.is_active)


@router.patch("/{blocked_id}", response_model=BlockedSubdomainResponse)
async def update_blocked(
    blocked_id: int,
    block_in: BlockedSubdomainUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return blocklist.update_blocked_subdomain(db, blocked_id, reason=block_in.reason, is_active=block_in.is_active)


@router.delete("/{blocked_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_blocked(
    blocked_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    blocklist.delete_blocked_subdomain(db, blocked_id)
