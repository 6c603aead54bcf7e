"""Domain record endpoints for owners and admins."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_active_user, require_admin
from app.db.models.user import User
from app.schemas.domain import (
    DomainCreate, DomainUpdate, DomainStatusUpdate, DomainValueUpdate, DomainResponse, DomainListResponse
)
from app.services import domain_records

router = APIRouter(prefix="/domains", tags=["Domains"])
admin_router = APIRouter(prefix="/admin/domains", tags=["Admin - Domains"])


@router.get("", response_model=List[DomainResponse])
async def list_my_domains(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return domain_records.list_user_domains(db, current_user.user_id)


@router.post("", response_model=DomainResponse, status_code=status.HTTP_201_CREATED)
async def create_domain(
    domain_in: DomainCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Request a subdomain.

    The response status is ``active``, ``pending`` or ``rejected``; a
    rejected record means the provider refused it and still counts
    against the quota until deleted.
    """
    return domain_records.create_domain_record(
        db,
        user_id=current_user.user_id,
        available_domain_id=domain_in.available_domain_id,
        subdomain=domain_in.subdomain,
        record_type=domain_in.record_type,
        value=domain_in.value,
        ttl=domain_in.ttl,
        proxied=domain_in.proxied
    )


@router.get("/{domain_id}", response_model=DomainResponse)
async def get_domain(
    domain_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return domain_records.get_user_domain(db, current_user.user_id, domain_id)


@router.patch("/{domain_id}", response_model=DomainResponse)
async def update_domain(
    domain_id: int,
    domain_in: DomainUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return domain_records.update_domain_record(
        db, current_user.user_id, domain_id, value=domain_in.value, proxied=domain_in.proxied
    )


@router.delete("/{domain_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_domain(
    domain_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    domain_records.delete_domain_record(db, current_user.user_id, domain_id)


@admin_router.get("", response_model=DomainListResponse)
async def list_all_domains(
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    status_filter: Optional[str] = Query(None, alias="status"),
    user_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    items, total = domain_records.list_all_domains(
        db, page=page, page_size=page_size, status=status_filter, user_id=user_id
    )
    return DomainListResponse(
        items=[DomainResponse.model_validate(d) for d in items],
        total=total,
        page=page,
        page_size=page_size
    )


@admin_router.patch("/{domain_id}/status", response_model=DomainResponse)
async def set_domain_status(
    domain_id: int,
    status_in: DomainStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Approve, reject or re-queue a record. Check the returned status after approving."""
    return domain_records.admin_set_domain_status(db, domain_id, status_in.status)


@admin_router.patch("/{domain_id}/value", response_model=DomainResponse)
async def set_domain_value(
    domain_id: int,
    value_in: DomainValueUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return domain_records.admin_set_domain_value(db, domain_id, value_in.value)


@admin_router.delete("/{domain_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_any_domain(
    domain_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    domain_records.admin_delete_domain_record(db, domain_id)
