"""Admin invite code endpoints."""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_admin
from app.db.models.user import User
from app.schemas.invite_code import InviteCodeCreate, InviteCodeUpdate, InviteCodeResponse
from app.services import invite_codes as invite_service

router = APIRouter(prefix="/admin/invite-codes", tags=["Admin - Invite Codes"])


@router.get("", response_model=List[InviteCodeResponse])
async def list_invite_codes(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return invite_service.list_invite_codes(db)


@router.post("", response_model=InviteCodeResponse, status_code=status.HTTP_201_CREATED)
async def create_invite_code(
    invite_in: InviteCodeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return invite_service.create_invite_code(
        db,
        code=invite_in.code,
        max_uses=invite_in.max_uses,
        expires_at=invite_in.expires_at,
        description=invite_in.description,
        created_by=current_user.user_id
    )


@router.patch("/{invite_code_id}", response_model=InviteCodeResponse)
async def update_invite_code(
    invite_code_id: int,
    invite_in: InviteCodeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return invite_service.update_invite_code(db, invite_code_id, is_active=invite_in.is_active)


@router.delete("/{invite_code_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invite_code(
    invite_code_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    invite_service.delete_invite_code(db, invite_code_id)
