"""Invite codes gating self-registration."""
import secrets
from datetime import datetime
from typing import List, Optional
import structlog
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.db.models.invite_code import InviteCode

logger = structlog.get_logger()

CODE_LENGTH = 12


def generate_code() -> str:
    return secrets.token_urlsafe(CODE_LENGTH)[:CODE_LENGTH].upper()


def list_invite_codes(db: Session) -> List[InviteCode]:
    return db.query(InviteCode).order_by(InviteCode.created_at.desc(), InviteCode.invite_code_id.desc()).all()


def get_invite_code(db: Session, invite_code_id: int) -> InviteCode:
    invite = db.get(InviteCode, invite_code_id)
    if not invite:
        raise NotFoundError("Invite code not found")
    return invite


def create_invite_code(
    db: Session,
    code: Optional[str] = None,
    max_uses: int = 1,
    expires_at: Optional[datetime] = None,
    description: Optional[str] = None,
    created_by: Optional[int] = None
) -> InviteCode:
    code = (code or "").strip() or generate_code()
    if max_uses < 1:
        raise ValidationError("max_uses must be at least 1")
    if db.query(InviteCode).filter(InviteCode.code == code).first():
        raise ValidationError("Invite code already exists")

    invite = InviteCode(
        code=code,
        max_uses=max_uses,
        expires_at=expires_at,
        description=description,
        created_by=created_by,
        is_active=True
    )
    db.add(invite)
    db.commit()
    db.refresh(invite)

    logger.info("Invite code created", invite_code_id=invite.invite_code_id, max_uses=max_uses)
    return invite


def update_invite_code(db: Session, invite_code_id: int, is_active: Optional[bool] = None) -> InviteCode:
    invite = get_invite_code(db, invite_code_id)
    if is_active is not None:
        invite.is_active = is_active
    db.commit()
    db.refresh(invite)
    return invite


def delete_invite_code(db: Session, invite_code_id: int) -> None:
    invite = get_invite_code(db, invite_code_id)
    db.delete(invite)
    db.commit()
    logger.info("Invite code deleted", invite_code_id=invite_code_id)


def consume_invite_code(db: Session, code: Optional[str]) -> InviteCode:
    """Count one use of ``code``. The caller commits."""
    if not code or not code.strip():
        raise ValidationError("Invite code is required")

    invite = db.query(InviteCode).filter(InviteCode.code == code.strip()).first()
    if not invite or not invite.is_active:
        raise ValidationError("Invalid invite code")
    if invite.is_expired:
        raise ValidationError("Invite code has expired")
    if invite.is_exhausted:
        raise ValidationError("Invite code has been used up")

    invite.used_count += 1
    return invite
