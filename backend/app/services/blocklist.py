"""Blocked subdomain labels (case-insensitive deny-list)."""
from typing import List, Optional
import structlog
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, SubdomainBlockedError, ValidationError
from app.db.models.blocked_subdomain import BlockedSubdomain

logger = structlog.get_logger()


def _normalize_label(subdomain: str) -> str:
    return (subdomain or "").strip().lower()


def find_block(db: Session, subdomain: str) -> Optional[BlockedSubdomain]:
    """Return the active block entry matching ``subdomain`` in any letter case."""
    return db.query(BlockedSubdomain).filter(
        BlockedSubdomain.subdomain == _normalize_label(subdomain),
        BlockedSubdomain.is_active == True
    ).first()


def ensure_not_blocked(db: Session, subdomain: str) -> None:
    """Raise SubdomainBlockedError when the label is on the active blocklist."""
    block = find_block(db, subdomain)
    if block:
        reason = f": {block.reason}" if block.reason else ""
        raise SubdomainBlockedError(f'子域名 "{subdomain}" 已被管理员禁用{reason}')


def list_blocked_subdomains(db: Session) -> List[BlockedSubdomain]:
    return db.query(BlockedSubdomain).order_by(BlockedSubdomain.subdomain).all()


def get_blocked_subdomain(db: Session, blocked_id: int) -> BlockedSubdomain:
    block = db.get(BlockedSubdomain, blocked_id)
    if not block:
        raise NotFoundError("Blocked subdomain not found")
    return block


def create_blocked_subdomain(
    db: Session,
    subdomain: str,
    reason: Optional[str] = None,
    is_active: bool = True
) -> BlockedSubdomain:
    label = _normalize_label(subdomain)
    if not label:
        raise ValidationError("Subdomain is required")

    existing = db.query(BlockedSubdomain).filter(BlockedSubdomain.subdomain == label).first()
    if existing:
        raise ValidationError(f'Subdomain "{label}" is already blocked')

    block = BlockedSubdomain(subdomain=label, reason=reason, is_active=is_active)
    db.add(block)
    db.commit()
    db.refresh(block)

    logger.info("Subdomain blocked", subdomain=label)
    return block


def update_blocked_subdomain(
    db: Session,
    blocked_id: int,
    reason: Optional[str] = None,
    is_active: Optional[bool] = None
) -> BlockedSubdomain:
    block = get_blocked_subdomain(db, blocked_id)
    if reason is not None:
        block.reason = reason
    if is_active is not None:
        block.is_active = is_active
    db.commit()
    db.refresh(block)
    return block


def delete_blocked_subdomain(db: Session, blocked_id: int) -> None:
    block = get_blocked_subdomain(db, blocked_id)
    db.delete(block)
    db.commit()
    logger.info("Subdomain unblocked", subdomain=block.subdomain)
