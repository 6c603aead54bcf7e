"""Admin user management and dashboard statistics."""
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple
import structlog
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.db.models.dns_account import DnsAccount
from app.db.models.domain import Domain, DomainStatus
from app.db.models.user import User, UserRole

logger = structlog.get_logger()

MAX_QUOTA = 1000


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def list_users_with_counts(db: Session) -> List[Tuple[User, int]]:
    """All users paired with the number of domain records they own."""
    counts = dict(
        db.query(Domain.user_id, func.count(Domain.domain_id)).group_by(Domain.user_id).all()
    )
    users = db.query(User).order_by(User.created_at.desc(), User.user_id.desc()).all()
    return [(user, counts.get(user.user_id, 0)) for user in users]


def update_user(
    db: Session,
    actor: User,
    user_id: int,
    quota: Optional[int] = None,
    is_active: Optional[bool] = None,
    role: Optional[UserRole] = None
) -> User:
    """Apply admin changes to a user. Admins cannot demote or disable themselves."""
    user = get_user(db, user_id)
    is_self = user.user_id == actor.user_id

    if quota is not None:
        if quota < 0 or quota > MAX_QUOTA:
            raise ValidationError(f"Quota must be between 0 and {MAX_QUOTA}")
        user.quota = quota
    if is_active is not None:
        if is_self and not is_active:
            raise ValidationError("Cannot deactivate yourself")
        user.is_active = is_active
    if role is not None:
        if is_self and role != UserRole.ADMIN:
            raise ValidationError("Cannot remove your own admin role")
        user.role = role

    db.commit()
    db.refresh(user)

    logger.info("User updated by admin", user_id=user_id, actor_id=actor.user_id)
    return user


def get_stats(db: Session) -> Dict[str, Any]:
    since = datetime.utcnow() - timedelta(days=7)

    def count_domains(status: DomainStatus) -> int:
        return db.query(Domain).filter(Domain.status == status).count()

    return {
        "users": {
            "total": db.query(User).count(),
            "active": db.query(User).filter(User.is_active == True).count(),
            "recent": db.query(User).filter(User.created_at >= since).count(),
        },
        "domains": {
            "total": db.query(Domain).count(),
            "active": count_domains(DomainStatus.ACTIVE),
            "pending": count_domains(DomainStatus.PENDING),
            "rejected": count_domains(DomainStatus.REJECTED),
            "recent": db.query(Domain).filter(Domain.created_at >= since).count(),
        },
        "dns_accounts": {
            "active": db.query(DnsAccount).filter(DnsAccount.is_active == True).count(),
        },
    }
