"""Registration and login."""
from datetime import datetime, timedelta
from typing import Optional, Tuple
import structlog
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import AuthError, ValidationError
from app.core.security import create_access_token, get_password_hash, verify_password
from app.db.models.user import User, UserRole
from app.services import invite_codes, system_settings

logger = structlog.get_logger()

MIN_PASSWORD_LENGTH = 6


def register_user(
    db: Session,
    email: str,
    password: str,
    full_name: Optional[str] = None,
    invite_code: Optional[str] = None
) -> User:
    """
    Create a user account.

    The very first account becomes an admin and bypasses the registration
    and invite code policies.
    """
    email = email.strip().lower()
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    is_first_user = db.query(User).count() == 0
    if not is_first_user:
        if not system_settings.is_registration_allowed(db):
            raise AuthError("Registration is disabled", code="registration_disabled", status_code=403)
        if db.query(User).filter(User.email == email).first():
            raise ValidationError("Email already registered")
        if system_settings.is_invite_code_required(db):
            invite_codes.consume_invite_code(db, invite_code)

    user = User(
        email=email,
        password_hash=get_password_hash(password),
        full_name=full_name,
        role=UserRole.ADMIN if is_first_user else UserRole.USER,
        quota=system_settings.get_default_user_quota(db),
        is_active=True
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("User registered", user_id=user.user_id, role=user.role.value)
    return user


def authenticate(db: Session, email: str, password: str) -> Tuple[User, str]:
    """Verify credentials and return the user with a fresh access token."""
    user = db.query(User).filter(User.email == (email or "").strip().lower()).first()
    if not user or not verify_password(password, user.password_hash):
        raise AuthError("Incorrect email or password", code="invalid_login")
    if not user.is_active:
        raise AuthError("Inactive user account", code="inactive_user", status_code=403)

    user.last_login_at = datetime.utcnow()
    db.commit()

    token = create_access_token(
        data={"sub": user.email},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    logger.info("User logged in", user_id=user.user_id)
    return user, token
