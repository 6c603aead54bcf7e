"""System policy settings stored as key/value rows."""
from typing import Any, List, Optional
import structlog
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.db.models.domain import DomainStatus
from app.db.models.settings import SystemSetting

logger = structlog.get_logger()

DEFAULT_SETTINGS = {
    "default_domain_status": {
        "value": settings.DEFAULT_DOMAIN_STATUS,
        "type": "string",
        "choices": [DomainStatus.ACTIVE.value, DomainStatus.PENDING.value],
        "description": "Status of new domain records: active creates the DNS record immediately, pending waits for admin review",
    },
    "default_user_quota": {
        "value": str(settings.DEFAULT_USER_QUOTA),
        "type": "integer",
        "description": "Domain quota granted to newly registered users",
    },
    "allow_registration": {
        "value": "true",
        "type": "boolean",
        "description": "Allow new users to register",
    },
    "require_invite_code": {
        "value": "false",
        "type": "boolean",
        "description": "Require a valid invite code to register",
    },
}


def _normalize(key: str, value: Any) -> str:
    """Validate a raw value for ``key`` and return its stored string form."""
    config = DEFAULT_SETTINGS[key]
    kind = config["type"]
    text = str(value).strip().lower() if isinstance(value, (str, bool)) else str(value)

    if kind == "boolean":
        if text in ("true", "1", "yes"):
            return "true"
        if text in ("false", "0", "no"):
            return "false"
        raise ValidationError(f"Setting {key} expects a boolean")
    if kind == "integer":
        try:
            number = int(text)
        except ValueError:
            raise ValidationError(f"Setting {key} expects an integer")
        if number < 0:
            raise ValidationError(f"Setting {key} must not be negative")
        return str(number)
    if "choices" in config and text not in config["choices"]:
        raise ValidationError(f"Setting {key} must be one of: {', '.join(config['choices'])}")
    return text


def initialize_settings(db: Session, updated_by: str = "system") -> int:
    """Insert any missing default setting rows. Returns the number created."""
    created = 0
    for key, config in DEFAULT_SETTINGS.items():
        if db.get(SystemSetting, key) is None:
            db.add(SystemSetting(
                key=key,
                value=config["value"],
                type=config["type"],
                description=config["description"],
                updated_by=updated_by
            ))
            created += 1
    db.commit()
    if created:
        logger.info("Seeded system settings", created=created)
    return created


def list_settings(db: Session) -> List[SystemSetting]:
    return db.query(SystemSetting).order_by(SystemSetting.key).all()


def get_setting_value(db: Session, key: str) -> Optional[str]:
    """Raw stored value, or the built-in default when the row is missing."""
    row = db.get(SystemSetting, key)
    if row is not None and row.value is not None:
        return row.value
    default = DEFAULT_SETTINGS.get(key)
    return default["value"] if default else None


def update_setting(db: Session, key: str, value: Any, updated_by: Optional[str] = None) -> SystemSetting:
    if key not in DEFAULT_SETTINGS:
        raise NotFoundError(f"Setting not found: {key}")

    stored = _normalize(key, value)
    row = db.get(SystemSetting, key)
    if row is None:
        config = DEFAULT_SETTINGS[key]
        row = SystemSetting(key=key, type=config["type"], description=config["description"])
        db.add(row)
    row.value = stored
    row.updated_by = updated_by
    db.commit()
    db.refresh(row)

    logger.info("System setting updated", key=key, value=stored, updated_by=updated_by)
    return row


def get_default_domain_status(db: Session) -> DomainStatus:
    value = get_setting_value(db, "default_domain_status")
    try:
        return DomainStatus(value)
    except ValueError:
        logger.warning("Invalid default_domain_status, falling back", value=value)
        return DomainStatus(settings.DEFAULT_DOMAIN_STATUS)


def get_default_user_quota(db: Session) -> int:
    try:
        return int(get_setting_value(db, "default_user_quota"))
    except (TypeError, ValueError):
        return settings.DEFAULT_USER_QUOTA


def _get_bool(db: Session, key: str) -> bool:
    return (get_setting_value(db, key) or "").lower() == "true"


def is_registration_allowed(db: Session) -> bool:
    return _get_bool(db, "allow_registration")


def is_invite_code_required(db: Session) -> bool:
    return _get_bool(db, "require_invite_code")
