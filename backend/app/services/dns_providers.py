"""DNS provider registry.

Provider types are fixed by the adapter factory. Admins can rename them,
edit the credential hints shown to operators, and disable a type so new
DNS accounts cannot be registered for it. A type without a stored row
uses the factory's built-in metadata and counts as enabled.
"""
from typing import Any, Dict, List, Optional, Union
import structlog
from sqlalchemy.orm import Session

from app.core.exceptions import UnsupportedProviderError, ValidationError
from app.db.models.dns_account import DnsAccount, DnsProviderType
from app.db.models.dns_provider import DnsProvider
from app.services.adapters.dns import factory as provider_factory

logger = structlog.get_logger()


def _to_info(kind: DnsProviderType, row: Optional[DnsProvider], account_count: int = 0) -> Dict[str, Any]:
    default = provider_factory.PROVIDER_INFO[kind]
    if row is None:
        return {
            "type": kind.value,
            "display_name": default["display_name"],
            "credential_schema": default["credential_schema"],
            "is_active": True,
            "account_count": account_count,
        }
    return {
        "type": kind.value,
        "display_name": row.display_name,
        "credential_schema": row.credential_schema if row.credential_schema is not None else default["credential_schema"],
        "is_active": row.is_active,
        "account_count": account_count,
    }


def initialize_providers(db: Session) -> int:
    """Insert a registry row for every built-in provider type that lacks one."""
    created = 0
    for kind, info in provider_factory.PROVIDER_INFO.items():
        if db.get(DnsProvider, kind) is None:
            db.add(DnsProvider(
                provider_type=kind,
                display_name=info["display_name"],
                credential_schema=info["credential_schema"],
                is_active=True
            ))
            created += 1
    db.commit()
    if created:
        logger.info("Seeded DNS providers", created=created)
    return created


def list_providers(db: Session, active_only: bool = False) -> List[Dict[str, Any]]:
    """Provider catalogue sorted by display name, with account counts."""
    rows = {row.provider_type: row for row in db.query(DnsProvider).all()}
    counts: Dict[DnsProviderType, int] = {}
    for (kind,) in db.query(DnsAccount.provider_type).all():
        counts[kind] = counts.get(kind, 0) + 1

    providers = [
        _to_info(kind, rows.get(kind), counts.get(kind, 0))
        for kind in provider_factory.PROVIDER_INFO
    ]
    if active_only:
        providers = [p for p in providers if p["is_active"]]
    return sorted(providers, key=lambda p: p["display_name"])


def is_provider_enabled(db: Session, provider_type: Union[str, DnsProviderType]) -> bool:
    kind = provider_factory.parse_provider_type(provider_type)
    row = db.get(DnsProvider, kind)
    return row is None or row.is_active


def ensure_provider_enabled(db: Session, provider_type: Union[str, DnsProviderType]) -> DnsProviderType:
    """Resolve ``provider_type`` and raise UnsupportedProviderError when it is disabled."""
    kind = provider_factory.parse_provider_type(provider_type)
    if not is_provider_enabled(db, kind):
        raise UnsupportedProviderError(f"DNS provider is disabled: {kind.value}")
    return kind


def update_provider(
    db: Session,
    provider_type: Union[str, DnsProviderType],
    display_name: Optional[str] = None,
    credential_schema: Optional[Dict[str, Any]] = None,
    is_active: Optional[bool] = None
) -> Dict[str, Any]:
    """
    Edit a provider's registry entry.

    Disabling a provider only blocks new accounts; existing accounts and
    their records keep working.
    """
    kind = provider_factory.parse_provider_type(provider_type)
    if display_name is not None and not display_name.strip():
        raise ValidationError("Display name is required")

    row = db.get(DnsProvider, kind)
    if row is None:
        default = provider_factory.PROVIDER_INFO[kind]
        row = DnsProvider(
            provider_type=kind,
            display_name=default["display_name"],
            credential_schema=default["credential_schema"],
            is_active=True
        )
        db.add(row)

    if display_name is not None:
        row.display_name = display_name.strip()
    if credential_schema is not None:
        row.credential_schema = credential_schema
    if is_active is not None:
        row.is_active = is_active
    db.commit()
    db.refresh(row)

    logger.info("DNS provider updated", provider=kind.value, is_active=row.is_active)
    account_count = db.query(DnsAccount).filter(DnsAccount.provider_type == kind).count()
    return _to_info(kind, row, account_count)
