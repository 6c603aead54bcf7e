"""DNS account manager.

Owns provider credentials for admin-level DNS accounts. Credentials are
validated against the live provider before they are stored, stored only
as ciphertext, and decrypted only inside :func:`build_provider_for_account`
right before an adapter is constructed.
"""
from typing import Any, Dict, List, Optional
import structlog
from sqlalchemy.orm import Session

from app.core.crypto import decrypt_credential_dict, encrypt_credential_dict
from app.core.exceptions import CredentialError, NotFoundError, ResourceInUseError, ValidationError
from app.db.models.available_domain import AvailableDomain
from app.db.models.dns_account import DnsAccount
from app.db.models.domain import Domain
from app.services import dns_providers
from app.services.adapters.base import DNSProviderAdapter
from app.services.adapters.dns import factory as provider_factory

logger = structlog.get_logger()


def build_provider_for_account(account: DnsAccount) -> DNSProviderAdapter:
    """Decrypt the account's credentials and construct its provider adapter."""
    credentials = decrypt_credential_dict(account.encrypted_credentials)
    try:
        return provider_factory.create_dns_provider(account.provider_type, credentials)
    finally:
        del credentials


def _clear_default_flags(db: Session, keep_account_id: Optional[int] = None) -> None:
    query = db.query(DnsAccount).filter(DnsAccount.is_default == True)
    if keep_account_id is not None:
        query = query.filter(DnsAccount.account_id != keep_account_id)
    query.update({DnsAccount.is_default: False}, synchronize_session="fetch")


def list_accounts(db: Session, active_only: bool = False) -> List[DnsAccount]:
    query = db.query(DnsAccount)
    if active_only:
        query = query.filter(DnsAccount.is_active == True)
    return query.order_by(DnsAccount.created_at.desc(), DnsAccount.account_id.desc()).all()


def get_account(db: Session, account_id: int) -> DnsAccount:
    account = db.get(DnsAccount, account_id)
    if not account:
        raise NotFoundError("DNS account not found")
    return account


def get_default_account(db: Session) -> Optional[DnsAccount]:
    return db.query(DnsAccount).filter(
        DnsAccount.is_default == True,
        DnsAccount.is_active == True
    ).first()


def create_account(
    db: Session,
    name: str,
    provider_type: str,
    credentials: Dict[str, Any],
    is_default: bool = False
) -> DnsAccount:
    """
    Validate credentials against the provider, then store them encrypted.

    Raises:
        UnsupportedProviderError: unknown or disabled provider type.
        CredentialError: incomplete credentials or rejected by the provider.
    """
    if not name or not name.strip():
        raise ValidationError("Account name is required")

    kind = dns_providers.ensure_provider_enabled(db, provider_type)
    with provider_factory.create_dns_provider(kind, credentials) as provider:
        if not provider.validate_credentials():
            raise CredentialError("invalid credentials")

    account = DnsAccount(
        name=name.strip(),
        provider_type=kind,
        encrypted_credentials=encrypt_credential_dict(credentials),
        is_default=is_default,
        is_active=True
    )
    try:
        if is_default:
            _clear_default_flags(db)
        db.add(account)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(account)

    logger.info("DNS account created", account_id=account.account_id, provider=kind.value, is_default=is_default)
    return account


def update_account(db: Session, account_id: int, patch: Dict[str, Any]) -> DnsAccount:
    """
    Apply a partial update.

    Replacement credentials are re-encrypted but not re-validated against
    the provider; callers that need that should validate first.
    """
    account = get_account(db, account_id)

    try:
        if patch.get("name") is not None:
            if not patch["name"].strip():
                raise ValidationError("Account name is required")
            account.name = patch["name"].strip()
        if patch.get("credentials") is not None:
            account.encrypted_credentials = encrypt_credential_dict(patch["credentials"])
        if patch.get("is_active") is not None:
            account.is_active = patch["is_active"]
        if patch.get("is_default") is not None:
            if patch["is_default"]:
                _clear_default_flags(db, keep_account_id=account.account_id)
            account.is_default = patch["is_default"]
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(account)

    logger.info(
        "DNS account updated",
        account_id=account.account_id,
        fields=sorted(k for k, v in patch.items() if v is not None)
    )
    return account


def count_references(db: Session, account_id: int) -> Dict[str, int]:
    return {
        "available_domains": db.query(AvailableDomain).filter(
            AvailableDomain.dns_account_id == account_id
        ).count(),
        "domains": db.query(Domain).filter(Domain.dns_account_id == account_id).count(),
    }


def delete_account(db: Session, account_id: int) -> None:
    """Hard delete; refused while any available domain or record references the account."""
    account = get_account(db, account_id)
    refs = count_references(db, account_id)
    if refs["available_domains"]:
        raise ResourceInUseError("Cannot delete DNS account with existing available domains")
    if refs["domains"]:
        raise ResourceInUseError("Cannot delete DNS account with existing domains")

    db.delete(account)
    db.commit()
    logger.info("DNS account deleted", account_id=account_id)


def list_provider_domains(db: Session, account_id: int) -> List[str]:
    """Zones visible to the account's credentials. Decrypt failures are fatal."""
    account = get_account(db, account_id)
    with build_provider_for_account(account) as provider:
        domains = provider.list_domains()
    logger.info("Listed provider domains", account_id=account_id, count=len(domains))
    return domains
