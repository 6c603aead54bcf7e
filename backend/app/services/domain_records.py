"""Domain record lifecycle manager.

Records move through ``pending -> active | rejected`` (see
``DomainStatus``). Provider failures are handled per operation:

- create / admin activation: the record is kept and marked ``rejected``
- update / admin value override: the call fails and nothing local changes
- delete: the failure is logged and the local row is removed anyway

Credential (decrypt) failures are always fatal to the operation.
All local checks (blocklist, quota, uniqueness, policy) run before any
provider is constructed.
"""
import ipaddress
import re
from typing import List, Optional, Tuple
import structlog
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import (
    DuplicateSubdomainError,
    InvalidStateError,
    NotFoundError,
    ProviderError,
    QuotaExceededError,
    ValidationError,
)
from app.db.models.available_domain import AvailableDomain
from app.db.models.dns_account import DnsAccount
from app.db.models.domain import Domain, DomainStatus, RecordType
from app.db.models.user import User
from app.services import blocklist, dns_accounts, system_settings
from app.services.adapters.base import PROXIABLE_TYPES, RecordSpec

logger = structlog.get_logger()

LABEL_PATTERN = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)(\.(?!-)[A-Za-z0-9-]{1,63}(?<!-))*$")
HOSTNAME_PATTERN = re.compile(r"^(?=.{1,253}\.?$)((?!-)[A-Za-z0-9_-]{1,63}(?<!-)\.)*(?!-)[A-Za-z0-9-]{1,63}(?<!-)\.?$")


def validate_subdomain(subdomain: str) -> str:
    label = (subdomain or "").strip()
    if not LABEL_PATTERN.match(label):
        raise ValidationError(f"Invalid subdomain: {subdomain!r}")
    return label


def validate_record_value(record_type: RecordType, value: str) -> str:
    """Check ``value`` is well-formed for the record type."""
    value = (value or "").strip()
    if record_type == RecordType.A:
        try:
            ipaddress.IPv4Address(value)
        except ValueError:
            raise ValidationError(f"A record value must be an IPv4 address: {value!r}")
    elif record_type == RecordType.AAAA:
        try:
            ipaddress.IPv6Address(value)
        except ValueError:
            raise ValidationError(f"AAAA record value must be an IPv6 address: {value!r}")
    elif record_type == RecordType.CNAME:
        if not HOSTNAME_PATTERN.match(value):
            raise ValidationError(f"CNAME record value must be a hostname: {value!r}")
    return value


def _parse_record_type(record_type) -> RecordType:
    try:
        return RecordType(str(getattr(record_type, "value", record_type)).upper())
    except ValueError:
        raise ValidationError(f"Unsupported record type: {record_type}")


def _effective_proxied(record_type: RecordType, proxied: Optional[bool]) -> bool:
    return bool(proxied) and record_type.value in PROXIABLE_TYPES


def _create_remote_record(
    account: DnsAccount,
    root_domain: str,
    full_domain: str,
    record_type: RecordType,
    value: str,
    ttl: int,
    proxied: bool
) -> str:
    """Create the record at the provider and return its remote id."""
    with dns_accounts.build_provider_for_account(account) as provider:
        remote = provider.create_record(root_domain, RecordSpec(
            name=full_domain,
            type=record_type.value,
            value=value,
            ttl=ttl,
            proxied=proxied
        ))
    if not remote.id:
        raise ProviderError("provider returned no record id")
    return remote.id


def _delete_remote_quietly(account: DnsAccount, root_domain: str, record_id: str, domain_id=None) -> None:
    try:
        with dns_accounts.build_provider_for_account(account) as provider:
            provider.delete_record(root_domain, record_id)
    except ProviderError as e:
        logger.warning(
            "Remote DNS record delete failed; local record removed anyway",
            domain_id=domain_id,
            provider_record_id=record_id,
            error=e.message
        )


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def get_domain(db: Session, domain_id: int) -> Domain:
    domain = db.get(Domain, domain_id)
    if not domain:
        raise NotFoundError("Domain not found")
    return domain


def get_user_domain(db: Session, user_id: int, domain_id: int) -> Domain:
    domain = db.query(Domain).filter(Domain.domain_id == domain_id, Domain.user_id == user_id).first()
    if not domain:
        raise NotFoundError("Domain not found")
    return domain


def list_user_domains(db: Session, user_id: int) -> List[Domain]:
    return db.query(Domain).filter(Domain.user_id == user_id).order_by(
        Domain.created_at.desc(), Domain.domain_id.desc()
    ).all()


def list_all_domains(
    db: Session,
    page: int = 1,
    page_size: int = 50,
    status: Optional[str] = None,
    user_id: Optional[int] = None
) -> Tuple[List[Domain], int]:
    query = db.query(Domain)
    if status:
        try:
            query = query.filter(Domain.status == DomainStatus(status))
        except ValueError:
            raise ValidationError(f"Unknown status: {status}")
    if user_id is not None:
        query = query.filter(Domain.user_id == user_id)

    total = query.count()
    items = query.order_by(Domain.created_at.desc(), Domain.domain_id.desc()).offset(
        (page - 1) * page_size
    ).limit(page_size).all()
    return items, total


# ---------------------------------------------------------------------------
# User operations
# ---------------------------------------------------------------------------

def create_domain_record(
    db: Session,
    user_id: int,
    available_domain_id: int,
    subdomain: str,
    record_type,
    value: str,
    ttl: Optional[int] = None,
    proxied: Optional[bool] = False
) -> Domain:
    """
    Create a subdomain record for a user.

    Steps:
    1. Available domain must exist and be active
    2. Label must not be blocked (case-insensitive)
    3. User must be under quota
    4. Label must be unused under the same root
    5. Policy ``pending`` stores the row without any provider call;
       policy ``active`` creates the remote record, and a provider failure
       stores the row as ``rejected`` instead of raising.

    Raises:
        NotFoundError, SubdomainBlockedError, QuotaExceededError,
        DuplicateSubdomainError, ValidationError, CredentialError
    """
    kind = _parse_record_type(record_type)
    label = validate_subdomain(subdomain)
    value = validate_record_value(kind, value)
    ttl = ttl or settings.DEFAULT_RECORD_TTL
    proxied = _effective_proxied(kind, proxied)

    available = db.query(AvailableDomain).filter(
        AvailableDomain.available_domain_id == available_domain_id,
        AvailableDomain.is_active == True
    ).first()
    if not available:
        raise NotFoundError("Available domain not found")

    blocklist.ensure_not_blocked(db, label)

    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    owned = db.query(Domain).filter(Domain.user_id == user_id).count()
    if owned >= user.quota:
        raise QuotaExceededError("Domain quota exceeded")

    existing = db.query(Domain).filter(
        Domain.available_domain_id == available_domain_id,
        func.lower(Domain.subdomain) == label.lower()
    ).first()
    if existing:
        raise DuplicateSubdomainError("Subdomain already exists")

    policy = system_settings.get_default_domain_status(db)
    full_domain = f"{label}.{available.domain}"
    account = available.dns_account

    provider_record_id = None
    status = DomainStatus.PENDING
    if policy == DomainStatus.ACTIVE:
        try:
            provider_record_id = _create_remote_record(
                account, available.domain, full_domain, kind, value, ttl, proxied
            )
            status = DomainStatus.ACTIVE
        except ProviderError as e:
            status = DomainStatus.REJECTED
            logger.warning("DNS record creation failed; storing as rejected", domain=full_domain, error=e.message)

    domain = Domain(
        user_id=user_id,
        available_domain_id=available.available_domain_id,
        dns_account_id=available.dns_account_id,
        subdomain=label,
        record_type=kind,
        value=value,
        ttl=ttl,
        proxied=proxied,
        provider_record_id=provider_record_id,
        status=status
    )
    db.add(domain)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        if provider_record_id:
            _delete_remote_quietly(account, available.domain, provider_record_id)
        if isinstance(e, IntegrityError):
            raise DuplicateSubdomainError("Subdomain already exists")
        raise
    db.refresh(domain)

    logger.info("Domain record created", domain_id=domain.domain_id, domain=full_domain, status=status.value)
    return domain


def _apply_remote_update(db: Session, domain: Domain, value: Optional[str], proxied: Optional[bool]) -> Domain:
    """Push merged fields to the provider, then commit locally. No local change on failure."""
    if domain.status != DomainStatus.ACTIVE:
        raise InvalidStateError(f"Domain is {domain.status.value}; only active records can be updated")
    if not domain.provider_record_id:
        raise InvalidStateError("Domain has no DNS record at the provider")

    new_value = validate_record_value(domain.record_type, value) if value is not None else domain.value
    new_proxied = _effective_proxied(domain.record_type, proxied) if proxied is not None else domain.proxied

    with dns_accounts.build_provider_for_account(domain.dns_account) as provider:
        provider.update_record(domain.root_domain, domain.provider_record_id, RecordSpec(
            name=domain.full_domain,
            type=domain.record_type.value,
            value=new_value,
            ttl=domain.ttl,
            proxied=new_proxied
        ))

    domain.value = new_value
    domain.proxied = new_proxied
    db.commit()
    db.refresh(domain)
    return domain


def update_domain_record(
    db: Session,
    user_id: int,
    domain_id: int,
    value: Optional[str] = None,
    proxied: Optional[bool] = None
) -> Domain:
    """Update value/proxied on an active record owned by the user.

    Raises:
        NotFoundError, InvalidStateError, ProviderError, CredentialError
    """
    domain = get_user_domain(db, user_id, domain_id)
    try:
        domain = _apply_remote_update(db, domain, value, proxied)
    except ProviderError as e:
        logger.warning("DNS record update failed", domain_id=domain_id, error=e.message)
        raise
    logger.info("Domain record updated", domain_id=domain_id, user_id=user_id)
    return domain


def _remove_domain(db: Session, domain: Domain) -> None:
    if domain.provider_record_id:
        _delete_remote_quietly(domain.dns_account, domain.root_domain, domain.provider_record_id, domain.domain_id)
    db.delete(domain)
    db.commit()


def delete_domain_record(db: Session, user_id: int, domain_id: int) -> None:
    """Delete a user's record. Remote delete failures never block the local delete."""
    domain = get_user_domain(db, user_id, domain_id)
    full_domain = domain.full_domain
    _remove_domain(db, domain)
    logger.info("Domain record deleted", domain_id=domain_id, domain=full_domain, user_id=user_id)


# ---------------------------------------------------------------------------
# Admin operations
# ---------------------------------------------------------------------------

def admin_set_domain_status(db: Session, domain_id: int, target_status) -> Domain:
    """
    Move a record to ``target_status``.

    Activating a record that has no remote record yet creates it; a
    provider failure leaves the record ``rejected`` and is not raised.
    """
    domain = get_domain(db, domain_id)
    try:
        target = DomainStatus(getattr(target_status, "value", target_status))
    except ValueError:
        raise ValidationError(f"Unknown status: {target_status}")

    current = domain.status
    if not current.can_transition_to(target):
        raise InvalidStateError(f"Cannot change status from {current.value} to {target.value}")

    created_record_id = None
    if target == DomainStatus.ACTIVE and not domain.provider_record_id:
        try:
            created_record_id = _create_remote_record(
                domain.dns_account,
                domain.root_domain,
                domain.full_domain,
                domain.record_type,
                domain.value,
                domain.ttl,
                domain.proxied
            )
            domain.provider_record_id = created_record_id
            domain.status = DomainStatus.ACTIVE
        except ProviderError as e:
            domain.status = DomainStatus.REJECTED
            logger.warning("DNS record activation failed", domain_id=domain_id, error=e.message)
    else:
        domain.status = target

    account, root_domain = domain.dns_account, domain.root_domain
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        if created_record_id:
            _delete_remote_quietly(account, root_domain, created_record_id, domain_id=domain_id)
        raise
    db.refresh(domain)

    logger.info("Domain status changed", domain_id=domain_id, from_status=current.value, to_status=domain.status.value)
    return domain


def admin_set_domain_value(db: Session, domain_id: int, value: str) -> Domain:
    """Override a record's value without an ownership check."""
    domain = get_domain(db, domain_id)
    try:
        domain = _apply_remote_update(db, domain, value, None)
    except ProviderError as e:
        logger.warning("Admin DNS record update failed", domain_id=domain_id, error=e.message)
        raise
    logger.info("Domain value overridden by admin", domain_id=domain_id)
    return domain


def admin_delete_domain_record(db: Session, domain_id: int) -> None:
    domain = get_domain(db, domain_id)
    _remove_domain(db, domain)
    logger.info("Domain record deleted by admin", domain_id=domain_id)
