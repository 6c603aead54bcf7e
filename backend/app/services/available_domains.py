"""Registry of admin-curated root domains."""
import re
from typing import List, Optional
import structlog
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ResourceInUseError, ValidationError
from app.db.models.available_domain import AvailableDomain
from app.db.models.domain import Domain
from app.services import dns_accounts

logger = structlog.get_logger()

DOMAIN_PATTERN = re.compile(r"^(?=.{1,253}$)([a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,63}$")


def normalize_domain(domain: str) -> str:
    return (domain or "").strip().lower().rstrip(".")


def list_available_domains(db: Session, active_only: bool = False) -> List[AvailableDomain]:
    query = db.query(AvailableDomain)
    if active_only:
        query = query.filter(AvailableDomain.is_active == True)
    return query.order_by(AvailableDomain.domain).all()


def get_available_domain(db: Session, available_domain_id: int) -> AvailableDomain:
    available = db.get(AvailableDomain, available_domain_id)
    if not available:
        raise NotFoundError("Available domain not found")
    return available


def create_available_domain(
    db: Session,
    domain: str,
    dns_account_id: Optional[int] = None
) -> AvailableDomain:
    """Register a root domain. Falls back to the default DNS account."""
    name = normalize_domain(domain)
    if not DOMAIN_PATTERN.match(name):
        raise ValidationError(f"Invalid domain: {domain}")

    if dns_account_id is None:
        account = dns_accounts.get_default_account(db)
        if account is None:
            raise NotFoundError("No default DNS account configured")
    else:
        account = dns_accounts.get_account(db, dns_account_id)
        if not account.is_active:
            raise NotFoundError("DNS account not found")

    existing = db.query(AvailableDomain).filter(AvailableDomain.domain == name).first()
    if existing:
        raise ValidationError(f"Domain {name} already exists")

    available = AvailableDomain(domain=name, dns_account_id=account.account_id, is_active=True)
    db.add(available)
    db.commit()
    db.refresh(available)

    logger.info("Available domain created", domain=name, dns_account_id=account.account_id)
    return available


def update_available_domain(db: Session, available_domain_id: int, is_active: Optional[bool] = None) -> AvailableDomain:
    available = get_available_domain(db, available_domain_id)
    if is_active is not None:
        available.is_active = is_active
    db.commit()
    db.refresh(available)
    return available


def delete_available_domain(db: Session, available_domain_id: int) -> None:
    available = get_available_domain(db, available_domain_id)
    in_use = db.query(Domain).filter(Domain.available_domain_id == available_domain_id).count()
    if in_use:
        raise ResourceInUseError("Cannot delete domain with existing subdomains")

    db.delete(available)
    db.commit()
    logger.info("Available domain deleted", domain=available.domain)
