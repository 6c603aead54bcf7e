"""Domain record model - a user-owned subdomain mirrored at a DNS provider."""
from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, String, Boolean, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.base import Base


class RecordType(str, PyEnum):
    """DNS record types users may create."""
    A = "A"
    AAAA = "AAAA"
    CNAME = "CNAME"


class DomainStatus(str, PyEnum):
    """Lifecycle status of a domain record."""
    PENDING = "pending"
    ACTIVE = "active"
    REJECTED = "rejected"

    def can_transition_to(self, target: "DomainStatus") -> bool:
        return target in ALLOWED_TRANSITIONS[self]


# Admin-driven transitions. Users never change status directly.
ALLOWED_TRANSITIONS = {
    DomainStatus.PENDING: {DomainStatus.ACTIVE, DomainStatus.REJECTED},
    DomainStatus.REJECTED: {DomainStatus.ACTIVE, DomainStatus.PENDING},
    DomainStatus.ACTIVE: {DomainStatus.ACTIVE},
}


class Domain(Base):
    """Subdomain record owned by a user under an available root domain."""

    __tablename__ = "domains"

    domain_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    available_domain_id = Column(
        Integer, ForeignKey("available_domains.available_domain_id"), nullable=False, index=True
    )
    dns_account_id = Column(Integer, ForeignKey("dns_accounts.account_id"), nullable=False, index=True)

    subdomain = Column(String(63), nullable=False)  # label as entered
    record_type = Column(Enum(RecordType), nullable=False)
    value = Column(String(255), nullable=False)
    ttl = Column(Integer, default=300, nullable=False)
    proxied = Column(Boolean, default=False, nullable=False)

    provider_record_id = Column(String(255), nullable=True)  # set once the remote record exists
    status = Column(Enum(DomainStatus), default=DomainStatus.PENDING, nullable=False, index=True)

    user = relationship("User", back_populates="domains")
    available_domain = relationship("AvailableDomain", back_populates="domains")
    dns_account = relationship("DnsAccount", back_populates="domains")

    __table_args__ = (
        UniqueConstraint("subdomain", "available_domain_id", name="uq_domain_subdomain_root"),
    )

    @property
    def root_domain(self) -> str:
        return self.available_domain.domain

    @property
    def full_domain(self) -> str:
        return f"{self.subdomain}.{self.available_domain.domain}"

    def __repr__(self) -> str:
        return f"<Domain(domain_id={self.domain_id}, subdomain='{self.subdomain}', status='{self.status}')>"
