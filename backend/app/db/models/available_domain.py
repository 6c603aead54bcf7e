"""Root domains offered to end users."""
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from app.db.base import Base


class AvailableDomain(Base):
    """A root domain (e.g. example.com) backed by one DNS account."""

    __tablename__ = "available_domains"

    available_domain_id = Column(Integer, primary_key=True, autoincrement=True)
    domain = Column(String(255), unique=True, nullable=False, index=True)
    dns_account_id = Column(Integer, ForeignKey("dns_accounts.account_id"), nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)

    dns_account = relationship("DnsAccount", back_populates="available_domains")
    domains = relationship("Domain", back_populates="available_domain")

    def __repr__(self) -> str:
        return f"<AvailableDomain(available_domain_id={self.available_domain_id}, domain='{self.domain}')>"
