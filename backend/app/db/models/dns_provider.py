"""Admin-managed DNS provider registry."""
from sqlalchemy import Column, String, Boolean, Enum, JSON
from app.db.base import Base
from app.db.models.dns_account import DnsProviderType


class DnsProvider(Base):
    """Display metadata and enabled flag for one built-in provider type."""

    __tablename__ = "dns_providers"

    provider_type = Column(Enum(DnsProviderType), primary_key=True)
    display_name = Column(String(100), nullable=False)
    credential_schema = Column(JSON, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<DnsProvider(provider_type='{self.provider_type}', is_active={self.is_active})>"
