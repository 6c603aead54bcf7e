"""DNS account model holding encrypted provider credentials."""
from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, String, Boolean, Enum, Text
from sqlalchemy.orm import relationship
from app.db.base import Base


class DnsProviderType(str, PyEnum):
    """Supported DNS provider backends."""
    CLOUDFLARE = "cloudflare"
    ALIYUN = "aliyun"


class DnsAccount(Base):
    """One admin-registered credential set for one provider type."""

    __tablename__ = "dns_accounts"

    account_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    provider_type = Column(Enum(DnsProviderType), nullable=False)
    encrypted_credentials = Column(Text, nullable=False)  # opaque AES-GCM token
    is_default = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    available_domains = relationship("AvailableDomain", back_populates="dns_account")
    domains = relationship("Domain", back_populates="dns_account")

    def __repr__(self) -> str:
        return f"<DnsAccount(account_id={self.account_id}, name='{self.name}', provider='{self.provider_type}')>"
