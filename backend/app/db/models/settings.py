"""System settings model for admin-controlled policy."""
from sqlalchemy import Column, String, Text
from app.db.base import Base


class SystemSetting(Base):
    """Key-value policy store (default_domain_status, quotas, registration)."""

    __tablename__ = "system_settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=True)  # stored as string, parsed by type
    type = Column(String(20), nullable=False, default="string")
    description = Column(Text, nullable=True)
    updated_by = Column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<SystemSetting(key='{self.key}', value='{self.value}')>"
