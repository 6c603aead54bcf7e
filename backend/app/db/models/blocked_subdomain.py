"""Blocked subdomain labels."""
from sqlalchemy import Column, Integer, String, Boolean, Text
from app.db.base import Base


class BlockedSubdomain(Base):
    """Reserved subdomain label that users may not claim."""

    __tablename__ = "blocked_subdomains"

    blocked_id = Column(Integer, primary_key=True, autoincrement=True)
    subdomain = Column(String(63), unique=True, nullable=False, index=True)  # stored lower-case
    reason = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<BlockedSubdomain(blocked_id={self.blocked_id}, subdomain='{self.subdomain}')>"
