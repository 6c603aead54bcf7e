"""Invite codes gating registration."""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.db.base import Base


class InviteCode(Base):
    """Invite code with a use budget and optional expiry."""

    __tablename__ = "invite_codes"

    invite_code_id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(64), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    max_uses = Column(Integer, default=1, nullable=False)
    used_count = Column(Integer, default=0, nullable=False)
    expires_at = Column(DateTime, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_by = Column(Integer, ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True)

    creator = relationship("User")

    @property
    def is_expired(self) -> bool:
        return self.expires_at is not None and self.expires_at < datetime.utcnow()

    @property
    def is_exhausted(self) -> bool:
        return self.used_count >= self.max_uses

    @property
    def is_usable(self) -> bool:
        return self.is_active and not self.is_expired and not self.is_exhausted

    def __repr__(self) -> str:
        return f"<InviteCode(invite_code_id={self.invite_code_id}, code='{self.code}')>"
