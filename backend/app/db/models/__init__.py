"""Database models package."""
from app.db.models.user import User, UserRole
from app.db.models.dns_account import DnsAccount, DnsProviderType
from app.db.models.dns_provider import DnsProvider
from app.db.models.available_domain import AvailableDomain
from app.db.models.domain import Domain, DomainStatus, RecordType
from app.db.models.blocked_subdomain import BlockedSubdomain
from app.db.models.invite_code import InviteCode
from app.db.models.settings import SystemSetting

__all__ = [
    "User",
    "UserRole",
    "DnsAccount",
    "DnsProviderType",
    "DnsProvider",
    "AvailableDomain",
    "Domain",
    "DomainStatus",
    "RecordType",
    "BlockedSubdomain",
    "InviteCode",
    "SystemSetting",
]
