"""Pydantic schemas package."""
from app.schemas.user import UserCreate, UserUpdate, UserResponse, UserAdminResponse, UserLogin, Token
from app.schemas.dns_account import (
    DnsAccountCreate, DnsAccountUpdate, DnsAccountResponse, ProviderDomainsResponse, ProviderInfo, ProviderUpdate
)
from app.schemas.available_domain import (
    AvailableDomainCreate, AvailableDomainUpdate, AvailableDomainResponse, AvailableDomainAdminResponse
)
from app.schemas.domain import (
    DomainCreate, DomainUpdate, DomainStatusUpdate, DomainValueUpdate, DomainResponse, DomainListResponse
)
from app.schemas.blocked_subdomain import BlockedSubdomainCreate, BlockedSubdomainUpdate, BlockedSubdomainResponse
from app.schemas.invite_code import InviteCodeCreate, InviteCodeUpdate, InviteCodeResponse
from app.schemas.settings import SettingUpdate, SettingResponse
from app.schemas.stats import StatsResponse

__all__ = [
    "UserCreate", "UserUpdate", "UserResponse", "UserAdminResponse", "UserLogin", "Token",
    "DnsAccountCreate", "DnsAccountUpdate", "DnsAccountResponse", "ProviderDomainsResponse", "ProviderInfo", "ProviderUpdate",
    "AvailableDomainCreate", "AvailableDomainUpdate", "AvailableDomainResponse", "AvailableDomainAdminResponse",
    "DomainCreate", "DomainUpdate", "DomainStatusUpdate", "DomainValueUpdate", "DomainResponse", "DomainListResponse",
    "BlockedSubdomainCreate", "BlockedSubdomainUpdate", "BlockedSubdomainResponse",
    "InviteCodeCreate", "InviteCodeUpdate", "InviteCodeResponse",
    "SettingUpdate", "SettingResponse",
    "StatsResponse"
]
