"""Admin dashboard schemas."""
from pydantic import BaseModel


class UserStats(BaseModel):
    total: int
    active: int
    recent: int


class DomainStats(BaseModel):
    total: int
    active: int
    pending: int
    rejected: int
    recent: int


class DnsAccountStats(BaseModel):
    active: int


class StatsResponse(BaseModel):
    users: UserStats
    domains: DomainStats
    dns_accounts: DnsAccountStats
