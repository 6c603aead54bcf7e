"""API endpoints package."""
from app.api.endpoints import (
    auth, users, providers, available_domains, domains,
    dns_accounts, blocked_subdomains, invite_codes, settings, dashboard
)

__all__ = [
    "auth", "users", "providers", "available_domains", "domains",
    "dns_accounts", "blocked_subdomains", "invite_codes", "settings", "dashboard"
]
