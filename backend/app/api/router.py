"""API router configuration."""
from fastapi import APIRouter
from app.api.endpoints import (
    auth, users, providers, available_domains, domains,
    dns_accounts, blocked_subdomains, invite_codes, settings, dashboard
)

api_router = APIRouter()

# User-facing
api_router.include_router(auth.router)
api_router.include_router(providers.router)
api_router.include_router(available_domains.router)
api_router.include_router(domains.router)

# Admin
api_router.include_router(users.router)
api_router.include_router(providers.admin_router)
api_router.include_router(dns_accounts.router)
api_router.include_router(available_domains.admin_router)
api_router.include_router(domains.admin_router)
api_router.include_router(blocked_subdomains.router)
api_router.include_router(invite_codes.router)
api_router.include_router(settings.router)
api_router.include_router(dashboard.router)
