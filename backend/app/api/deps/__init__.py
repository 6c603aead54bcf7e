"""API dependencies package."""
from app.api.deps.auth import get_current_user, get_current_active_user, require_role, require_admin
from app.api.deps.database import get_db

__all__ = ["get_current_user", "get_current_active_user", "require_role", "require_admin", "get_db"]
