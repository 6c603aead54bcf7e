"""Admin dashboard endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_admin
from app.db.models.user import User
from app.schemas.stats import StatsResponse
from app.services import users as user_service

router = APIRouter(prefix="/admin/stats", tags=["Admin - Dashboard"])


@router.get("", response_model=StatsResponse)
async def get_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return user_service.get_stats(db)
