"""Admin system settings endpoints."""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_admin
from app.db.models.user import User
from app.schemas.settings import SettingUpdate, SettingResponse
from app.services import system_settings

router = APIRouter(prefix="/admin/settings", tags=["Admin - Settings"])


@router.get("", response_model=List[SettingResponse])
async def list_settings(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """List settings, creating any missing defaults first."""
    system_settings.initialize_settings(db)
    return system_settings.list_settings(db)


@router.put("/{key}", response_model=SettingResponse)
async def update_setting(
    key: str,
    setting_in: SettingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return system_settings.update_setting(db, key, setting_in.value, updated_by=current_user.email)
