"""Admin user management endpoints."""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_admin
from app.db.models.user import User
from app.schemas.user import UserAdminResponse, UserUpdate
from app.services import users as user_service

router = APIRouter(prefix="/admin/users", tags=["Admin - Users"])


def _to_response(user: User, domain_count: int) -> UserAdminResponse:
    response = UserAdminResponse.model_validate(user)
    response.domain_count = domain_count
    return response


@router.get("", response_model=List[UserAdminResponse])
async def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """List all users with their domain counts."""
    return [_to_response(user, count) for user, count in user_service.list_users_with_counts(db)]


@router.get("/{user_id}", response_model=UserAdminResponse)
async def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    user = user_service.get_user(db, user_id)
    return _to_response(user, len(user.domains))


@router.patch("/{user_id}", response_model=UserAdminResponse)
async def update_user(
    user_id: int,
    user_in: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Change quota, active flag or role."""
    user = user_service.update_user(
        db,
        current_user,
        user_id,
        quota=user_in.quota,
        is_active=user_in.is_active,
        role=user_in.role
    )
    return _to_response(user, len(user.domains))
