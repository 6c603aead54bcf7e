"""Authentication endpoints."""
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_active_user
from app.db.models.user import User
from app.schemas.user import UserCreate, UserLogin, UserResponse, Token
from app.services import auth as auth_service
from app.services import system_settings

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=Token)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """Authenticate with a form post (username = email) and return a JWT."""
    user, access_token = auth_service.authenticate(db, form_data.username, form_data.password)
    return Token(access_token=access_token, user=UserResponse.model_validate(user))


@router.post("/login/json", response_model=Token)
async def login_json(
    credentials: UserLogin,
    db: Session = Depends(get_db)
):
    """Authenticate with a JSON body and return a JWT."""
    user, access_token = auth_service.authenticate(db, credentials.email, credentials.password)
    return Token(access_token=access_token, user=UserResponse.model_validate(user))


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_in: UserCreate,
    db: Session = Depends(get_db)
):
    """Register a new user. The first user becomes admin."""
    user = auth_service.register_user(
        db,
        email=user_in.email,
        password=user_in.password,
        full_name=user_in.full_name,
        invite_code=user_in.invite_code
    )
    return UserResponse.model_validate(user)


@router.get("/registration-policy")
async def registration_policy(db: Session = Depends(get_db)):
    """Public flags the sign-up form needs."""
    return {
        "allow_registration": system_settings.is_registration_allowed(db),
        "require_invite_code": system_settings.is_invite_code_required(db),
    }


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_active_user)):
    """Get current authenticated user."""
    return UserResponse.model_validate(current_user)


@router.post("/logout")
async def logout(current_user: User = Depends(get_current_active_user)):
    """Logout user (client should discard token)."""
    return {"message": "Successfully logged out"}
