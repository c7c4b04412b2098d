"""
Authentication routes for signup, login and the current user.
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from ..auth import get_current_user_id
from ..config import get_settings
from ..database import get_db
from ..limiter import limiter
from ..schemas.auth import AuthResponse, UserCreate, UserLogin, UserResponse
from ..services import users

settings = get_settings()

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.signup_rate_limit)
def signup(request: Request, user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new account and return a token for it."""
    user, token = users.register(
        db,
        username=user_data.username,
        email=user_data.email,
        password=user_data.password,
        confirm_password=user_data.confirm_password,
    )
    return AuthResponse(
        message="User created successfully",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, credentials: UserLogin, db: Session = Depends(get_db)):
    """Login with JSON body (email/password)."""
    user, token = users.authenticate(db, credentials.email, credentials.password)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
def get_me(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Get current authenticated user."""
    return users.get_user(db, user_id)
