"""
Authentication utilities for JWT tokens and password hashing.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from .config import get_settings
from .errors import AuthError

settings = get_settings()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


def issue_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed access token bound to a user id."""
    if expires_delta is None:
        expires_delta = timedelta(days=settings.token_expire_days)
    to_encode = {
        "sub": str(user_id),
        "exp": datetime.now(timezone.utc) + expires_delta,
        "type": "access",
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: Optional[str]) -> str:
    """
    Check signature and expiry of a token and return the user id it carries.

    Raises AuthError when the token is missing, malformed, expired,
    badly signed or not an access token.
    """
    if not token:
        raise AuthError("No token, authorization denied")

    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise AuthError("Token is not valid")

    if payload.get("type", "access") != "access":
        raise AuthError("Token is not valid")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthError("Token is not valid")
    return str(user_id)


def get_current_user_id(token: Optional[str] = Depends(oauth2_scheme)) -> str:
    """Resolve the caller's user id from the bearer token, raising 401 if absent."""
    return verify_token(token)
