"""
Credential store: signup, login and user lookup.
"""
from typing import Dict, List, Optional, Tuple

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..auth import get_password_hash, issue_token, verify_password
from ..errors import AuthError, ConflictError, InternalError, NotFound, ValidationError
from ..logging_config import auth_logger
from ..models.user import User

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


def _validate_signup(username: str, email: str, password: str, confirm_password: str) -> List[Dict[str, str]]:
    errors = []
    if len(username) < MIN_USERNAME_LENGTH:
        errors.append({"field": "username", "message": "Username must be at least 3 characters"})
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        errors.append({"field": "email", "message": "Invalid email"})
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append({"field": "password", "message": "Password must be at least 6 characters"})
    if not confirm_password:
        errors.append({"field": "confirmPassword", "message": "Confirm password is required"})
    elif password != confirm_password:
        errors.append({"field": "confirmPassword", "message": "Passwords do not match"})
    return errors


def register(
    db: Session,
    username: str,
    email: str,
    password: str,
    confirm_password: str,
) -> Tuple[User, str]:
    """Create a user account and issue its first token."""
    username = (username or "").strip()
    email = (email or "").strip().lower()
    password = password or ""

    errors = _validate_signup(username, email, password, confirm_password or "")
    if errors:
        raise ValidationError(errors[0]["message"], {"errors": errors})

    existing = db.query(User).filter(or_(User.email == email, User.username == username)).first()
    if existing:
        raise ConflictError("User already exists")

    user = User(
        username=username,
        email=email,
        hashed_password=get_password_hash(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same username or email
        db.rollback()
        raise ConflictError("User already exists")
    except SQLAlchemyError as e:
        db.rollback()
        raise InternalError("Could not create user") from e
    db.refresh(user)

    auth_logger.info("User registered", user_id=user.id, username=user.username)
    return user, issue_token(user.id)


def authenticate(db: Session, email: str, password: str) -> Tuple[User, str]:
    """Check credentials. Unknown email and wrong password fail the same way."""
    email = (email or "").strip().lower()
    if not email or not password:
        raise ValidationError("Email and password are required")
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        raise ValidationError("Invalid email", {"errors": [{"field": "email", "message": "Invalid email"}]})

    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.hashed_password):
        auth_logger.warning("Failed login attempt")
        raise AuthError("Invalid credentials")

    auth_logger.info("User logged in", user_id=user.id)
    return user, issue_token(user.id)


def get_user(db: Session, user_id: str) -> User:
    user: Optional[User] = db.get(User, user_id)
    if not user:
        raise NotFound("User not found")
    return user
