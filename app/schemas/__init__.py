from .auth import UserCreate, UserLogin, UserResponse, AuthResponse
from .posts import CommentCreate

__all__ = [
    "UserCreate", "UserLogin", "UserResponse", "AuthResponse",
    "CommentCreate",
]
