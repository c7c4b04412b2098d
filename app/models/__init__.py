from .user import User
from .post import Post
from .like import PostLike
from .comment import Comment

__all__ = [
    "User",
    "Post",
    "PostLike",
    "Comment",
]
