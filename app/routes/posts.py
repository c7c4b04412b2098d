"""
Feed routes: listing, creating, liking and commenting on posts.
"""
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from ..auth import get_current_user_id
from ..config import get_settings
from ..database import get_db
from ..models.comment import Comment
from ..models.post import Post
from ..responses import pagination
from ..schemas.posts import CommentCreate
from ..services import posts as feed
from ..storage import delete_image, has_file, save_image

settings = get_settings()

router = APIRouter(prefix="/posts", tags=["posts"])


def _isoformat(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def comment_to_dict(comment: Comment) -> dict:
    return {
        "id": comment.id,
        "userId": comment.user_id,
        "username": comment.username,
        "text": comment.text,
        "createdAt": _isoformat(comment.created_at),
    }


def post_to_dict(post: Post) -> dict:
    """Convert a Post model to a dictionary response."""
    likes = [like.user_id for like in post.likes]
    return {
        "id": post.id,
        "authorId": post.author_id,
        "username": post.username,
        "text": post.text,
        "imageUrl": post.image_url,
        "likes": likes,
        "likeCount": len(likes),
        "comments": [comment_to_dict(c) for c in post.comments],
        "createdAt": _isoformat(post.created_at),
    }


@router.get("")
def get_posts(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    """Get one page of the feed, newest first."""
    page_size = min(limit or settings.default_page_size, settings.max_page_size)
    posts, total = feed.list_posts(db, page=page, page_size=page_size)
    return {
        "posts": [post_to_dict(p) for p in posts],
        "pagination": pagination(page, page_size, total),
    }


@router.get("/{post_id}")
def get_post(post_id: str, db: Session = Depends(get_db)):
    """Get a single post by ID."""
    return post_to_dict(feed.get_post(db, post_id))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_post(
    text: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Create a post from multipart form data with text, an image, or both."""
    image_url = save_image(image, user_id) if has_file(image) else None
    try:
        post = feed.create_post(db, user_id, text=text, image_url=image_url)
    except Exception:
        if image_url:
            delete_image(image_url)
        raise
    return {
        "message": "Post created successfully",
        "post": post_to_dict(post),
    }


@router.post("/{post_id}/like")
def like_post(
    post_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Like the post, or remove the like if the caller already liked it."""
    post, liked = feed.toggle_like(db, post_id, user_id)
    return {
        "message": "Post liked" if liked else "Post unliked",
        "liked": liked,
        "post": post_to_dict(post),
    }


@router.post("/{post_id}/comment")
def add_comment(
    post_id: str,
    comment: CommentCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Add a comment to a post."""
    post = feed.add_comment(db, post_id, user_id, comment.text)
    return {
        "message": "Comment added",
        "post": post_to_dict(post),
    }
