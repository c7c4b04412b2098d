"""
Post store: creating, listing, liking and commenting on posts.

Likes and comments are separate rows keyed by post, so a like toggle or a
comment append is a single-row write that never rewrites the post itself.
"""
from typing import List, Optional, Tuple

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..errors import InternalError, NotFound, ValidationError
from ..logging_config import feed_logger
from ..models.comment import Comment
from ..models.like import PostLike
from ..models.post import Post
from ..models.user import User

MAX_TEXT_LENGTH = 500


def _normalize_text(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    text = text.strip()
    return text or None


def _get_author(db: Session, user_id: str) -> User:
    author = db.get(User, user_id)
    if not author:
        raise NotFound("User not found")
    return author


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise InternalError(f"Could not {action}") from e


def create_post(
    db: Session,
    author_id: str,
    text: Optional[str] = None,
    image_url: Optional[str] = None,
) -> Post:
    """Create a post. At least one of text or image_url is required."""
    text = _normalize_text(text)
    if text is None and not image_url:
        raise ValidationError("Post must have either text or image")
    if text is not None and len(text) > MAX_TEXT_LENGTH:
        raise ValidationError(
            "Text must be less than 500 characters",
            {"errors": [{"field": "text", "message": "Text must be less than 500 characters"}]},
        )

    author = _get_author(db, author_id)
    post = Post(
        author_id=author.id,
        username=author.username,
        text=text,
        image_url=image_url or None,
    )
    db.add(post)
    _commit(db, "create post")
    db.refresh(post)

    feed_logger.info("Post created", post_id=post.id, author_id=author.id, has_image=bool(image_url))
    return post


def list_posts(db: Session, page: int = 1, page_size: int = 10) -> Tuple[List[Post], int]:
    """One page of the feed, newest first, plus the total number of posts."""
    if page < 1:
        raise ValidationError("Page must be at least 1")
    if page_size < 1:
        raise ValidationError("Limit must be at least 1")

    total = db.query(Post).count()
    posts = (
        db.query(Post)
        .options(selectinload(Post.likes), selectinload(Post.comments))
        .order_by(Post.created_at.desc(), Post.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return posts, total


def get_post(db: Session, post_id: str) -> Post:
    post = db.get(Post, post_id)
    if not post:
        raise NotFound("Post not found")
    return post


def toggle_like(db: Session, post_id: str, user_id: str) -> Tuple[Post, bool]:
    """
    Flip the caller's membership in the post's like set.

    Returns the refreshed post and whether the caller now likes it.
    """
    get_post(db, post_id)
    _get_author(db, user_id)

    result = db.execute(
        delete(PostLike)
        .where(PostLike.post_id == post_id, PostLike.user_id == user_id)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount:
        liked = False
        _commit(db, "unlike post")
    else:
        db.add(PostLike(post_id=post_id, user_id=user_id))
        try:
            db.commit()
            liked = True
        except IntegrityError:
            # post and user exist, so only uq_post_like can fail: a concurrent
            # request from the same user already inserted the like
            db.rollback()
            liked = True
        except SQLAlchemyError as e:
            db.rollback()
            raise InternalError("Could not like post") from e

    # commit expired the session, so the post reloads its likes on access
    post = get_post(db, post_id)
    feed_logger.info("Like toggled", post_id=post_id, user_id=user_id, liked=liked)
    return post, liked


def add_comment(db: Session, post_id: str, author_id: str, text: Optional[str]) -> Post:
    """Append a comment to a post and return the updated post."""
    text = _normalize_text(text)
    if text is None:
        raise ValidationError("Comment text is required")

    post = get_post(db, post_id)
    author = _get_author(db, author_id)

    db.add(Comment(
        post_id=post.id,
        user_id=author.id,
        username=author.username,
        text=text,
    ))
    _commit(db, "add comment")

    feed_logger.info("Comment added", post_id=post.id, author_id=author.id)
    return post
