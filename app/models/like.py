"""
PostLike model: one row per (post, user) pair in a post's like set.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from ..database import Base
from ._ids import new_id, utcnow


class PostLike(Base):
    __tablename__ = "post_likes"

    id = Column(String(32), primary_key=True, default=new_id)
    post_id = Column(String(32), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        # A user can like a post only once
        UniqueConstraint("post_id", "user_id", name="uq_post_like"),
        Index("idx_post_like_post", "post_id", "created_at"),
    )

    post = relationship("Post", back_populates="likes")
