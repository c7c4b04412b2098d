"""
Comment model. Owned by exactly one post, append-only.
"""
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Index
from sqlalchemy.orm import relationship
from ..database import Base
from ._ids import new_id, utcnow


class Comment(Base):
    __tablename__ = "comments"

    # seq preserves insertion order
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(32), unique=True, nullable=False, default=new_id)
    post_id = Column(String(32), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    username = Column(String(50), nullable=False)  # captured at write time
    text = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_comments_post", "post_id", "seq"),
    )

    post = relationship("Post", back_populates="comments")
