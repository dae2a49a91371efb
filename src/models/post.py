"""Post model."""

from sqlalchemy import Boolean, Column, ForeignKey, Index, String, Text, false
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin, new_uuid

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
CONTENT_MIN_LENGTH = 10


class Post(Base, TimestampMixin):
    """Blog post; drafts have published=False."""

    __tablename__ = "posts"
    __table_args__ = (Index("ix_posts_published_created_at", "published", "created_at"),)

    id = Column(String(36), primary_key=True, default=new_uuid)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    content = Column(Text, nullable=False)
    published = Column(Boolean, nullable=False, default=False, server_default=false())
    author_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    author = relationship("User", back_populates="posts")
