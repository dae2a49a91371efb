"""User model."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin, new_uuid


class User(Base, TimestampMixin):
    """User model for authentication and post ownership."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(30), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Relationships
    posts = relationship("Post", back_populates="author", cascade="all, delete-orphan")
