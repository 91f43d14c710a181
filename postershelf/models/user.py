"""User model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from postershelf.database import Base
from postershelf.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and collection ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Relationships
    collections = relationship(
        "Collection",
        back_populates="author",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
