"""Collection and collection image models."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import relationship

from postershelf.database import Base
from postershelf.models.mixins import TimestampMixin


class Collection(Base, TimestampMixin):
    """A named, user-owned set of poster images."""

    __tablename__ = "collections"
    __table_args__ = (UniqueConstraint("author_id", "name", name="collection_name_user_key"),)

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    description = Column(String, nullable=True)
    poster = Column(String, nullable=True)

    # Relationships
    author = relationship("User", back_populates="collections")
    images = relationship(
        "CollectionImage",
        back_populates="collection",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CollectionImage.id",
        lazy="selectin",
    )

    @property
    def image_paths(self) -> list[str]:
        """Attached image paths in insertion order."""
        return [image.img_path for image in self.images]


class CollectionImage(Base):
    """Membership of an image path in a collection."""

    __tablename__ = "collections_images"
    __table_args__ = (
        UniqueConstraint("collection_id", "img_path", name="collections_images_path_key"),
    )

    id = Column(Integer, primary_key=True)
    img_path = Column(String, nullable=False)
    collection_id = Column(
        Integer, ForeignKey("collections.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    collection = relationship("Collection", back_populates="images")
