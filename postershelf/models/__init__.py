"""SQLAlchemy models."""

from postershelf.models.collection import Collection, CollectionImage
from postershelf.models.user import User

__all__ = [
    "User",
    "Collection",
    "CollectionImage",
]
