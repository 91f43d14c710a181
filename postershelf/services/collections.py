"""Collection persistence, including image membership."""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from postershelf.database import transaction
from postershelf.errors import (
    AlreadyAttachedError,
    DuplicateKeyError,
    NotAttachedError,
    NotFoundError,
)
from postershelf.models.collection import Collection, CollectionImage
from postershelf.services.filters import (
    UNSET,
    CollectionFilter,
    present_fields,
    translate_filter,
)

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "you already have a collection with this name"

COLLECTION_COLUMNS = {
    "id": Collection.id,
    "name": Collection.name,
    "author_id": Collection.author_id,
}


@dataclass(frozen=True)
class CollectionPatch:
    """Fields to change on a collection; UNSET fields are left alone."""

    name: Any = UNSET
    description: Any = UNSET
    poster: Any = UNSET


class CollectionService:
    """Service for collections and the images attached to them.

    Every public method is one transaction. Image changes and the parent's
    updated_at bump commit together or not at all.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_collection(
        self,
        author_id: int,
        name: str,
        description: str | None = None,
        poster: str | None = None,
    ) -> Collection:
        collection = Collection(
            author_id=author_id,
            name=name,
            description=description,
            poster=poster,
        )
        with transaction(self.db, DUPLICATE_NAME):
            self.db.add(collection)
            self.db.flush()
        self.db.refresh(collection)
        logger.info(f"User {author_id} created collection {collection.id}")
        return collection

    def collection_by_id(self, collection_id: int) -> Collection:
        with transaction(self.db):
            return self._find_one(CollectionFilter(id=collection_id))

    def collections(self, filter_: CollectionFilter) -> list[Collection]:
        """List collections matching a filter, ordered by id."""
        with transaction(self.db):
            return self._find(filter_)

    def update_collection(self, collection: Collection, patch: CollectionPatch) -> Collection:
        """Apply the set fields of a patch and refresh updated_at."""
        with transaction(self.db, DUPLICATE_NAME):
            for name, value in present_fields(patch):
                setattr(collection, name, value)
            self._touch(collection)
            self.db.flush()
        self.db.refresh(collection)
        return collection

    def delete_collection(self, collection_id: int) -> None:
        """Delete a collection together with its images."""
        with transaction(self.db):
            collection = self._find_one(CollectionFilter(id=collection_id))
            self.db.delete(collection)
        logger.info(f"Deleted collection {collection_id}")

    def attach_image(self, collection_id: int, img_path: str) -> Collection:
        """Add an image to a collection.

        Raises AlreadyAttachedError if the path is already a member.
        """
        try:
            with transaction(self.db):
                collection = self._find_one(CollectionFilter(id=collection_id))
                if img_path in collection.image_paths:
                    raise AlreadyAttachedError()
                collection.images.append(CollectionImage(img_path=img_path))
                self._touch(collection)
                self.db.flush()
        except DuplicateKeyError as e:
            # Concurrent attach of the same path won the unique constraint
            raise AlreadyAttachedError() from e
        self.db.refresh(collection)
        logger.debug(f"Attached {img_path!r} to collection {collection_id}")
        return collection

    def detach_image(self, collection_id: int, img_path: str) -> Collection:
        """Remove an image from a collection.

        Raises NotAttachedError if the path is not a member.
        """
        with transaction(self.db):
            collection = self._find_one(CollectionFilter(id=collection_id))
            image = next((i for i in collection.images if i.img_path == img_path), None)
            if image is None:
                raise NotAttachedError()
            collection.images.remove(image)
            self._touch(collection)
            self.db.flush()
        self.db.refresh(collection)
        logger.debug(f"Detached {img_path!r} from collection {collection_id}")
        return collection

    def _touch(self, collection: Collection) -> None:
        # Store clock, not the caller's
        collection.updated_at = func.now()

    def _find(self, filter_: CollectionFilter) -> list[Collection]:
        fragment = translate_filter(filter_, COLLECTION_COLUMNS)
        return fragment.apply(self.db.query(Collection), Collection.id).all()

    def _find_one(self, filter_: CollectionFilter) -> Collection:
        collections = self._find(filter_)
        if not collections:
            raise NotFoundError("collection not found")
        return collections[0]
