"""Ownership checks for collections."""

import dataclasses
import logging

from postershelf.errors import UnauthorizedError
from postershelf.models.collection import Collection
from postershelf.services.filters import CollectionFilter, is_set
from postershelf.services.identity import Identity

logger = logging.getLogger(__name__)


def can_access(identity: Identity, collection: Collection) -> bool:
    """True iff ``identity`` is concrete and authored ``collection``."""
    return identity.owns(collection.author_id)


def require_identity(identity: Identity) -> Identity:
    """Reject anonymous callers before any data access."""
    if identity.is_anonymous:
        raise UnauthorizedError("authentication required")
    return identity


def ensure_access(identity: Identity, collection: Collection) -> Collection:
    """Return the collection if the identity owns it, else raise UnauthorizedError."""
    require_identity(identity)
    if not can_access(identity, collection):
        logger.info(f"User {identity.user_id} denied access to collection {collection.id}")
        raise UnauthorizedError(
            "you do not have access to this collection", authenticated=True
        )
    return collection


def scope_to_owner(identity: Identity, filter_: CollectionFilter) -> CollectionFilter | None:
    """Constrain a collection filter to the caller's own collections.

    Returns None when the filter asks for another author, in which case
    nothing is visible to the caller.
    """
    require_identity(identity)
    if is_set(filter_.author_id) and filter_.author_id != identity.user_id:
        return None
    return dataclasses.replace(filter_, author_id=identity.user_id)
