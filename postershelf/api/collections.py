"""Collection API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from postershelf.api.dependencies import get_collection_service, get_current_identity
from postershelf.models.collection import Collection
from postershelf.schemas.collection import (
    CollectionCreate,
    CollectionListResponse,
    CollectionResponse,
    CollectionUpdate,
    ImageAttach,
)
from postershelf.services.authorization import ensure_access, scope_to_owner
from postershelf.services.collections import CollectionPatch, CollectionService
from postershelf.services.filters import UNSET, CollectionFilter
from postershelf.services.identity import Identity

router = APIRouter(prefix="/api/v1/collections", tags=["collections"])


def get_user_collection(
    collections: CollectionService, collection_id: int, identity: Identity
) -> Collection:
    """Load a collection and check the caller owns it."""
    collection = collections.collection_by_id(collection_id)
    return ensure_access(identity, collection)


@router.post("", response_model=CollectionResponse, status_code=status.HTTP_201_CREATED)
def create_collection(
    collection_data: CollectionCreate,
    identity: Annotated[Identity, Depends(get_current_identity)],
    collections: Annotated[CollectionService, Depends(get_collection_service)],
):
    """Create a new collection owned by the current user."""
    collection = collections.create_collection(
        author_id=identity.user_id,
        name=collection_data.name,
        description=collection_data.description,
        poster=collection_data.poster,
    )
    return CollectionResponse.model_validate(collection)


@router.get("", response_model=CollectionListResponse)
def list_collections(
    identity: Annotated[Identity, Depends(get_current_identity)],
    collections: Annotated[CollectionService, Depends(get_collection_service)],
    id: Annotated[int | None, Query()] = None,
    name: Annotated[str | None, Query()] = None,
    author: Annotated[int | None, Query()] = None,
    limit: Annotated[int, Query(ge=0)] = 0,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """List the current user's collections."""
    filter_ = CollectionFilter(
        id=UNSET if id is None else id,
        name=UNSET if name is None else name,
        author_id=UNSET if author is None else author,
        limit=limit,
        offset=offset,
    )
    scoped = scope_to_owner(identity, filter_)
    results = collections.collections(scoped) if scoped is not None else []

    return CollectionListResponse(
        collections=[CollectionResponse.model_validate(c) for c in results],
        limit=limit,
        offset=offset,
    )


@router.get("/{collection_id}", response_model=CollectionResponse)
def get_collection(
    collection_id: int,
    identity: Annotated[Identity, Depends(get_current_identity)],
    collections: Annotated[CollectionService, Depends(get_collection_service)],
):
    """Get a specific collection with its images."""
    collection = get_user_collection(collections, collection_id, identity)
    return CollectionResponse.model_validate(collection)


@router.api_route("/{collection_id}", methods=["PUT", "PATCH"], response_model=CollectionResponse)
def update_collection(
    collection_id: int,
    collection_data: CollectionUpdate,
    identity: Annotated[Identity, Depends(get_current_identity)],
    collections: Annotated[CollectionService, Depends(get_collection_service)],
):
    """Update a collection's name, description or poster."""
    collection = get_user_collection(collections, collection_id, identity)
    patch = CollectionPatch(**collection_data.model_dump(exclude_unset=True))
    collection = collections.update_collection(collection, patch)
    return CollectionResponse.model_validate(collection)


@router.delete("/{collection_id}", response_model=CollectionResponse)
def delete_collection(
    collection_id: int,
    identity: Annotated[Identity, Depends(get_current_identity)],
    collections: Annotated[CollectionService, Depends(get_collection_service)],
):
    """Delete a collection and its images, returning what was deleted."""
    collection = get_user_collection(collections, collection_id, identity)
    deleted = CollectionResponse.model_validate(collection)
    collections.delete_collection(collection_id)
    return deleted


@router.post("/{collection_id}/images", response_model=CollectionResponse)
def attach_image(
    collection_id: int,
    image_data: ImageAttach,
    identity: Annotated[Identity, Depends(get_current_identity)],
    collections: Annotated[CollectionService, Depends(get_collection_service)],
):
    """Save an image to a collection."""
    get_user_collection(collections, collection_id, identity)
    collection = collections.attach_image(collection_id, image_data.img_path)
    return CollectionResponse.model_validate(collection)


@router.delete("/{collection_id}/images/{img_path:path}", response_model=CollectionResponse)
def detach_image(
    collection_id: int,
    img_path: str,
    identity: Annotated[Identity, Depends(get_current_identity)],
    collections: Annotated[CollectionService, Depends(get_collection_service)],
):
    """Remove an image from a collection."""
    get_user_collection(collections, collection_id, identity)
    collection = collections.detach_image(collection_id, img_path)
    return CollectionResponse.model_validate(collection)
