"""Collection schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CollectionCreate(BaseModel):
    """Create a new collection."""

    name: str = Field(..., min_length=3, max_length=48)
    description: str | None = Field(None, max_length=96)
    poster: str | None = Field(None, max_length=2048)


class CollectionUpdate(BaseModel):
    """Update a collection; omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=3, max_length=48)
    description: str | None = Field(None, max_length=96)
    poster: str | None = Field(None, max_length=2048)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value: str | None) -> str:
        """A name may be omitted but not cleared."""
        if value is None:
            raise ValueError("name cannot be null")
        return value


class ImageAttach(BaseModel):
    """Attach an image to a collection."""

    img_path: str = Field(..., min_length=1, max_length=2048)


class ImageResponse(BaseModel):
    """An image saved in a collection."""

    model_config = ConfigDict(from_attributes=True)

    img_path: str
    collection_id: int
    created_at: datetime


class CollectionResponse(BaseModel):
    """Collection response, images in the order they were saved."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    author_id: int
    name: str
    description: str | None
    poster: str | None
    images: list[ImageResponse] = []
    created_at: datetime
    updated_at: datetime


class CollectionListResponse(BaseModel):
    """A page of collections."""

    collections: list[CollectionResponse]
    limit: int
    offset: int
