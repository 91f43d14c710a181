"""Pydantic schemas for API requests and responses."""

from postershelf.schemas.auth import (
    AuthResponse,
    UserLogin,
    UserResponse,
    UserSignup,
    UserUpdate,
)
from postershelf.schemas.collection import (
    CollectionCreate,
    CollectionListResponse,
    CollectionResponse,
    CollectionUpdate,
    ImageAttach,
    ImageResponse,
)

__all__ = [
    "UserSignup",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "AuthResponse",
    "CollectionCreate",
    "CollectionUpdate",
    "CollectionResponse",
    "CollectionListResponse",
    "ImageAttach",
    "ImageResponse",
]
