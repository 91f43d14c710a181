"""Current user API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from postershelf.api.dependencies import get_current_user, get_user_service
from postershelf.models.user import User
from postershelf.schemas.auth import UserResponse, UserUpdate
from postershelf.services.users import UserPatch, UserService

router = APIRouter(prefix="/api/v1/user", tags=["user"])


@router.get("", response_model=UserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return UserResponse.model_validate(current_user)


@router.api_route("", methods=["PUT", "PATCH"], response_model=UserResponse)
def update_me(
    user_data: UserUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Change the current user's email and/or password."""
    patch = UserPatch(**user_data.model_dump(exclude_unset=True))
    user = users.update_user(current_user, patch)
    return UserResponse.model_validate(user)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_me(
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Delete the current user and all of their collections."""
    users.delete_user(current_user.id)
