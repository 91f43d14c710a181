"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from postershelf.api.dependencies import get_credential_codec, get_user_service
from postershelf.schemas.auth import AuthResponse, UserLogin, UserResponse, UserSignup
from postershelf.services.auth import CredentialCodec
from postershelf.services.users import UserService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: UserSignup,
    users: Annotated[UserService, Depends(get_user_service)],
    codec: Annotated[CredentialCodec, Depends(get_credential_codec)],
):
    """Register a new user."""
    user = users.create_user(user_data.email, user_data.password)

    return AuthResponse(
        access_token=codec.issue(user.id, user.email),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    users: Annotated[UserService, Depends(get_user_service)],
    codec: Annotated[CredentialCodec, Depends(get_credential_codec)],
):
    """Login with email and password."""
    user = users.authenticate(credentials.email, credentials.password)

    return AuthResponse(
        access_token=codec.issue(user.id, user.email),
        user=UserResponse.model_validate(user),
    )
