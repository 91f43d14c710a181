"""FastAPI dependencies for authentication, identity and services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from postershelf.config import get_settings
from postershelf.database import get_db
from postershelf.errors import NotFoundError, UnauthorizedError
from postershelf.models.user import User
from postershelf.services.auth import CredentialCodec
from postershelf.services.authorization import require_identity
from postershelf.services.collections import CollectionService
from postershelf.services.identity import ANONYMOUS, Identity
from postershelf.services.users import UserService

security = HTTPBearer(auto_error=False)


@lru_cache
def get_credential_codec() -> CredentialCodec:
    """Get the process-wide credential codec."""
    return CredentialCodec.from_settings(get_settings())


def get_user_service(db: Annotated[Session, Depends(get_db)]) -> UserService:
    return UserService(db)


def get_collection_service(db: Annotated[Session, Depends(get_db)]) -> CollectionService:
    return CollectionService(db)


def get_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    codec: Annotated[CredentialCodec, Depends(get_credential_codec)],
) -> Identity:
    """Identity for the request: verified token owner, or ANONYMOUS without a token."""
    if credentials is None:
        return ANONYMOUS
    return codec.verify(credentials.credentials)


def get_current_user(
    identity: Annotated[Identity, Depends(get_identity)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> User:
    """Get the current authenticated user from the bearer token."""
    require_identity(identity)
    try:
        return users.user_by_id(identity.user_id)
    except NotFoundError:
        raise UnauthorizedError("user not found") from None


def get_current_identity(
    identity: Annotated[Identity, Depends(get_identity)],
    user: Annotated[User, Depends(get_current_user)],
) -> Identity:
    """Identity of an authenticated caller whose account still exists."""
    return identity
