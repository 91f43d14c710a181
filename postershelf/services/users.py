"""User persistence."""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from postershelf.database import transaction
from postershelf.errors import NotFoundError, UnauthorizedError
from postershelf.models.user import User
from postershelf.services.auth import get_password_hash, verify_password
from postershelf.services.filters import UNSET, UserFilter, present_fields, translate_filter

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "this email is already in use"

USER_COLUMNS = {
    "id": User.id,
    "email": User.email,
}


@dataclass(frozen=True)
class UserPatch:
    """Fields to change on a user; UNSET fields are left alone."""

    email: Any = UNSET
    password: Any = UNSET


class UserService:
    """Service for user accounts."""

    def __init__(self, db: Session):
        self.db = db

    def create_user(self, email: str, password: str) -> User:
        """Create a new user with a hashed password."""
        user = User(email=email, password_hash=get_password_hash(password))
        with transaction(self.db, DUPLICATE_EMAIL):
            self.db.add(user)
            self.db.flush()
        self.db.refresh(user)
        logger.info(f"Created user {user.id}")
        return user

    def user_by_id(self, user_id: int) -> User:
        with transaction(self.db):
            return self._find_one(UserFilter(id=user_id))

    def user_by_email(self, email: str) -> User:
        with transaction(self.db):
            return self._find_one(UserFilter(email=email))

    def users(self, filter_: UserFilter) -> list[User]:
        """List users matching a filter, ordered by id."""
        with transaction(self.db):
            return self._find(filter_)

    def authenticate(self, email: str, password: str) -> User:
        """Return the user for valid credentials.

        Unknown email and wrong password fail the same way.
        """
        try:
            user = self.user_by_email(email)
        except NotFoundError:
            raise UnauthorizedError("incorrect email or password") from None
        if not verify_password(password, user.password_hash):
            raise UnauthorizedError("incorrect email or password")
        return user

    def update_user(self, user: User, patch: UserPatch) -> User:
        """Apply the set fields of a patch and refresh updated_at."""
        with transaction(self.db, DUPLICATE_EMAIL):
            for name, value in present_fields(patch):
                if name == "password":
                    user.password_hash = get_password_hash(value)
                else:
                    setattr(user, name, value)
            user.updated_at = func.now()
            self.db.flush()
        self.db.refresh(user)
        return user

    def delete_user(self, user_id: int) -> None:
        with transaction(self.db):
            user = self._find_one(UserFilter(id=user_id))
            self.db.delete(user)
        logger.info(f"Deleted user {user_id}")

    def _find(self, filter_: UserFilter) -> list[User]:
        fragment = translate_filter(filter_, USER_COLUMNS)
        return fragment.apply(self.db.query(User), User.id).all()

    def _find_one(self, filter_: UserFilter) -> User:
        users = self._find(filter_)
        if not users:
            raise NotFoundError("user not found")
        return users[0]
