"""Authentication service for JWT credentials and password handling."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from jose.utils import base64url_decode, base64url_encode
from passlib.context import CryptContext

from postershelf.config import HMAC_ALGORITHMS, Settings
from postershelf.errors import UnauthorizedError
from postershelf.services.identity import Identity

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


class CredentialCodec:
    """Issues and verifies signed, stateless identity tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expiration_minutes: int = 10080):
        if algorithm not in HMAC_ALGORITHMS:
            raise ValueError(f"Unsupported signing algorithm: {algorithm}")
        if not secret:
            raise ValueError("Signing secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.expiration = timedelta(minutes=expiration_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialCodec":
        return cls(
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expiration_minutes=settings.jwt_expiration_minutes,
        )

    def issue(self, user_id: int, email: str) -> str:
        """Create a signed token for a user."""
        now = datetime.now(UTC)
        to_encode = {
            "sub": str(user_id),
            "email": email,
            "iat": now,
            "exp": now + self.expiration,
        }
        return jwt.encode(to_encode, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        """Verify a token and return the identity it carries.

        Fails closed: any problem with the header, signature, expiry or
        claims raises UnauthorizedError.
        """
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            logger.info(f"Rejected malformed token: {e}")
            raise UnauthorizedError("invalid authentication credentials") from e

        if header.get("alg") != self.algorithm:
            logger.warning(f"Rejected token signed with unexpected algorithm {header.get('alg')!r}")
            raise UnauthorizedError("invalid authentication credentials")

        if not _is_canonical_segment(token.rsplit(".", 1)[-1]):
            logger.info("Rejected token with a non-canonical signature encoding")
            raise UnauthorizedError("invalid authentication credentials")

        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError as e:
            logger.info(f"Rejected token: {e}")
            raise UnauthorizedError("invalid authentication credentials") from e

        subject = payload.get("sub")
        email = payload.get("email")
        if not isinstance(subject, str) or not subject.isdigit() or not isinstance(email, str):
            raise UnauthorizedError("invalid authentication credentials")

        return Identity(user_id=int(subject), email=email)


def _is_canonical_segment(segment: str) -> bool:
    """True when the segment is the unpadded base64url encoding of its own bytes.

    The decoder ignores trailing pad bits and stray characters, so distinct
    segments can decode to the same signature.
    """
    try:
        raw = base64url_decode(segment.encode("ascii"))
    except ValueError:
        return False
    return base64url_encode(raw).decode("ascii") == segment
