"""Per-request identity context."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """The caller a request runs on behalf of.

    Built once after credential verification and passed explicitly to every
    operation that needs it. ``user_id`` is None only for ``ANONYMOUS``.
    """

    user_id: int | None
    email: str | None = None

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None

    def owns(self, author_id: int | None) -> bool:
        """Check whether this identity is the concrete owner ``author_id``."""
        return not self.is_anonymous and author_id is not None and self.user_id == author_id


ANONYMOUS = Identity(user_id=None)
