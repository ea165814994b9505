"""Exceptions raised by the dislike service.

Every failure a caller is expected to handle derives from DislikeError.
"""

from __future__ import annotations

from typing import Any


class DislikeError(Exception):
    """Base exception for all dislike service errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize exception with message and optional details.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details


class Unauthenticated(DislikeError):
    """The self alias was used but no caller identity is available."""

    pass


class NotFound(DislikeError):
    """A referenced tuit or dislike does not exist."""

    pass


class TuitNotFound(NotFound):
    """Raised when a tuit id does not resolve."""

    def __init__(self, tuit_id: str):
        super().__init__(f"Tuit not found: {tuit_id}", details={"tuit_id": tuit_id})
        self.tuit_id = tuit_id


class DislikeNotFound(NotFound):
    """Raised when deleting a dislike that does not exist.

    Attributes:
        tuit_id: Tuit of the missing dislike
        user_id: User of the missing dislike
    """

    def __init__(self, tuit_id: str, user_id: str):
        super().__init__(
            f"User {user_id} does not dislike tuit {tuit_id}",
            details={"tuit_id": tuit_id, "user_id": user_id},
        )
        self.tuit_id = tuit_id
        self.user_id = user_id


class DuplicateDislike(DislikeError):
    """Raised when creating a dislike that already exists (a lost race)."""

    def __init__(self, tuit_id: str, user_id: str):
        super().__init__(
            f"User {user_id} already dislikes tuit {tuit_id}",
            details={"tuit_id": tuit_id, "user_id": user_id},
        )
        self.tuit_id = tuit_id
        self.user_id = user_id


class StoreError(DislikeError):
    """Raised when the underlying storage fails (locked, unreachable, corrupt)."""

    pass
