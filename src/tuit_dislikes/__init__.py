"""Dislike relationships between users and tuits.

A toggle creates or removes a user's dislike of a tuit and rewrites the
tuit's cached dislike counter from the authoritative edge count.
"""

__version__ = "0.1.0"

from .errors import (
    DislikeError,
    DislikeNotFound,
    DuplicateDislike,
    NotFound,
    StoreError,
    TuitNotFound,
    Unauthenticated,
)
from .identity import IdentityResolver
from .models import Dislike, Tuit, TuitStats, User
from .queries import DislikeQueries
from .service import DislikeService, ToggleResult, build_service
from .storage_sqlite import SQLiteDislikeDB
from .toggle import ToggleEngine, ToggleOutcome, TuitLocks

__all__ = [
    "DislikeError",
    "DislikeNotFound",
    "DuplicateDislike",
    "NotFound",
    "StoreError",
    "TuitNotFound",
    "Unauthenticated",
    "IdentityResolver",
    "Dislike",
    "Tuit",
    "TuitStats",
    "User",
    "DislikeQueries",
    "DislikeService",
    "ToggleResult",
    "build_service",
    "SQLiteDislikeDB",
    "ToggleEngine",
    "ToggleOutcome",
    "TuitLocks",
]
