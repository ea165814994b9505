from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol

from .models import Dislike, Tuit, User


class DislikeStore(Protocol):
    """Durable set of (tuit, user) dislike edges.

    `create_dislike` raises DuplicateDislike and `delete_dislike` raises
    DislikeNotFound, so a losing concurrent toggle sees a failure instead of
    corrupting the edge set. `restore_dislike` puts a deleted edge back
    unchanged, keeping its position in the listings.
    """

    def find_dislike(self, tuit_id: str, user_id: str) -> Dislike | None: ...

    def count_dislikes(self, tuit_id: str) -> int: ...

    def create_dislike(self, tuit_id: str, user_id: str) -> Dislike: ...

    def delete_dislike(self, tuit_id: str, user_id: str) -> None: ...

    def restore_dislike(self, dislike: Dislike) -> Dislike: ...

    def iter_dislikes_for_tuit(self, tuit_id: str) -> Iterator[Dislike]: ...

    def iter_dislikes_by_user(self, user_id: str) -> Iterator[Dislike]: ...


class TuitStore(Protocol):
    """Tuit lookups plus the dislike counter updater."""

    def find_tuit_by_id(self, tuit_id: str) -> Tuit: ...

    def update_dislikes(self, tuit_id: str, dislikes: int) -> None: ...

    def iter_tuits(self) -> Iterator[Tuit]: ...


class UserStore(Protocol):
    def find_user_by_id(self, user_id: str) -> User | None: ...
