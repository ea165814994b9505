from __future__ import annotations

import dataclasses
import logging

from .errors import TuitNotFound
from .models import Dislike, Tuit, User
from .store import DislikeStore, TuitStore, UserStore

logger = logging.getLogger(__name__)


class DislikeQueries:
    """Read-only views over the dislike edges.

    Joins are explicit lookups against the tuit and user stores. References
    that no longer resolve (deleted out of band) are skipped.
    """

    def __init__(self, dislikes: DislikeStore, tuits: TuitStore, users: UserStore):
        self._dislikes = dislikes
        self._tuits = tuits
        self._users = users

    def dislikers_of(self, tuit_id: str) -> list[User]:
        out: list[User] = []
        for dislike in self._dislikes.iter_dislikes_for_tuit(tuit_id):
            user = self._users.find_user_by_id(dislike.disliked_by)
            if user is None:
                logger.debug(f"Skipping dislike of {tuit_id} by missing user {dislike.disliked_by}")
                continue
            out.append(user)
        return out

    def disliked_tuits_of(self, user_id: str) -> list[Tuit]:
        """Tuits disliked by `user_id`, each with its `author` populated."""
        out: list[Tuit] = []
        for dislike in self._dislikes.iter_dislikes_by_user(user_id):
            try:
                tuit = self._tuits.find_tuit_by_id(dislike.tuit)
            except TuitNotFound:
                logger.debug(f"Skipping dislike by {user_id} of missing tuit {dislike.tuit}")
                continue
            author = self._users.find_user_by_id(tuit.posted_by)
            out.append(dataclasses.replace(tuit, author=author))
        return out

    def find_dislike(self, user_id: str, tuit_id: str) -> Dislike | None:
        return self._dislikes.find_dislike(tuit_id, user_id)

    def has_disliked(self, user_id: str, tuit_id: str) -> bool:
        return self.find_dislike(user_id, tuit_id) is not None
