"""Toggle a user's dislike of a tuit and keep the tuit's counter in sync.

Per (tuit, user) pair there are two states: no dislike, and disliked. A
toggle reads the current edge and the authoritative edge count, flips the
edge, then writes count +/- 1 to the tuit's cached counter. Recomputing from
the authoritative count on every toggle repairs earlier drift in the cached
value.

The read-decide-write-write sequence runs under a per-tuit lock, and a failed
counter write undoes the edge change, so a failed toggle leaves no partial
state behind.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager, nullcontext
from dataclasses import dataclass
from threading import Lock

from .errors import DislikeError
from .models import Dislike
from .store import DislikeStore, TuitStore

logger = logging.getLogger(__name__)


class TuitLocks:
    """One lock per tuit id, dropped once nobody holds or waits on it."""

    def __init__(self):
        self._guard = Lock()
        self._locks: dict[str, tuple[Lock, list[int]]] = {}

    @contextmanager
    def hold(self, tuit_id: str) -> Iterator[None]:
        with self._guard:
            lock, users = self._locks.setdefault(tuit_id, (Lock(), [0]))
            users[0] += 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                users[0] -= 1
                if users[0] == 0:
                    del self._locks[tuit_id]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


@dataclass(frozen=True)
class ToggleOutcome:
    disliked: bool  # state after the toggle
    dislikes: int  # counter value written to the tuit


class ToggleEngine:
    def __init__(
        self,
        dislikes: DislikeStore,
        tuits: TuitStore,
        *,
        locks: TuitLocks | None = None,
    ):
        """
        Args:
            dislikes: Relationship store
            tuits: Tuit lookups and counter updater
            locks: Per-tuit critical sections. None disables locking and
                lets concurrent toggles on one tuit race; the store still
                rejects duplicate creates and missing deletes.
        """
        self._dislikes = dislikes
        self._tuits = tuits
        self._locks = locks

    def _critical_section(self, tuit_id: str) -> AbstractContextManager[None]:
        if self._locks is None:
            return nullcontext()
        return self._locks.hold(tuit_id)

    def toggle(self, user_id: str, tuit_id: str) -> ToggleOutcome:
        """Flip `user_id`'s dislike of `tuit_id`.

        Raises:
            TuitNotFound: The tuit does not exist. Nothing is written.
            DuplicateDislike: A concurrent toggle created the edge first.
            DislikeNotFound: A concurrent toggle deleted the edge first.
            StoreError: The store failed.
        """
        with self._critical_section(tuit_id):
            self._tuits.find_tuit_by_id(tuit_id)
            existing = self._dislikes.find_dislike(tuit_id, user_id)
            count = self._dislikes.count_dislikes(tuit_id)

            if existing is None:
                self._dislikes.create_dislike(tuit_id, user_id)
                outcome = ToggleOutcome(disliked=True, dislikes=count + 1)
            else:
                self._dislikes.delete_dislike(tuit_id, user_id)
                # authoritative count can't be negative, clamp anyway
                outcome = ToggleOutcome(disliked=False, dislikes=max(count - 1, 0))

            try:
                self._tuits.update_dislikes(tuit_id, outcome.dislikes)
            except DislikeError:
                self._undo(user_id, tuit_id, existing)
                raise

        logger.info(
            f"User {user_id} {'disliked' if outcome.disliked else 'un-disliked'} "
            f"tuit {tuit_id} (dislikes={outcome.dislikes})"
        )
        return outcome

    def _undo(self, user_id: str, tuit_id: str, existing: Dislike | None) -> None:
        """Put the edge back the way it was before this toggle."""
        logger.warning(f"Counter update failed for tuit {tuit_id}, reverting dislike by {user_id}")
        try:
            if existing is None:
                self._dislikes.delete_dislike(tuit_id, user_id)
            else:
                self._dislikes.restore_dislike(existing)
        except DislikeError as e:
            logger.error(f"Failed to revert dislike by {user_id} on tuit {tuit_id}: {e}")
