from __future__ import annotations

import logging

from pydantic import BaseModel

from .errors import DislikeError
from .identity import IdentityResolver
from .models import Dislike, Tuit, User
from .queries import DislikeQueries
from .reconcile import reconcile_dislike_counts
from .settings import DislikeSettings
from .storage_sqlite import SQLiteDislikeDB
from .store import DislikeStore, TuitStore, UserStore
from .toggle import ToggleEngine, TuitLocks

logger = logging.getLogger(__name__)


class ToggleResult(BaseModel):
    applied: bool
    disliked: bool | None = None
    dislikes: int | None = None
    error: str | None = None


class DislikeService:
    """Boundary operations for callers such as an HTTP layer.

    User references are resolved once here. Operations taking a user
    reference raise Unauthenticated, before touching any store, when the
    self alias is used without `current_user`.
    """

    def __init__(
        self,
        *,
        dislikes: DislikeStore,
        tuits: TuitStore,
        users: UserStore,
        resolver: IdentityResolver | None = None,
        locks: TuitLocks | None = None,
    ):
        self._dislikes = dislikes
        self._tuits = tuits
        self.locks = locks
        self.resolver = resolver or IdentityResolver()
        self.engine = ToggleEngine(dislikes, tuits, locks=locks)
        self.queries = DislikeQueries(dislikes, tuits, users)

    def list_users_who_disliked(self, tuit_id: str) -> list[User]:
        return self.queries.dislikers_of(tuit_id)

    def list_tuits_disliked_by(self, user_ref: str, *, current_user: str | None = None) -> list[Tuit]:
        user_id = self.resolver.resolve(user_ref, current_user)
        return self.queries.disliked_tuits_of(user_id)

    def toggle_dislike(
        self, user_ref: str, tuit_id: str, *, current_user: str | None = None
    ) -> ToggleResult:
        """Toggle and report "applied" or "failed".

        Store failures become ToggleResult(applied=False); a failed toggle
        can be retried since edge presence is re-read on every call.
        """
        user_id = self.resolver.resolve(user_ref, current_user)
        try:
            outcome = self.engine.toggle(user_id, tuit_id)
        except DislikeError as e:
            logger.warning(f"Toggle of tuit {tuit_id} by {user_id} failed: {e.message}")
            return ToggleResult(applied=False, error=e.message)
        return ToggleResult(applied=True, disliked=outcome.disliked, dislikes=outcome.dislikes)

    def check_dislike_status(
        self, user_ref: str, tuit_id: str, *, current_user: str | None = None
    ) -> Dislike | None:
        user_id = self.resolver.resolve(user_ref, current_user)
        return self.queries.find_dislike(user_id, tuit_id)

    def reconcile_counts(self) -> dict[str, tuple[int, int]]:
        return reconcile_dislike_counts(self._dislikes, self._tuits, locks=self.locks)


def build_service(settings: DislikeSettings) -> DislikeService:
    db = SQLiteDislikeDB(path=settings.db_path, timeout=settings.sqlite_timeout)
    db.init()
    return DislikeService(
        dislikes=db,
        tuits=db,
        users=db,
        resolver=IdentityResolver(self_alias=settings.self_alias),
        locks=TuitLocks() if settings.serialize_toggles else None,
    )
