from __future__ import annotations

import logging
from contextlib import nullcontext

from .errors import TuitNotFound
from .store import DislikeStore, TuitStore
from .toggle import TuitLocks

logger = logging.getLogger(__name__)


def reconcile_dislike_counts(
    dislikes: DislikeStore,
    tuits: TuitStore,
    *,
    locks: TuitLocks | None = None,
) -> dict[str, tuple[int, int]]:
    """Overwrite drifted `stats.dislikes` with the authoritative edge count.

    Returns {tuit_id: (cached, authoritative)} for every tuit corrected.
    Pass the engine's locks to keep concurrent toggles out while a tuit is
    being recounted. Tuits deleted during the sweep are skipped.
    """
    fixed: dict[str, tuple[int, int]] = {}
    for tuit in tuits.iter_tuits():
        with locks.hold(tuit.id) if locks is not None else nullcontext():
            try:
                cached = tuits.find_tuit_by_id(tuit.id).stats.dislikes
                actual = dislikes.count_dislikes(tuit.id)
                if cached == actual:
                    continue
                tuits.update_dislikes(tuit.id, actual)
            except TuitNotFound:
                logger.debug(f"Skipping tuit {tuit.id}, deleted during reconcile")
                continue
        fixed[tuit.id] = (cached, actual)
        logger.info(f"Reconciled dislikes for tuit {tuit.id}: {cached} -> {actual}")
    return fixed
