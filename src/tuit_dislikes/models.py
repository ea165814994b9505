from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class User:
    id: str
    username: str
    first_name: str | None = None
    last_name: str | None = None


@dataclass(frozen=True, slots=True)
class TuitStats:
    """Cached counters stored on a tuit.

    Only `dislikes` is maintained by this package.
    """

    replies: int = 0
    retuits: int = 0
    likes: int = 0
    dislikes: int = 0


@dataclass(frozen=True, slots=True)
class Tuit:
    """A tuit as read from the tuit store.

    `author` is only populated by DislikeQueries when it joins the poster.
    """

    id: str
    tuit: str
    posted_by: str
    posted_on: float
    stats: TuitStats = field(default_factory=TuitStats)
    author: User | None = None


@dataclass(frozen=True, slots=True)
class Dislike:
    """A user dislikes a tuit. At most one exists per (tuit, disliked_by).

    `seq` is the store-assigned insertion position; None until stored.
    """

    tuit: str
    disliked_by: str
    created_at: float
    seq: int | None = None
