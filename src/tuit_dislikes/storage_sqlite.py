from __future__ import annotations

import dataclasses
import logging
import sqlite3
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from .errors import DislikeNotFound, DuplicateDislike, StoreError, TuitNotFound
from .models import Dislike, Tuit, TuitStats, User

logger = logging.getLogger(__name__)

SCHEMA = """
PRAGMA journal_mode=WAL;

CREATE TABLE IF NOT EXISTS users (
  id TEXT PRIMARY KEY,
  username TEXT NOT NULL UNIQUE,
  first_name TEXT,
  last_name TEXT
);

CREATE TABLE IF NOT EXISTS tuits (
  id TEXT PRIMARY KEY,
  tuit TEXT NOT NULL,
  posted_by TEXT NOT NULL,
  posted_on REAL NOT NULL,
  replies INTEGER NOT NULL DEFAULT 0,
  retuits INTEGER NOT NULL DEFAULT 0,
  likes INTEGER NOT NULL DEFAULT 0,
  dislikes INTEGER NOT NULL DEFAULT 0 CHECK (dislikes >= 0)
);

-- seq keeps insertion order for listings
CREATE TABLE IF NOT EXISTS dislikes (
  seq INTEGER PRIMARY KEY AUTOINCREMENT,
  tuit TEXT NOT NULL,
  disliked_by TEXT NOT NULL,
  created_at REAL NOT NULL,
  UNIQUE(tuit, disliked_by)
);

CREATE INDEX IF NOT EXISTS idx_dislikes_tuit ON dislikes(tuit);
CREATE INDEX IF NOT EXISTS idx_dislikes_disliked_by ON dislikes(disliked_by);
"""


def _dislike(row: sqlite3.Row) -> Dislike:
    return Dislike(
        tuit=row["tuit"],
        disliked_by=row["disliked_by"],
        created_at=row["created_at"],
        seq=row["seq"],
    )


def _tuit(row: sqlite3.Row) -> Tuit:
    return Tuit(
        id=row["id"],
        tuit=row["tuit"],
        posted_by=row["posted_by"],
        posted_on=row["posted_on"],
        stats=TuitStats(
            replies=row["replies"],
            retuits=row["retuits"],
            likes=row["likes"],
            dislikes=row["dislikes"],
        ),
    )


@dataclass
class SQLiteDislikeDB:
    """Dislikes, tuits and users in one SQLite file.

    Implements DislikeStore, TuitStore and UserStore. Every operation opens
    its own connection, so one instance can be shared across threads.
    """

    path: str
    timeout: float = 5.0

    def connect(self) -> sqlite3.Connection:
        con = sqlite3.connect(str(Path(self.path).expanduser()), timeout=self.timeout)
        con.row_factory = sqlite3.Row
        return con

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            con = self.connect()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open database {self.path}: {e}") from e
        try:
            yield con
        except sqlite3.Error as e:
            raise StoreError(f"Database error on {self.path}: {e}") from e
        finally:
            con.close()

    def init(self) -> None:
        Path(self.path).expanduser().parent.mkdir(parents=True, exist_ok=True)
        with self._connection() as con:
            con.executescript(SCHEMA)
            con.commit()
        logger.debug(f"Initialized dislike schema at {self.path}")

    # --- dislikes ---

    def find_dislike(self, tuit_id: str, user_id: str) -> Dislike | None:
        with self._connection() as con:
            row = con.execute(
                "SELECT seq, tuit, disliked_by, created_at FROM dislikes WHERE tuit=? AND disliked_by=?",
                (tuit_id, user_id),
            ).fetchone()
            return _dislike(row) if row else None

    def count_dislikes(self, tuit_id: str) -> int:
        with self._connection() as con:
            row = con.execute("SELECT COUNT(*) FROM dislikes WHERE tuit=?", (tuit_id,)).fetchone()
            return int(row[0])

    def create_dislike(self, tuit_id: str, user_id: str) -> Dislike:
        return self._insert_dislike(
            Dislike(tuit=tuit_id, disliked_by=user_id, created_at=time.time())
        )

    def restore_dislike(self, dislike: Dislike) -> Dislike:
        """Re-insert a deleted dislike with its original created_at and seq."""
        return self._insert_dislike(dislike)

    def _insert_dislike(self, dislike: Dislike) -> Dislike:
        # seq=None lets AUTOINCREMENT assign the next position
        with self._connection() as con:
            try:
                cur = con.execute(
                    "INSERT INTO dislikes(seq, tuit, disliked_by, created_at) VALUES (?,?,?,?)",
                    (dislike.seq, dislike.tuit, dislike.disliked_by, dislike.created_at),
                )
                con.commit()
            except sqlite3.IntegrityError as e:
                raise DuplicateDislike(dislike.tuit, dislike.disliked_by) from e
        return dataclasses.replace(dislike, seq=cur.lastrowid)

    def delete_dislike(self, tuit_id: str, user_id: str) -> None:
        with self._connection() as con:
            cur = con.execute(
                "DELETE FROM dislikes WHERE tuit=? AND disliked_by=?", (tuit_id, user_id)
            )
            con.commit()
            if cur.rowcount == 0:
                raise DislikeNotFound(tuit_id, user_id)

    def iter_dislikes_for_tuit(self, tuit_id: str) -> Iterator[Dislike]:
        """Yields the tuit's dislikes in insertion order."""
        with self._connection() as con:
            rows = con.execute(
                "SELECT seq, tuit, disliked_by, created_at FROM dislikes WHERE tuit=? ORDER BY seq",
                (tuit_id,),
            ).fetchall()
        for row in rows:
            yield _dislike(row)

    def iter_dislikes_by_user(self, user_id: str) -> Iterator[Dislike]:
        """Yields the user's dislikes in insertion order."""
        with self._connection() as con:
            rows = con.execute(
                "SELECT seq, tuit, disliked_by, created_at FROM dislikes WHERE disliked_by=? ORDER BY seq",
                (user_id,),
            ).fetchall()
        for row in rows:
            yield _dislike(row)

    # --- tuits ---

    def find_tuit_by_id(self, tuit_id: str) -> Tuit:
        with self._connection() as con:
            row = con.execute("SELECT * FROM tuits WHERE id=?", (tuit_id,)).fetchone()
        if not row:
            raise TuitNotFound(tuit_id)
        return _tuit(row)

    def update_dislikes(self, tuit_id: str, dislikes: int) -> None:
        if dislikes < 0:
            raise ValueError(f"dislikes must be >= 0, got {dislikes}")
        with self._connection() as con:
            cur = con.execute("UPDATE tuits SET dislikes=? WHERE id=?", (dislikes, tuit_id))
            con.commit()
            if cur.rowcount == 0:
                raise TuitNotFound(tuit_id)

    def iter_tuits(self) -> Iterator[Tuit]:
        with self._connection() as con:
            rows = con.execute("SELECT * FROM tuits ORDER BY posted_on, id").fetchall()
        for row in rows:
            yield _tuit(row)

    def add_tuit(self, *, posted_by: str, tuit: str, posted_on: float | None = None) -> Tuit:
        created = Tuit(
            id=uuid.uuid4().hex,
            tuit=tuit,
            posted_by=posted_by,
            posted_on=posted_on if posted_on is not None else time.time(),
        )
        with self._connection() as con:
            con.execute(
                "INSERT INTO tuits(id, tuit, posted_by, posted_on) VALUES (?,?,?,?)",
                (created.id, created.tuit, created.posted_by, created.posted_on),
            )
            con.commit()
        return created

    # --- users ---

    def find_user_by_id(self, user_id: str) -> User | None:
        with self._connection() as con:
            row = con.execute(
                "SELECT id, username, first_name, last_name FROM users WHERE id=?", (user_id,)
            ).fetchone()
        if not row:
            return None
        return User(
            id=row["id"],
            username=row["username"],
            first_name=row["first_name"],
            last_name=row["last_name"],
        )

    def add_user(
        self, *, username: str, first_name: str | None = None, last_name: str | None = None
    ) -> User:
        user = User(id=uuid.uuid4().hex, username=username, first_name=first_name, last_name=last_name)
        with self._connection() as con:
            con.execute(
                "INSERT INTO users(id, username, first_name, last_name) VALUES (?,?,?,?)",
                (user.id, user.username, user.first_name, user.last_name),
            )
            con.commit()
        return user
