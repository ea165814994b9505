"""Pytest fixtures for tuit-dislikes tests."""

import pytest

from tuit_dislikes.identity import IdentityResolver
from tuit_dislikes.service import DislikeService
from tuit_dislikes.storage_sqlite import SQLiteDislikeDB
from tuit_dislikes.toggle import ToggleEngine, TuitLocks


@pytest.fixture
def db(tmp_path):
    """Fresh SQLite database in a temporary directory."""
    db = SQLiteDislikeDB(path=str(tmp_path / "dislikes.db"))
    db.init()
    return db


@pytest.fixture
def alice(db):
    return db.add_user(username="alice")


@pytest.fixture
def bob(db):
    return db.add_user(username="bob")


@pytest.fixture
def tuit(db, alice):
    return db.add_tuit(posted_by=alice.id, tuit="first tuit", posted_on=1000.0)


@pytest.fixture
def engine(db):
    return ToggleEngine(db, db, locks=TuitLocks())


@pytest.fixture
def service(db):
    return DislikeService(
        dislikes=db,
        tuits=db,
        users=db,
        resolver=IdentityResolver(self_alias="me"),
        locks=TuitLocks(),
    )
