"""Tests for the boundary operations."""

from unittest import mock

import pytest

from tuit_dislikes.errors import StoreError, Unauthenticated
from tuit_dislikes.identity import IdentityResolver
from tuit_dislikes.service import DislikeService, ToggleResult, build_service
from tuit_dislikes.settings import DislikeSettings


class TestToggleDislike:
    def test_scenario_toggle_check_toggle(self, db, service, alice, tuit):
        """Dislike, check, then undo."""
        first = service.toggle_dislike(alice.id, tuit.id)
        assert first == ToggleResult(applied=True, disliked=True, dislikes=1)
        assert service.check_dislike_status(alice.id, tuit.id) is not None

        second = service.toggle_dislike(alice.id, tuit.id)
        assert second == ToggleResult(applied=True, disliked=False, dislikes=0)
        assert service.check_dislike_status(alice.id, tuit.id) is None
        assert db.find_tuit_by_id(tuit.id).stats.dislikes == 0

    def test_two_users_listed(self, service, alice, bob, tuit):
        service.toggle_dislike(alice.id, tuit.id)
        result = service.toggle_dislike(bob.id, tuit.id)

        assert result.dislikes == 2
        assert service.list_users_who_disliked(tuit.id) == [alice, bob]

    def test_self_alias_uses_current_user(self, db, service, alice, tuit):
        result = service.toggle_dislike("me", tuit.id, current_user=alice.id)

        assert result.applied
        assert db.find_dislike(tuit.id, alice.id) is not None

    def test_missing_tuit_reports_failure(self, db, service, alice):
        result = service.toggle_dislike(alice.id, "missing")

        assert result.applied is False
        assert "missing" in result.error
        assert db.find_dislike("missing", alice.id) is None

    def test_store_failure_reports_failure(self, service, alice, tuit):
        with mock.patch.object(service.engine, "toggle", side_effect=StoreError("locked")):
            result = service.toggle_dislike(alice.id, tuit.id)

        assert result == ToggleResult(applied=False, error="locked")

    def test_programming_errors_propagate(self, service, alice, tuit):
        with mock.patch.object(service.engine, "toggle", side_effect=KeyError("bug")):
            with pytest.raises(KeyError):
                service.toggle_dislike(alice.id, tuit.id)


class TestUnauthenticated:
    @pytest.fixture
    def untouchable(self):
        """Stores that fail the test if they are used at all."""
        store = mock.Mock()
        return DislikeService(dislikes=store, tuits=store, users=store), store

    def test_toggle_without_identity(self, untouchable):
        service, store = untouchable

        with pytest.raises(Unauthenticated):
            service.toggle_dislike("me", "t1")

        assert store.mock_calls == []

    def test_status_without_identity(self, untouchable):
        service, store = untouchable

        with pytest.raises(Unauthenticated):
            service.check_dislike_status("me", "t1")

        assert store.mock_calls == []

    def test_list_without_identity(self, untouchable):
        service, store = untouchable

        with pytest.raises(Unauthenticated):
            service.list_tuits_disliked_by("me")

        assert store.mock_calls == []


class TestListing:
    def test_list_tuits_disliked_by_self(self, service, alice, bob, tuit):
        service.toggle_dislike(bob.id, tuit.id)

        tuits = service.list_tuits_disliked_by("me", current_user=bob.id)

        assert [t.id for t in tuits] == [tuit.id]
        assert tuits[0].author == alice


class TestReconcile:
    def test_reconcile_counts(self, db, service, alice, tuit):
        service.toggle_dislike(alice.id, tuit.id)
        db.update_dislikes(tuit.id, 9)

        assert service.reconcile_counts() == {tuit.id: (9, 1)}
        assert db.find_tuit_by_id(tuit.id).stats.dislikes == 1


class TestBuildService:
    def test_wires_sqlite_and_alias(self, tmp_path):
        cfg = DislikeSettings(db_path=str(tmp_path / "svc.db"), self_alias="self")

        svc = build_service(cfg)

        assert svc.resolver == IdentityResolver(self_alias="self")
        assert svc.locks is not None
        assert (tmp_path / "svc.db").exists()

    def test_unserialized_toggles_have_no_locks(self, tmp_path):
        cfg = DislikeSettings(db_path=str(tmp_path / "svc.db"), serialize_toggles=False)
        assert build_service(cfg).locks is None
