"""Tests for user reference resolution."""

import pytest

from tuit_dislikes.errors import Unauthenticated
from tuit_dislikes.identity import IdentityResolver


class TestIdentityResolver:
    def test_concrete_id_passes_through(self):
        assert IdentityResolver().resolve("u1") == "u1"

    def test_concrete_id_ignores_current_user(self):
        assert IdentityResolver().resolve("u1", current_user="u2") == "u1"

    def test_self_alias_resolves_to_current_user(self):
        assert IdentityResolver().resolve("me", current_user="u2") == "u2"

    def test_self_alias_without_identity(self):
        with pytest.raises(Unauthenticated) as exc:
            IdentityResolver().resolve("me")
        assert exc.value.details == {"user_ref": "me"}

    def test_empty_identity_is_unauthenticated(self):
        with pytest.raises(Unauthenticated):
            IdentityResolver().resolve("me", current_user="")

    def test_custom_alias(self):
        resolver = IdentityResolver(self_alias="self")

        assert resolver.resolve("me") == "me"
        assert resolver.resolve("self", current_user="u3") == "u3"
