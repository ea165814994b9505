"""Tests for environment-driven settings."""

from tuit_dislikes.settings import DislikeSettings


class TestDislikeSettings:
    def test_defaults(self, monkeypatch):
        for name in ("LOG_LEVEL", "DB_PATH", "SELF_ALIAS", "SERIALIZE_TOGGLES", "SQLITE_TIMEOUT"):
            monkeypatch.delenv(f"TUIT_DISLIKES_{name}", raising=False)

        cfg = DislikeSettings()

        assert cfg.self_alias == "me"
        assert cfg.serialize_toggles is True
        assert cfg.sqlite_timeout == 5.0
        assert cfg.log_level == "INFO"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("TUIT_DISLIKES_SELF_ALIAS", "self")
        monkeypatch.setenv("TUIT_DISLIKES_SERIALIZE_TOGGLES", "false")
        monkeypatch.setenv("TUIT_DISLIKES_DB_PATH", "/tmp/x.db")

        cfg = DislikeSettings()

        assert cfg.self_alias == "self"
        assert cfg.serialize_toggles is False
        assert cfg.db_path == "/tmp/x.db"
