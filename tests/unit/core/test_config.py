"""Unit tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from microblog.core.config import Settings
from microblog.core.config.yaml_source import deep_merge


pytestmark = pytest.mark.unit


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_nested_override(self) -> None:
        """Should merge nested mappings key by key."""
        base = {"auth": {"jwt": {"algorithm": "HS256", "minutes": 60}}, "x": 1}
        override = {"auth": {"jwt": {"minutes": 5}}}

        assert deep_merge(base, override) == {
            "auth": {"jwt": {"algorithm": "HS256", "minutes": 5}},
            "x": 1,
        }

    def test_does_not_mutate_base(self) -> None:
        """Should leave the base mapping untouched."""
        base = {"a": {"b": 1}}
        deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}

    def test_scalar_replaces_mapping(self) -> None:
        """Should let non-mapping values replace."""
        assert deep_merge({"a": {"b": 1}}, {"a": None}) == {"a": None}


class TestSettings:
    """Tests for Settings loading."""

    def test_test_environment_overrides(self, settings: Settings) -> None:
        """Should apply config/environments/test on top of base."""
        assert settings.APP_ENV == "test"
        assert settings.is_testing is True
        assert settings.auth.bcrypt_rounds == 4
        assert settings.observability.metrics.enabled is False

    def test_base_values(self, settings: Settings) -> None:
        """Should load base YAML values."""
        assert settings.api.v1_prefix == "/api/v1"
        assert settings.pagination.per_page == 30
        assert settings.rate_limiting.auth == "5/minute"
        assert settings.auth.remember_cookie.name == "remember_token"

    def test_env_var_overrides_yaml(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should let nested env vars win over YAML."""
        monkeypatch.setenv("DATABASE__HOST", "db.internal")

        assert Settings().database.host == "db.internal"

    def test_config_dir_override(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Should read YAML from MICROBLOG_CONFIG_DIR."""
        (tmp_path / "base").mkdir()
        (tmp_path / "base" / "app.yaml").write_text("app:\n  name: Elsewhere\n")
        monkeypatch.setenv("MICROBLOG_CONFIG_DIR", str(tmp_path))

        assert Settings().app.name == "Elsewhere"

    def test_remember_cookie_max_age(self) -> None:
        """Should convert days to seconds."""
        settings = Settings(
            auth={"remember_cookie": {"max_age_days": 2}},  # type: ignore[arg-type]
        )
        assert settings.remember_cookie_max_age == 2 * 24 * 60 * 60

    @pytest.mark.parametrize(
        ("user", "password", "expected"),
        [
            (None, "", "postgresql://localhost:5432/microblog"),
            ("app", "", "postgresql://app@localhost:5432/microblog"),
            ("app", "pw", "postgresql://app:pw@localhost:5432/microblog"),
        ],
    )
    def test_database_url(
        self,
        monkeypatch: pytest.MonkeyPatch,
        user: str | None,
        password: str,
        expected: str,
    ) -> None:
        """Should include credentials only when present."""
        monkeypatch.delenv("DATABASE__HOST", raising=False)
        monkeypatch.delenv("DATABASE_PASSWORD", raising=False)
        settings = Settings(
            database={"host": "localhost", "port": 5432, "name": "microblog", "user": user},  # type: ignore[arg-type]
            DATABASE_PASSWORD=password,
        )
        assert settings.database_url == expected
