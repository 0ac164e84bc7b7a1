"""Tests for tern.environment — the active deployment environment."""

import pytest

from tern.environment import Environment


class TestEnvironment:
    def test_explicit_name(self) -> None:
        env = Environment("test")
        assert env.get() == "test"
        assert env.is_("test")
        assert not env.is_("production")

    def test_from_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TERN_ENV", "staging")
        assert Environment().get() == "staging"

    def test_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TERN_ENV", raising=False)
        assert Environment().get() == "development"

    def test_set(self) -> None:
        env = Environment("test")
        env.set("production")
        assert env.get() == "production"

    def test_set_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            Environment("test").set("")

    def test_repr(self) -> None:
        assert repr(Environment("test")) == "Environment('test')"
