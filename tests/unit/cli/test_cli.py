"""Tests for the Folio CLI."""

import pytest
from typer.testing import CliRunner

from folio.cli import app
from folio.config import Settings

runner = CliRunner()


class StubConnection:
    """Stands in for RedisConnection without opening sockets."""

    healthy = True

    def __init__(self, url: str) -> None:
        self.url = url

    async def connect(self) -> None:
        return None

    async def health_check(self) -> bool:
        return self.healthy

    async def close(self) -> None:
        return None


@pytest.fixture
def memory_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    settings = Settings(store_backend="memory")
    monkeypatch.setattr("folio.cli.check.settings", settings)
    monkeypatch.setattr("folio.cli.check.RedisConnection", StubConnection)
    return settings


class TestCli:
    """Test command wiring."""

    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "serve" in result.output
        assert "check" in result.output

    def test_check_all_up(self, memory_settings: Settings) -> None:
        result = runner.invoke(app, ["check"])

        assert result.exit_code == 0
        assert "store: up" in result.output
        assert "cache: up" in result.output

    def test_check_cache_down_is_tolerated(
        self, memory_settings: Settings, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(StubConnection, "healthy", False)

        result = runner.invoke(app, ["check"])

        assert result.exit_code == 0
        assert "cache: down" in result.output

    def test_serve_invokes_uvicorn(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[dict] = []
        monkeypatch.setattr("uvicorn.run", lambda **kwargs: calls.append(kwargs))

        result = runner.invoke(app, ["serve", "--port", "9000"])

        assert result.exit_code == 0
        assert calls[0]["app"] == "folio.api.app:create_app"
        assert calls[0]["factory"] is True
        assert calls[0]["port"] == 9000
