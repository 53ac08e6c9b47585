"""Tests for the MCP server, health tool and CLI startup."""

import sys

import pytest

from tfnsw_trips import __version__
from tfnsw_trips.data.config import get_config
from tfnsw_trips.server import health, main


def test_health_returns_ok_status():
    """Health check should return status ok."""
    response = health()
    assert response.status == "ok"


def test_health_returns_version():
    """Health check should return the current version."""
    response = health()
    assert response.version == __version__


def test_health_returns_timestamp():
    """Health check should return a valid ISO timestamp."""
    response = health()
    assert response.timestamp is not None
    # Should be parseable as ISO format
    assert "T" in response.timestamp


def test_missing_api_key_is_fatal(monkeypatch, tmp_path):
    """Startup exits non-zero when no API key is configured."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TFNSW_API_KEY", raising=False)
    monkeypatch.delenv("APIKEY", raising=False)
    monkeypatch.setattr(sys, "argv", ["tfnsw-trips", "serve"])
    get_config.cache_clear()

    try:
        with pytest.raises(SystemExit) as exc_info:
            main()
    finally:
        get_config.cache_clear()

    assert exc_info.value.code == 1


def test_serve_runs_uvicorn(monkeypatch, tmp_path):
    """serve builds the app from config and hands it to uvicorn."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TFNSW_API_KEY", "env_key")
    monkeypatch.setattr(sys, "argv", ["tfnsw-trips", "serve", "--port", "8123"])
    get_config.cache_clear()

    calls = []
    monkeypatch.setattr("uvicorn.run", lambda app, host, port: calls.append((app, host, port)))

    try:
        main()
    finally:
        get_config.cache_clear()

    assert len(calls) == 1
    app, host, port = calls[0]
    assert app.state.trip_context.config.api_key == "env_key"
    assert host == "0.0.0.0"
    assert port == 8123
