"""Shared test fixtures for vizier-tap."""

from pathlib import Path
from tempfile import TemporaryDirectory

import httpx
import pytest
from typer.testing import CliRunner

from tests.payloads import TAP_URL
from vizier_tap.cli.main import app
from vizier_tap.core.client import AsyncTapClient, TapClient
from vizier_tap.core.config import ResolvedConfig


@pytest.fixture
def runner():
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_runner(runner):
    """Invoke the CLI app with the given arguments."""

    def invoke(*args: str, **kwargs):
        return runner.invoke(app, list(args), **kwargs)

    return invoke


@pytest.fixture
def temp_dir():
    """Temporary directory for test files."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def resolved_config():
    return ResolvedConfig(tap_url=TAP_URL, timeout=5.0)


@pytest.fixture
def requests_seen():
    """Requests received by the mock transport, in order."""
    return []


@pytest.fixture
def make_client(resolved_config, requests_seen):
    """Build a TapClient whose transport answers with the given response.

    ``respond`` is either a JSON-able payload (served with 200), an
    httpx.Response, or an exception instance to raise from the transport.
    """

    def build(respond):
        def handler(request):
            requests_seen.append(request)
            if isinstance(respond, Exception):
                raise respond
            if isinstance(respond, httpx.Response):
                return respond
            return httpx.Response(200, json=respond)

        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        return TapClient(resolved_config, http_client=http_client)

    return build


@pytest.fixture
def make_async_client(resolved_config, requests_seen):
    """Async counterpart of make_client."""

    def build(respond):
        async def handler(request):
            requests_seen.append(request)
            if isinstance(respond, Exception):
                raise respond
            if isinstance(respond, httpx.Response):
                return respond
            return httpx.Response(200, json=respond)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return AsyncTapClient(resolved_config, http_client=http_client)

    return build


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep user config and VIZIER_TAP_* variables out of every test."""
    for var in (
        "VIZIER_TAP_URL",
        "VIZIER_TAP_TIMEOUT",
        "VIZIER_TAP_PROFILE",
        "VIZIER_TAP_SENTRY_DSN",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(
        "vizier_tap.core.config.DEFAULT_CONFIG_PATH", tmp_path / "missing.toml"
    )
