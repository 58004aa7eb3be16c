"""Pytest fixtures for steamauth tests."""
import pytest

from steamauth.core.api import AuthConfig
from steamauth.core.sentry import SentryStore


@pytest.fixture
def config(tmp_path):
    """Configuration with fast timings and a temporary sentry directory."""
    return AuthConfig(
        username="alice",
        password="hunter2",
        app_id=730,
        sentry_dir=tmp_path,
        reconnect_delay=0,
        poll_interval=0.05,
        ticket_timeout=1.0,
    )


@pytest.fixture
def sentry_store(tmp_path):
    """Sentry store backed by a temporary file."""
    return SentryStore.for_account("alice", tmp_path)


@pytest.fixture
def ticket_bytes():
    return bytes.fromhex("140000006b6c9f3c")
