"""Shared pytest fixtures and configuration."""

import io

import pytest

from request_snapshot.core.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings around every test so env overrides never leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def stream() -> io.BytesIO:
    """A readable in-memory stream."""
    return io.BytesIO(b"streamed payload")


@pytest.fixture
def post_request():
    """Build a POST request mapping around a body."""

    def _build(body, **fields):
        return {"method": "POST", "body": body, **fields}

    return _build
