"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from embed_relay.app import app
from embed_relay.links.client import reset_client as reset_http_client
from embed_relay.slack.client import reset_client as reset_slack_client


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Ensure no cached HTTP or Slack client leaks between tests."""
    reset_http_client()
    reset_slack_client()
    yield
    reset_http_client()
    reset_slack_client()
