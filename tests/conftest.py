"""Global test fixtures."""

import pytest


@pytest.fixture
def primary_url() -> str:
    return "https://example.com/inbox.json"


@pytest.fixture
def secondary_url() -> str:
    return "https://example.com/sent.json"
