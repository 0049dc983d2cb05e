"""
Pytest configuration and fixtures for vimtrace tests.
"""

import pytest


@pytest.fixture
def correlation_id() -> str:
    """Provide a valid UUID test correlation ID for distributed tracing."""
    return "550e8400-e29b-41d4-a716-446655440000"
