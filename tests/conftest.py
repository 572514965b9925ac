"""Shared pytest fixtures and configuration."""

import pytest

from roster.service import StudentPayload


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def valid_payload() -> StudentPayload:
    """A create payload that passes every rule."""
    return StudentPayload(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.edu",
        age=20,
        course="Mathematics",
        year_level=2,
        gpa=3.8,
    )
