"""Shared pytest fixtures for describer tests."""

import pytest

from describer.app import App
from example_routes import build_app


@pytest.fixture
def example_app() -> App:
    """A fresh example app with a default DescribeMiddleware installed."""
    return build_app()
