"""Test utilities for describer applications.

    from describer.testing import TestClient
"""

from describer.testing.client import TestClient

__all__ = ["TestClient"]
