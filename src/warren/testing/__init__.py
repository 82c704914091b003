"""Test utilities for warren routers.

    from warren.testing import TestClient
"""

from warren.testing.client import TestClient

__all__ = ["TestClient"]
