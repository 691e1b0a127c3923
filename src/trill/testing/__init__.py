"""Test utilities for trill servers::

    from trill.testing import TestClient
"""

from trill.testing.client import TestClient

__all__ = ["TestClient"]
