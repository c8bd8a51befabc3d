"""
Shared pytest fixtures.
"""

import pytest

from stockguru.shared.security.rate_limiting import limiter


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Every test starts with fresh rate-limit counters."""
    limiter.reset()
    yield
