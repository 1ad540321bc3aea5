"""
Tests for the in-memory rate limiter
"""
from unittest.mock import patch

from storefront.core.rate_limit import RateLimiter


class TestRateLimiter:

    def test_allows_up_to_limit(self):
        limiter = RateLimiter()

        results = [limiter.is_allowed("ip:1.2.3.4", max_requests=3) for _ in range(4)]

        assert [allowed for allowed, _, _ in results] == [True, True, True, False]
        assert [remaining for _, remaining, _ in results[:3]] == [2, 1, 0]
        assert results[3][2] >= 1

    def test_identifiers_are_independent(self):
        limiter = RateLimiter()
        limiter.is_allowed("ip:1.1.1.1", max_requests=1)

        allowed, _, _ = limiter.is_allowed("ip:2.2.2.2", max_requests=1)

        assert allowed

    def test_window_slides(self):
        limiter = RateLimiter()

        with patch('storefront.core.rate_limit.time.time', return_value=1000.0):
            limiter.is_allowed("ip:1.2.3.4", max_requests=1, window_seconds=60)
            blocked, _, retry_after = limiter.is_allowed("ip:1.2.3.4", max_requests=1, window_seconds=60)

        assert not blocked
        assert retry_after == 61

        with patch('storefront.core.rate_limit.time.time', return_value=1061.0):
            allowed, _, _ = limiter.is_allowed("ip:1.2.3.4", max_requests=1, window_seconds=60)

        assert allowed

    def test_idle_identifiers_are_forgotten(self):
        with patch('storefront.core.rate_limit.time.time', return_value=1000.0):
            limiter = RateLimiter()
            limiter.is_allowed("ip:1.1.1.1", max_requests=5)

        with patch('storefront.core.rate_limit.time.time', return_value=1100.0):
            limiter.is_allowed("ip:2.2.2.2", max_requests=5)

        assert limiter.tracked_identifiers() == 1

    def test_reset(self):
        limiter = RateLimiter()
        limiter.is_allowed("ip:1.2.3.4", max_requests=1)
        limiter.reset()

        allowed, _, _ = limiter.is_allowed("ip:1.2.3.4", max_requests=1)

        assert allowed
