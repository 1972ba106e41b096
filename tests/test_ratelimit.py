import pytest

from apps.core.ratelimit import FixedWindowRateLimiter, RateLimitRule


class FakeClock:
    def __init__(self, now=1_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return FixedWindowRateLimiter(clock=clock, cleanup_interval=600)


RULE = RateLimitRule(limit=3, window_seconds=60, message="Slow down")


class TestFixedWindowRateLimiter:
    def test_allows_up_to_limit(self, limiter):
        remaining = [limiter.hit('contact', '1.2.3.4', RULE).remaining for _ in range(3)]
        assert remaining == [2, 1, 0]

        blocked = limiter.hit('contact', '1.2.3.4', RULE)
        assert not blocked.allowed
        assert blocked.remaining == 0
        assert blocked.retry_after == 60
        assert blocked.message == "Slow down"

    def test_window_resets(self, limiter, clock):
        for _ in range(3):
            limiter.hit('contact', '1.2.3.4', RULE)
        clock.advance(45.5)
        assert limiter.hit('contact', '1.2.3.4', RULE).retry_after == 15

        clock.advance(15)
        assert limiter.hit('contact', '1.2.3.4', RULE).allowed

    def test_scopes_and_clients_are_independent(self, limiter):
        for _ in range(3):
            limiter.hit('contact', '1.2.3.4', RULE)
        assert limiter.hit('orders', '1.2.3.4', RULE).allowed
        assert limiter.hit('contact', '5.6.7.8', RULE).allowed
        assert not limiter.hit('contact', '1.2.3.4', RULE).allowed

    def test_expired_entries_are_swept(self, limiter, clock):
        limiter.hit('contact', '1.2.3.4', RULE)
        limiter.hit('auth', '1.2.3.4', RULE)
        assert len(limiter) == 2

        clock.advance(601)
        limiter.hit('public', '9.9.9.9', RULE)
        assert len(limiter) == 1

    def test_reset(self, limiter):
        for _ in range(3):
            limiter.hit('contact', '1.2.3.4', RULE)
        limiter.reset()
        assert len(limiter) == 0
        assert limiter.hit('contact', '1.2.3.4', RULE).allowed

    def test_rule_from_config(self):
        rule = RateLimitRule.from_config({'limit': '5', 'window_seconds': 900})
        assert rule.limit == 5
        assert rule.window_seconds == 900
        assert rule.message == "Too many requests. Please try again later."


@pytest.mark.django_db
def test_contact_endpoint_returns_429(api_client, settings):
    settings.STORE_RATE_LIMITS = {
        **settings.STORE_RATE_LIMITS,
        'contact': {'limit': 2, 'window_seconds': 3600, 'message': 'Too many contact form submissions.'},
    }
    payload = {
        'name': 'Bilal',
        'email': 'bilal@example.com',
        'subject': 'Strap sizes',
        'message': 'Do you carry 22mm leather straps?',
    }

    for _ in range(2):
        assert api_client.post('/api/contact/', payload, format='json').status_code == 200

    response = api_client.post('/api/contact/', payload, format='json')
    assert response.status_code == 429
    assert response.json() == {'error': 'Too many contact form submissions.', 'retryAfter': 3600}
    assert response['Retry-After'] == '3600'
    assert response['X-RateLimit-Limit'] == '2'
    assert response['X-RateLimit-Remaining'] == '0'


@pytest.mark.django_db
def test_rate_limit_is_per_client_ip(api_client, settings):
    settings.STORE_RATE_LIMITS = {
        **settings.STORE_RATE_LIMITS,
        'public': {'limit': 1, 'window_seconds': 60, 'message': 'Too many requests.'},
    }
    assert api_client.get('/api/products/', HTTP_X_FORWARDED_FOR='10.0.0.1').status_code == 200
    assert api_client.get('/api/products/', HTTP_X_FORWARDED_FOR='10.0.0.1').status_code == 429
    assert api_client.get('/api/products/', HTTP_X_FORWARDED_FOR='10.0.0.2').status_code == 200
