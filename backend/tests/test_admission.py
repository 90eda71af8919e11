from types import SimpleNamespace

from relay.services.rooms import SlidingWindowLimiter, client_address


def test_denies_past_budget_then_recovers(clock):
    limiter = SlidingWindowLimiter(max_events=10, window_seconds=60, clock=clock)
    for _ in range(10):
        assert limiter.is_allowed('1.2.3.4')
        clock.advance(1)
    assert not limiter.is_allowed('1.2.3.4')
    # still inside the window of the oldest admission
    clock.advance(49)
    assert not limiter.is_allowed('1.2.3.4')
    # oldest admission (t=0) ages out at t=60
    clock.advance(1)
    assert limiter.is_allowed('1.2.3.4')
    assert not limiter.is_allowed('1.2.3.4')


def test_denials_are_not_recorded(clock):
    limiter = SlidingWindowLimiter(max_events=2, window_seconds=60, clock=clock)
    assert limiter.is_allowed('a')
    assert limiter.is_allowed('a')
    for _ in range(5):
        assert not limiter.is_allowed('a')
    clock.advance(60)
    assert limiter.is_allowed('a')
    assert limiter.is_allowed('a')


def test_addresses_are_independent(clock):
    limiter = SlidingWindowLimiter(max_events=1, window_seconds=60, clock=clock)
    assert limiter.is_allowed('a')
    assert not limiter.is_allowed('a')
    assert limiter.is_allowed('b')


def test_retry_after(clock):
    limiter = SlidingWindowLimiter(max_events=2, window_seconds=60, clock=clock)
    assert limiter.retry_after('a') == 0
    limiter.is_allowed('a')
    clock.advance(10)
    limiter.is_allowed('a')
    clock.advance(5)
    assert limiter.retry_after('a') == 45


def test_sweep_drops_only_idle_addresses(clock):
    limiter = SlidingWindowLimiter(max_events=10, window_seconds=60, clock=clock)
    limiter.is_allowed('old')
    clock.advance(30)
    limiter.is_allowed('fresh')
    clock.advance(31)
    assert len(limiter) == 2
    assert limiter.sweep() == 1
    assert len(limiter) == 1
    assert limiter.is_allowed('fresh')


def _request(headers=None, remote_addr=None):
    return SimpleNamespace(headers=headers or {}, remote_addr=remote_addr)


def test_client_address_prefers_first_forwarded_hop():
    req = _request({'X-Forwarded-For': '203.0.113.7, 10.0.0.1'}, '10.0.0.1')
    assert client_address(req) == '203.0.113.7'


def test_client_address_ignores_forwarded_when_untrusted():
    req = _request({'X-Forwarded-For': '203.0.113.7'}, '10.0.0.1')
    assert client_address(req, trust_forwarded=False) == '10.0.0.1'


def test_client_address_fallbacks():
    assert client_address(_request(remote_addr='192.0.2.1')) == '192.0.2.1'
    assert client_address(_request()) == 'unknown'
