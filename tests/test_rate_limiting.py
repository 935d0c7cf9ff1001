import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from unistay.api.deps import get_rate_limiter
from unistay.core.rate_limiting import RateLimiter
from unistay.main import app

RULES = {
    "default": {"requests": 3, "window_seconds": 60},
    "write": {"requests": 1, "window_seconds": 60},
}


class FakePipeline:
    def __init__(self, redis):
        self.redis = redis
        self.commands = []

    def incr(self, key):
        self.commands.append(("incr", key))
        return self

    def expire(self, key, seconds):
        self.commands.append(("expire", key, seconds))
        return self

    def execute(self):
        if self.redis.broken:
            raise RedisConnectionError("connection refused")
        results = []
        for command in self.commands:
            if command[0] == "incr":
                self.redis.counters[command[1]] = self.redis.counters.get(command[1], 0) + 1
                results.append(self.redis.counters[command[1]])
            else:
                self.redis.ttls[command[1]] = command[2]
                results.append(True)
        return results


class FakeRedis:
    def __init__(self, broken=False):
        self.counters = {}
        self.ttls = {}
        self.broken = broken

    def pipeline(self):
        return FakePipeline(self)


class Clock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture()
def clock():
    return Clock()


@pytest.fixture()
def limiter(clock):
    return RateLimiter(FakeRedis(), RULES, clock=clock)


def test_requests_within_limit_are_allowed(limiter):
    results = [limiter.hit("default", "10.0.0.1") for _ in range(3)]

    assert all(r.allowed for r in results)
    assert [r.remaining for r in results] == [2, 1, 0]


def test_request_over_limit_is_rejected_until_window_resets(limiter, clock):
    for _ in range(3):
        limiter.hit("default", "10.0.0.1")

    blocked = limiter.hit("default", "10.0.0.1")
    assert not blocked.allowed
    assert blocked.reset_at == 1_000_020
    assert blocked.retry_after == 20

    clock.now = 1_000_020.0
    assert limiter.hit("default", "10.0.0.1").allowed


def test_counters_are_per_client_and_category(limiter):
    limiter.hit("write", "10.0.0.1")

    assert not limiter.hit("write", "10.0.0.1").allowed
    assert limiter.hit("write", "10.0.0.2").allowed
    assert limiter.hit("default", "10.0.0.1").allowed


def test_unknown_category_uses_default_rule(limiter):
    assert limiter.hit("search", "10.0.0.1").limit == 3


def test_counter_keys_expire_with_window(limiter):
    result = limiter.hit("default", "10.0.0.1")

    assert limiter.redis.ttls[result.key] == 60


def test_redis_outage_fails_open(clock):
    limiter = RateLimiter(FakeRedis(broken=True), RULES, clock=clock)

    assert limiter.hit("default", "10.0.0.1").allowed


def test_redis_outage_can_fail_closed(clock):
    limiter = RateLimiter(FakeRedis(broken=True), RULES, clock=clock, fail_open=False)

    with pytest.raises(RedisConnectionError):
        limiter.hit("default", "10.0.0.1")


def test_rules_must_define_default():
    with pytest.raises(ValueError):
        RateLimiter(FakeRedis(), {"write": {"requests": 1, "window_seconds": 1}})


def test_http_limit_returns_429_with_headers(client, limiter, marketplace):
    app.dependency_overrides[get_rate_limiter] = lambda: limiter

    responses = [client.get("/api/v1/hostels") for _ in range(4)]

    assert [r.status_code for r in responses] == [200, 200, 200, 429]
    assert responses[0].headers["X-RateLimit-Limit"] == "3"
    assert responses[0].headers["X-RateLimit-Remaining"] == "2"
    blocked = responses[-1]
    assert blocked.headers["Retry-After"] == "20"
    assert blocked.headers["X-RateLimit-Remaining"] == "0"
    assert blocked.json()["error"]["code"] == "RATE_LIMIT_EXCEEDED"


def test_forwarded_for_identifies_the_client(client, limiter, marketplace):
    app.dependency_overrides[get_rate_limiter] = lambda: limiter

    for _ in range(3):
        client.get("/api/v1/hostels", headers={"X-Forwarded-For": "203.0.113.5, 10.0.0.1"})

    assert client.get("/api/v1/hostels", headers={"X-Forwarded-For": "203.0.113.5"}).status_code == 429
    assert client.get("/api/v1/hostels", headers={"X-Forwarded-For": "203.0.113.6"}).status_code == 200
