import redis

from taskhub import ratelimit
from taskhub.config import settings

class _FakePipeline:
    def __init__(self, fake: "_FakeRedis"):
        self.fake = fake
        self.key = None

    def incr(self, key):
        self.key = key

    def expire(self, key, seconds, nx=False):
        assert nx is True

    def execute(self):
        if self.fake.down:
            raise redis.ConnectionError("connection refused")
        count = self.fake.counts.get(self.key, self.fake.start) + 1
        self.fake.counts[self.key] = count
        return [count, True]

class _FakeRedis:
    def __init__(self, start: int = 0, down: bool = False):
        self.start = start
        self.down = down
        self.counts: dict[str, int] = {}

    def pipeline(self):
        return _FakePipeline(self)

def _login(client):
    return client.post("/auth/login", json={"email": "nobody@example.com", "password": "x"})

def test_login_is_limited_per_window(client, monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_enabled", True)
    fake = _FakeRedis(start=settings.rate_limit_login_per_min - 1)
    monkeypatch.setattr(ratelimit, "redis_client", fake)

    r = _login(client)
    assert r.status_code == 200
    assert r.json()["message"] == "User not found"

    r = _login(client)
    assert r.status_code == 429
    assert r.json()["detail"] == "rate_limited"
    assert [k.split(":")[:3] for k in fake.counts] == [["rl", "auth", "login"]]

def test_limiter_fails_open_without_redis(client, monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_enabled", True)
    monkeypatch.setattr(ratelimit, "redis_client", _FakeRedis(down=True))

    r = _login(client)
    assert r.status_code == 200
    assert r.json()["success"] is False

def test_limiter_off_by_setting(client, monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_enabled", False)
    fake = _FakeRedis(start=10_000)
    monkeypatch.setattr(ratelimit, "redis_client", fake)

    assert _login(client).status_code == 200
    assert fake.counts == {}
