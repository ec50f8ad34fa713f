from survey_backend.security import SessionStore


class FakeClock:
    def __init__(self, t: float = 0.0):
        self.t = t

    def __call__(self) -> float:
        return self.t


class TestSessionStore:
    """SessionStore 单元测试（注入时钟）"""

    def setup_method(self):
        self.clock = FakeClock(100.0)
        self.store = SessionStore(ttl_seconds=60, clock=self.clock)

    def test_issue_unique_tokens(self):
        tokens = {self.store.issue() for _ in range(20)}
        assert len(tokens) == 20
        assert len(self.store) == 20
        assert all(self.store.is_valid(t) for t in tokens)

    def test_unknown_and_empty_tokens_invalid(self):
        self.store.issue()
        assert not self.store.is_valid("nope")
        assert not self.store.is_valid("")
        assert not self.store.is_valid(None)

    def test_expiry_boundary(self):
        t = self.store.issue()
        self.clock.t += 59.9
        assert self.store.is_valid(t)
        self.clock.t += 0.1
        assert not self.store.is_valid(t)
        # dropped on lookup
        assert len(self.store) == 0

    def test_revoke(self):
        t = self.store.issue()
        assert self.store.revoke(t) is True
        assert self.store.revoke(t) is False
        assert not self.store.is_valid(t)

    def test_issue_drops_expired_tokens(self):
        old = self.store.issue()
        self.clock.t += 30
        fresh = self.store.issue()
        self.clock.t += 31
        newest = self.store.issue()
        # old expired and was never presented again; fresh is still inside its window
        assert len(self.store) == 2
        assert not self.store.is_valid(old)
        assert self.store.is_valid(fresh)
        assert self.store.is_valid(newest)

    def test_size_bounded_across_logins(self):
        """过期令牌即使从未再被使用，也不会无限堆积"""
        store = SessionStore(ttl_seconds=10, clock=self.clock)
        for _ in range(50):
            store.issue()
            self.clock.t += 100
        assert len(store) == 1

    def test_default_ttl_is_one_day(self):
        assert SessionStore().ttl_seconds == 86400
