from types import SimpleNamespace

from limits.storage import MemoryStorage

from chat_proxy.middleware import ClientRateLimiter, client_identity


def test_allows_up_to_limit_then_rejects() -> None:
    limiter = ClientRateLimiter(limit=3, window_seconds=60)

    decisions = [limiter.hit("10.0.0.1") for _ in range(4)]

    assert [d.allowed for d in decisions] == [True, True, True, False]
    assert [d.remaining for d in decisions] == [2, 1, 0, 0]
    assert all(d.limit == 3 for d in decisions)
    assert 0 < decisions[-1].reset_after <= 60


def test_clients_are_counted_separately() -> None:
    limiter = ClientRateLimiter(limit=1, window_seconds=60)

    assert limiter.hit("10.0.0.1").allowed
    assert limiter.hit("10.0.0.2").allowed
    assert not limiter.hit("10.0.0.1").allowed


def test_window_starts_over_once_storage_is_cleared() -> None:
    storage = MemoryStorage()
    limiter = ClientRateLimiter(limit=1, window_seconds=60, storage=storage)

    assert limiter.hit("client").allowed
    assert not limiter.hit("client").allowed
    storage.reset()

    renewed = limiter.hit("client")
    assert renewed.allowed
    assert renewed.remaining == 0


def _request(host: str | None, forwarded: str | None = None):
    headers = {"X-Forwarded-For": forwarded} if forwarded else {}
    client = SimpleNamespace(host=host) if host else None
    return SimpleNamespace(client=client, headers=headers)


def test_client_identity() -> None:
    assert client_identity(_request("10.0.0.1")) == "10.0.0.1"
    assert client_identity(_request(None)) == "unknown"
    assert client_identity(_request("10.0.0.1", "203.0.113.7, 10.0.0.1")) == "10.0.0.1"
    assert (
        client_identity(_request("10.0.0.1", "203.0.113.7, 10.0.0.1"), trust_proxy=True)
        == "203.0.113.7"
    )
