"""Pytest configuration and fixtures."""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta

import pytest

from valhalla import create_app
from valhalla.seed import seed_demo_data
from valhalla.store import EntityStore


class FrozenClock:
    """Manually advanced clock for the store."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2025, 1, 15, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture
def clock():
    """Clock driving every timestamp the store hands out."""
    return FrozenClock()


@pytest.fixture
def store(clock):
    """Empty in-memory store."""
    return EntityStore(clock=clock)


@pytest.fixture
def app(store):
    """Create and configure a test application instance."""
    app = create_app("testing", store=store)

    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create a test client."""
    return app.test_client()


@pytest.fixture
def demo(store):
    """Seed the demo user with one staked and two unstaked items."""
    data = seed_demo_data(store)
    staked = next(item for item in data["items"] if item.is_staked)
    unstaked = [item for item in data["items"] if not item.is_staked]
    return {"user": data["user"], "staked": staked, "unstaked": unstaked}


@pytest.fixture
def make_user(store):
    """Factory for users with a wallet and balance."""
    counter = {"n": 0}

    def _make_user(balance="0", wallet_address=None):
        counter["n"] += 1
        n = counter["n"]
        return store.create_user(
            username=f"user_{n}",
            wallet_address=wallet_address or f"0x{n:040x}",
            odin_balance=balance,
        )

    return _make_user


@pytest.fixture
def make_item(store):
    """Factory for items with unique token ids."""
    counter = {"n": 0}

    def _make_item(owner_id=None, rarity="Common", category="Shaman"):
        counter["n"] += 1
        n = counter["n"]
        return store.create_item(
            token_id=9000 + n,
            name=f"Test Viking #{9000 + n}",
            image_url=f"https://example.com/{n}.png",
            rarity=rarity,
            category=category,
            price="1.5",
            attributes={"strength": 50},
            owner_id=owner_id,
        )

    return _make_item


@pytest.fixture
def run_concurrently():
    """Call ``fn`` from several threads released at the same moment."""

    def _run(fn, threads=8):
        barrier = threading.Barrier(threads)

        def call():
            barrier.wait()
            return fn()

        with ThreadPoolExecutor(max_workers=threads) as pool:
            futures = [pool.submit(call) for _ in range(threads)]
            return [future.result() for future in futures]

    return _run
