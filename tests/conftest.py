"""
Shared pytest fixtures for Sigsession tests.

This module provides common fixtures including:
- FakeRedis: in-memory Redis with millisecond TTLs driven by a FakeClock
- Redis mocks for failure injection
- Signing helpers producing real personal_sign signatures
"""

import os
import sys
from typing import Callable, Dict, Optional, Tuple
from unittest.mock import AsyncMock

import pytest
from eth_account import Account
from eth_account.messages import encode_defunct

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sigsession.modules.session import SessionModule

# Deterministic test keys (never use outside tests)
ALICE_KEY = "0x" + "11" * 32
BOB_KEY = "0x" + "22" * 32


# =============================================================================
# In-memory Redis
# =============================================================================


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = 0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeRedis:
    """
    Async in-memory stand-in for the subset of redis.asyncio.Redis
    Sigsession uses (SET PX, GET, PTTL, DEL, PING).

    Keys expire lazily against the injected clock, like Redis does on access.
    """

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self._storage: Dict[str, Tuple[str, Optional[int]]] = {}
        self.closed = False

    def _live(self, key: str) -> Optional[Tuple[str, Optional[int]]]:
        entry = self._storage.get(key)
        if entry is None:
            return None
        _, expires_at = entry
        if expires_at is not None and expires_at <= self.clock():
            del self._storage[key]
            return None
        return entry

    async def set(self, key, value, ex=None, px=None, nx=False):
        if nx and self._live(key) is not None:
            return None
        ttl_ms = px if px is not None else (ex * 1000 if ex is not None else None)
        expires_at = self.clock() + ttl_ms if ttl_ms is not None else None
        self._storage[key] = (value, expires_at)
        return True

    async def get(self, key):
        entry = self._live(key)
        return entry[0] if entry else None

    async def pttl(self, key):
        entry = self._live(key)
        if entry is None:
            return -2
        _, expires_at = entry
        if expires_at is None:
            return -1
        return expires_at - self.clock()

    async def delete(self, *keys):
        count = 0
        for key in keys:
            if self._live(key) is not None:
                del self._storage[key]
                count += 1
        return count

    async def ping(self):
        return True

    async def aclose(self):
        self.closed = True


@pytest.fixture
def clock():
    """Clock starting at the epoch."""
    return FakeClock()


@pytest.fixture
def fake_redis(clock):
    """In-memory Redis sharing the test clock."""
    return FakeRedis(clock)


@pytest.fixture
def session_module(fake_redis, clock):
    """SessionModule over the in-memory Redis, on the same clock."""
    return SessionModule(fake_redis, clock=clock)


@pytest.fixture
def mock_redis():
    """Create a mock Redis client for async operations and failure injection."""
    redis = AsyncMock()
    redis.set = AsyncMock(return_value=True)
    redis.get = AsyncMock(return_value=None)
    redis.pttl = AsyncMock(return_value=-2)
    redis.delete = AsyncMock(return_value=0)
    redis.ping = AsyncMock(return_value=True)
    return redis


# =============================================================================
# Signing helpers
# =============================================================================


@pytest.fixture
def alice():
    return Account.from_key(ALICE_KEY)


@pytest.fixture
def bob():
    return Account.from_key(BOB_KEY)


@pytest.fixture
def sign() -> Callable:
    """Return a function signing a text message with an account as personal_sign does."""

    def _sign(account, message: str) -> str:
        signed = account.sign_message(encode_defunct(text=message))
        return "0x" + bytes(signed.signature).hex()

    return _sign
