"""
Session module for Sigsession.

Sessions live in Redis under session:{id} with a PX TTL equal to the
session duration. Redis is the only clock consulted for remaining lifetime:
get_session() reports PTTL rather than recomputing expiry - now().
"""

import json
import logging
import time
import uuid
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Optional

from redis.exceptions import RedisError

from ...errors import StoreError, ValidationError

logger = logging.getLogger(__name__)

# 24 hours in milliseconds
SESSION_DURATION_MS = 24 * 60 * 60 * 1000

SESSION_KEY_PREFIX = "session:"


def session_key(session_id: str) -> str:
    """Namespaced Redis key for a session id."""
    return f"{SESSION_KEY_PREFIX}{session_id}"


def now_ms() -> int:
    """Milliseconds since epoch."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class SessionRecord:
    """A session as created. Immutable once written."""

    session_id: str
    address: str
    start: int
    expiry: int

    def to_payload(self) -> str:
        """Serialize the stored part of the record (the id is the key)."""
        return json.dumps({"address": self.address, "start": self.start, "expiry": self.expiry})


@dataclass(frozen=True)
class SessionView:
    """A live session as read back, with the store's remaining lifetime."""

    session_id: str
    address: str
    start: int
    expiry: int
    remaining_ms: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SessionModule:
    """
    Manages signature-authenticated sessions in Redis.

    Stateless in-process: every operation is a single atomic Redis command
    (SET PX, GET, PTTL, DEL) and failures surface as StoreError without retry.
    """

    def __init__(
        self,
        redis_client,
        clock: Optional[Callable[[], int]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize session module.

        Args:
            redis_client: Async Redis client (decode_responses=True)
            clock: Returns milliseconds since epoch; defaults to wall clock
            id_factory: Returns a new unguessable session id; defaults to UUID4
        """
        self.redis = redis_client
        self.clock = clock or now_ms
        self.id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self.duration_ms = SESSION_DURATION_MS

    async def create_session(self, address: str) -> SessionRecord:
        """
        Create a session for an already verified address.

        Callers must only pass addresses that passed signature verification.

        Args:
            address: Verified signer address (stored lower-cased)

        Returns:
            The full SessionRecord

        Raises:
            ValidationError: If address is empty
            StoreError: If Redis rejects or cannot perform the write
        """
        if not address:
            raise ValidationError("address is required")

        start = self.clock()
        record = SessionRecord(
            session_id=self.id_factory(),
            address=address.lower(),
            start=start,
            expiry=start + self.duration_ms,
        )

        # Value and TTL in one SET so a session is never stored without expiry
        try:
            await self.redis.set(
                session_key(record.session_id), record.to_payload(), px=self.duration_ms
            )
        except RedisError as e:
            logger.error(f"Failed to store session for {record.address}: {e}")
            raise StoreError(f"Failed to create session: {e}") from e

        logger.info(f"Created session {record.session_id} for {record.address}")
        return record

    async def get_session(self, session_id: str) -> Optional[SessionView]:
        """
        Get a live session and its remaining lifetime.

        Args:
            session_id: Session identifier

        Returns:
            SessionView, or None if the session never existed, was deleted,
            or has expired

        Raises:
            ValidationError: If session_id is empty
            StoreError: If Redis fails or the stored record is corrupt
        """
        if not session_id:
            raise ValidationError("session id is required")

        key = session_key(session_id)
        try:
            raw = await self.redis.get(key)
            if raw is None:
                return None
            # -2: expired since the GET, -1: no TTL; neither is reported as negative
            remaining_ms = max(await self.redis.pttl(key), 0)
        except RedisError as e:
            logger.error(f"Failed to read session {session_id}: {e}")
            raise StoreError(f"Failed to read session: {e}") from e

        try:
            data = json.loads(raw)
            return SessionView(
                session_id=session_id,
                address=data["address"],
                start=int(data["start"]),
                expiry=int(data["expiry"]),
                remaining_ms=remaining_ms,
            )
        except (ValueError, TypeError, KeyError) as e:
            logger.error(f"Corrupt session record under {key}: {e}")
            raise StoreError(f"Corrupt session record: {e}") from e

    async def end_session(self, session_id: str) -> None:
        """
        Delete a session. Idempotent: a missing session is not an error.

        Raises:
            ValidationError: If session_id is empty
            StoreError: If Redis fails
        """
        if not session_id:
            raise ValidationError("session id is required")

        try:
            deleted = await self.redis.delete(session_key(session_id))
        except RedisError as e:
            logger.error(f"Failed to delete session {session_id}: {e}")
            raise StoreError(f"Failed to delete session: {e}") from e

        if deleted:
            logger.info(f"Deleted session {session_id}")
