# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Physician Calendar)
# Description: Redis-backed duration ledger storage.
# ============================================================================
"""Redis duration store.

All entries live in a single Redis hash: field = start timestamp, value =
JSON-serialised LedgerEntry. Redis failures are logged and degrade to
"no recorded duration", which the ledger already treats as the default.
"""

import logging
from typing import Any

import redis
from pydantic import ValidationError
from redis.exceptions import RedisError

from agenda.config.settings import Settings

from ...application.services.duration_ledger import LedgerEntry

logger = logging.getLogger(__name__)


class RedisDurationStore:
    """IDurationStore persisted in a Redis hash."""

    def __init__(self, client: Any, hash_key: str = "agenda:appointment_durations") -> None:
        self._client = client
        self._hash_key = hash_key

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisDurationStore":
        """Crea el store usando la configuración de Redis."""
        client = redis.Redis(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            db=settings.REDIS_DB,
            password=settings.REDIS_PASSWORD,
            decode_responses=True,
            socket_timeout=5.0,
            socket_connect_timeout=5.0,
        )
        return cls(client, settings.DURATION_LEDGER_REDIS_KEY)

    @staticmethod
    def _decode(raw: Any) -> LedgerEntry | None:
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        try:
            return LedgerEntry.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"Discarding malformed ledger entry: {e}")
            return None

    def get(self, key: str) -> LedgerEntry | None:
        try:
            return self._decode(self._client.hget(self._hash_key, key))
        except RedisError as e:
            logger.error(f"Error reading duration ledger from Redis: {e}")
            return None

    def put(self, entry: LedgerEntry) -> None:
        try:
            self._client.hset(self._hash_key, entry.key, entry.model_dump_json())
        except RedisError as e:
            logger.error(f"Error saving duration ledger entry to Redis: {e}")

    def delete(self, key: str) -> None:
        try:
            self._client.hdel(self._hash_key, key)
        except RedisError as e:
            logger.error(f"Error deleting duration ledger entry from Redis: {e}")

    def all(self) -> list[LedgerEntry]:
        try:
            raw_entries = self._client.hgetall(self._hash_key)
        except RedisError as e:
            logger.error(f"Error reading duration ledger from Redis: {e}")
            return []
        entries = []
        for raw in raw_entries.values():
            entry = self._decode(raw)
            if entry is not None:
                entries.append(entry)
        return entries

    def clear(self) -> None:
        try:
            self._client.delete(self._hash_key)
        except RedisError as e:
            logger.error(f"Error clearing duration ledger in Redis: {e}")
